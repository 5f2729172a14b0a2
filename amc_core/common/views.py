# amc_core/common/views.py
from __future__ import annotations

from django.utils import timezone
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from amc_core.common.permissions import MasterDataPermission


class MasterDataViewSet(viewsets.ModelViewSet):
    """
    Base ViewSet for plain master records (customers, sites, brands, ...).

    Subclasses set queryset/serializer_class and their filter/search fields.
    Deleting a still-referenced row raises ProtectedError, which the global
    handler reports as `protected`.
    """
    permission_classes = [MasterDataPermission]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]
    ordering_fields = ["created_at", "name"]
    ordering = ["-created_at"]


class HealthView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(tags=["Health"], responses={200: OpenApiTypes.OBJECT})
    def get(self, request):
        return Response(
            {"status": "ok", "server_time": timezone.now().isoformat()},
            status=status.HTTP_200_OK,
        )
