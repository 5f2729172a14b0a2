# amc_core/mailing/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from amc_core.common.permissions import MailSetupPermission
from amc_core.mailing.api.serializers import MailSetupSerializer
from amc_core.mailing.services import MailSetupService


class MailSetupView(APIView):
    """
    /mail-setup/
    - GET: current SMTP settings (null when not configured)
    - PUT: create or replace them (admin only)
    """
    permission_classes = [MailSetupPermission]

    @extend_schema(tags=["Mail setup"], responses={200: MailSetupSerializer})
    def get(self, request):
        setup = MailSetupService.get()
        data = MailSetupSerializer(setup).data if setup is not None else None
        return Response(data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Mail setup"], request=MailSetupSerializer, responses={200: MailSetupSerializer})
    def put(self, request):
        current = MailSetupService.get()
        ser = MailSetupSerializer(instance=current, data=request.data)
        ser.is_valid(raise_exception=True)

        setup = MailSetupService.upsert(**ser.validated_data)
        return Response(MailSetupSerializer(setup).data, status=status.HTTP_200_OK)
