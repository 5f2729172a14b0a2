# amc_core/customers/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view

from amc_core.common.views import MasterDataViewSet
from amc_core.customers.api.serializers import CustomerSerializer, LocationSerializer
from amc_core.customers.models import Customer, Location


@extend_schema_view(
    list=extend_schema(tags=["Customers"]),
    retrieve=extend_schema(tags=["Customers"]),
    create=extend_schema(tags=["Customers"]),
    partial_update=extend_schema(tags=["Customers"]),
    destroy=extend_schema(tags=["Customers"]),
)
class CustomerViewSet(MasterDataViewSet):
    queryset = Customer.objects.all()
    serializer_class = CustomerSerializer
    filterset_fields = ["status"]
    search_fields = ["name", "email", "contact_person"]


@extend_schema_view(
    list=extend_schema(tags=["Customers"]),
    retrieve=extend_schema(tags=["Customers"]),
    create=extend_schema(tags=["Customers"]),
    partial_update=extend_schema(tags=["Customers"]),
    destroy=extend_schema(tags=["Customers"]),
)
class LocationViewSet(MasterDataViewSet):
    """Customer sites."""
    queryset = Location.objects.select_related("customer")
    serializer_class = LocationSerializer
    filterset_fields = ["status", "customer"]
    search_fields = ["display_name", "location", "email", "city"]
    ordering_fields = ["created_at", "display_name"]
