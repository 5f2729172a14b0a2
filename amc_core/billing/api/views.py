# amc_core/billing/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from amc_core.billing.api.serializers import (
    InvoiceCreateSerializer,
    InvoiceItemCreateSerializer,
    InvoiceItemInputSerializer,
    InvoiceItemSerializer,
    InvoiceItemUpdateSerializer,
    InvoiceSerializer,
    InvoiceUpdateSerializer,
)
from amc_core.billing.models import Invoice, InvoiceItem
from amc_core.billing.selectors import invoice_items_filtered, invoices_filtered, invoices_qs
from amc_core.billing.services import InvoiceItemService, InvoiceService
from amc_core.billing.updates import InvoiceItemUpdate, InvoiceUpdate
from amc_core.common.api.pagination import paginate
from amc_core.common.api.params import int_or_none, path_id
from amc_core.common.patch import relation_ids
from amc_core.common.permissions import InvoicePermission


class InvoiceViewSet(viewsets.GenericViewSet):
    """
    Invoices:
    - list/retrieve
    - create (optionally with nested items)
    - partial_update / destroy
    - items: GET/POST
    """
    serializer_class = InvoiceSerializer
    queryset = Invoice.objects.none()
    permission_classes = [InvoicePermission]

    @extend_schema(
        tags=["Invoices"],
        responses={200: InvoiceSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="customer", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="status", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(
                name="search",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Matches invoice number.",
            ),
        ],
    )
    def list(self, request):
        qs = invoices_filtered(
            customer_id=int_or_none(request.query_params.get("customer"), "customer"),
            status=request.query_params.get("status"),
            search=request.query_params.get("search"),
        )
        return paginate(request, qs, InvoiceSerializer)

    @extend_schema(tags=["Invoices"], responses={200: InvoiceSerializer})
    def retrieve(self, request, pk=None):
        inv = invoices_qs().get(pk=path_id(pk))
        return Response(InvoiceSerializer(inv).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Invoices"],
        request=InvoiceCreateSerializer,
        responses={201: InvoiceSerializer},
    )
    def create(self, request):
        ser = InvoiceCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = relation_ids(ser.validated_data, "customer", "location")

        inv = InvoiceService.create(
            customer_id=data["customer_id"],
            location_id=data.get("location_id"),
            invoice_no=data["invoice_no"],
            invoice_date=data["invoice_date"],
            discount=data["discount"],
            status=data["status"],
            items=[relation_ids(item, "product") for item in data.get("items", [])],
        )
        return Response(InvoiceSerializer(invoices_qs().get(pk=inv.pk)).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        tags=["Invoices"],
        request=InvoiceUpdateSerializer,
        responses={200: InvoiceSerializer},
    )
    def partial_update(self, request, pk=None):
        ser = InvoiceUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        patch = InvoiceUpdate.from_data(relation_ids(ser.validated_data, "customer", "location"))
        inv = InvoiceService.update(invoice_id=path_id(pk), patch=patch)
        return Response(InvoiceSerializer(invoices_qs().get(pk=inv.pk)).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Invoices"], responses={204: None})
    def destroy(self, request, pk=None):
        InvoiceService.delete(invoice_id=path_id(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        tags=["Invoices"],
        request=InvoiceItemInputSerializer,
        responses={
            200: InvoiceItemSerializer(many=True),
            201: InvoiceItemSerializer,
        },
    )
    @action(detail=True, methods=["get", "post"], url_path="items")
    def items(self, request, pk=None):
        """
        /invoices/<invoice_id>/items/
        - GET: list items (creation order)
        - POST: add an item and recompute totals
        """
        invoice_id = path_id(pk)

        if request.method.lower() == "get":
            inv = Invoice.objects.get(pk=invoice_id)
            qs = inv.items.select_related("product").order_by("created_at", "id")
            return Response(InvoiceItemSerializer(qs, many=True).data, status=status.HTTP_200_OK)

        ser = InvoiceItemInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = relation_ids(ser.validated_data, "product")

        item = InvoiceItemService.create(
            invoice_id=invoice_id,
            product_id=data["product_id"],
            serial_no=data.get("serial_no", ""),
            quantity=data["quantity"],
            amount=data["amount"],
        )
        return Response(InvoiceItemSerializer(item).data, status=status.HTTP_201_CREATED)


class InvoiceItemViewSet(viewsets.GenericViewSet):
    serializer_class = InvoiceItemSerializer
    queryset = InvoiceItem.objects.none()
    permission_classes = [InvoicePermission]

    @extend_schema(
        tags=["Invoices"],
        responses={200: InvoiceItemSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="invoice", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        qs = invoice_items_filtered(invoice_id=int_or_none(request.query_params.get("invoice"), "invoice"))
        return paginate(request, qs, InvoiceItemSerializer)

    @extend_schema(tags=["Invoices"], responses={200: InvoiceItemSerializer})
    def retrieve(self, request, pk=None):
        item = invoice_items_filtered().get(pk=path_id(pk))
        return Response(InvoiceItemSerializer(item).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Invoices"],
        request=InvoiceItemCreateSerializer,
        responses={201: InvoiceItemSerializer},
    )
    def create(self, request):
        ser = InvoiceItemCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = relation_ids(ser.validated_data, "invoice", "product")

        item = InvoiceItemService.create(
            invoice_id=data["invoice_id"],
            product_id=data["product_id"],
            serial_no=data.get("serial_no", ""),
            quantity=data["quantity"],
            amount=data["amount"],
        )
        return Response(InvoiceItemSerializer(item).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        tags=["Invoices"],
        request=InvoiceItemUpdateSerializer,
        responses={200: InvoiceItemSerializer},
    )
    def partial_update(self, request, pk=None):
        ser = InvoiceItemUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        patch = InvoiceItemUpdate.from_data(relation_ids(ser.validated_data, "invoice", "product"))
        item = InvoiceItemService.update(item_id=path_id(pk), patch=patch)
        return Response(InvoiceItemSerializer(item).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Invoices"], responses={204: None})
    def destroy(self, request, pk=None):
        InvoiceItemService.delete(item_id=path_id(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)
