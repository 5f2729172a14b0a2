# amc_core/proposals/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from amc_core.common.api.pagination import paginate
from amc_core.common.api.params import int_or_none, path_id
from amc_core.common.patch import relation_ids
from amc_core.common.permissions import ProposalPermission
from amc_core.proposals.api.serializers import (
    AmcProposalCreateSerializer,
    AmcProposalSerializer,
    AmcProposalUpdateSerializer,
    EmailRecordSerializer,
    ProposalDocumentSerializer,
    ProposalItemCreateSerializer,
    ProposalItemInputSerializer,
    ProposalItemSerializer,
    ProposalItemUpdateSerializer,
    SendEmailSerializer,
)
from amc_core.proposals.models import AmcProposal, EmailRecord, ProposalDocument, ProposalItem
from amc_core.proposals.selectors import (
    email_records_filtered,
    proposal_documents_filtered,
    proposal_items_filtered,
    proposals_filtered,
    proposals_qs,
)
from amc_core.proposals.services import (
    AmcProposalService,
    ProposalDocumentService,
    ProposalItemService,
)
from amc_core.proposals.updates import AmcProposalUpdate, ProposalItemUpdate

_item_relations = ("product", "location", "invoice")


class AmcProposalViewSet(viewsets.GenericViewSet):
    """
    AMC proposals:
    - list/retrieve/create/partial_update/destroy
    - items: GET/POST
    - generate_document: render PDF via the document service
    - send_email: mail the generated PDF
    """
    serializer_class = AmcProposalSerializer
    queryset = AmcProposal.objects.none()
    permission_classes = [ProposalPermission]

    @extend_schema(
        tags=["Proposals"],
        responses={200: AmcProposalSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="customer", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="status", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(
                name="search",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Matches proposal or contract number.",
            ),
        ],
    )
    def list(self, request):
        qs = proposals_filtered(
            customer_id=int_or_none(request.query_params.get("customer"), "customer"),
            status=request.query_params.get("status"),
            search=request.query_params.get("search"),
        )
        return paginate(request, qs, AmcProposalSerializer)

    @extend_schema(tags=["Proposals"], responses={200: AmcProposalSerializer})
    def retrieve(self, request, pk=None):
        proposal = proposals_qs().get(pk=path_id(pk))
        return Response(AmcProposalSerializer(proposal).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Proposals"],
        request=AmcProposalCreateSerializer,
        responses={201: AmcProposalSerializer},
    )
    def create(self, request):
        ser = AmcProposalCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        proposal = AmcProposalService.create(**relation_ids(ser.validated_data, "customer"))
        return Response(
            AmcProposalSerializer(proposals_qs().get(pk=proposal.pk)).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        tags=["Proposals"],
        request=AmcProposalUpdateSerializer,
        responses={200: AmcProposalSerializer},
    )
    def partial_update(self, request, pk=None):
        ser = AmcProposalUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        patch = AmcProposalUpdate.from_data(relation_ids(ser.validated_data, "customer"))
        proposal = AmcProposalService.update(proposal_id=path_id(pk), patch=patch)
        return Response(AmcProposalSerializer(proposals_qs().get(pk=proposal.pk)).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Proposals"], responses={204: None})
    def destroy(self, request, pk=None):
        AmcProposalService.delete(proposal_id=path_id(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        tags=["Proposals"],
        request=ProposalItemInputSerializer,
        responses={
            200: ProposalItemSerializer(many=True),
            201: ProposalItemSerializer,
        },
    )
    @action(detail=True, methods=["get", "post"], url_path="items")
    def items(self, request, pk=None):
        proposal_id = path_id(pk)

        if request.method.lower() == "get":
            proposal = AmcProposal.objects.get(pk=proposal_id)
            qs = proposal.items.select_related("product", "location").order_by("created_at", "id")
            return Response(ProposalItemSerializer(qs, many=True).data, status=status.HTTP_200_OK)

        ser = ProposalItemInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        item = ProposalItemService.create(
            proposal_id=proposal_id,
            **relation_ids(ser.validated_data, *_item_relations),
        )
        return Response(ProposalItemSerializer(item).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Proposals"], request=None, responses={201: ProposalDocumentSerializer})
    @action(detail=True, methods=["post"], url_path="generate_document")
    def generate_document(self, request, pk=None):
        document = ProposalDocumentService.generate_document(
            proposal_id=path_id(pk),
            actor_email=getattr(request.user, "email", "") or "",
        )
        return Response(ProposalDocumentSerializer(document).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Proposals"], request=SendEmailSerializer, responses={201: EmailRecordSerializer})
    @action(detail=True, methods=["post"], url_path="send_email")
    def send_email(self, request, pk=None):
        ser = SendEmailSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        record = ProposalDocumentService.send_email(
            proposal_id=path_id(pk),
            email=ser.validated_data["email"],
            message=ser.validated_data.get("message", ""),
            actor_email=getattr(request.user, "email", "") or "",
        )
        return Response(EmailRecordSerializer(record).data, status=status.HTTP_201_CREATED)


class ProposalItemViewSet(viewsets.GenericViewSet):
    serializer_class = ProposalItemSerializer
    queryset = ProposalItem.objects.none()
    permission_classes = [ProposalPermission]

    @extend_schema(
        tags=["Proposals"],
        responses={200: ProposalItemSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="proposal", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        qs = proposal_items_filtered(proposal_id=int_or_none(request.query_params.get("proposal"), "proposal"))
        return paginate(request, qs, ProposalItemSerializer)

    @extend_schema(tags=["Proposals"], responses={200: ProposalItemSerializer})
    def retrieve(self, request, pk=None):
        item = proposal_items_filtered().get(pk=path_id(pk))
        return Response(ProposalItemSerializer(item).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Proposals"],
        request=ProposalItemCreateSerializer,
        responses={201: ProposalItemSerializer},
    )
    def create(self, request):
        ser = ProposalItemCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        item = ProposalItemService.create(**relation_ids(ser.validated_data, "proposal", *_item_relations))
        return Response(ProposalItemSerializer(item).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        tags=["Proposals"],
        request=ProposalItemUpdateSerializer,
        responses={200: ProposalItemSerializer},
    )
    def partial_update(self, request, pk=None):
        ser = ProposalItemUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        patch = ProposalItemUpdate.from_data(relation_ids(ser.validated_data, "proposal", *_item_relations))
        item = ProposalItemService.update(item_id=path_id(pk), patch=patch)
        return Response(ProposalItemSerializer(item).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Proposals"], responses={204: None})
    def destroy(self, request, pk=None):
        ProposalItemService.delete(item_id=path_id(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)


_proposalno_param = OpenApiParameter(
    name="proposalno",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.QUERY,
    required=False,
)


class ProposalDocumentViewSet(viewsets.GenericViewSet):
    """Generated documents (read-only log)."""
    serializer_class = ProposalDocumentSerializer
    queryset = ProposalDocument.objects.none()
    permission_classes = [ProposalPermission]

    @extend_schema(tags=["Proposals"], parameters=[_proposalno_param])
    def list(self, request):
        qs = proposal_documents_filtered(proposalno=request.query_params.get("proposalno"))
        return paginate(request, qs, ProposalDocumentSerializer)

    @extend_schema(tags=["Proposals"])
    def retrieve(self, request, pk=None):
        doc = ProposalDocument.objects.get(pk=path_id(pk))
        return Response(ProposalDocumentSerializer(doc).data, status=status.HTTP_200_OK)


class EmailRecordViewSet(viewsets.GenericViewSet):
    """Email delivery attempts (read-only log)."""
    serializer_class = EmailRecordSerializer
    queryset = EmailRecord.objects.none()
    permission_classes = [ProposalPermission]

    @extend_schema(tags=["Proposals"], parameters=[_proposalno_param])
    def list(self, request):
        qs = email_records_filtered(proposalno=request.query_params.get("proposalno"))
        return paginate(request, qs, EmailRecordSerializer)

    @extend_schema(tags=["Proposals"])
    def retrieve(self, request, pk=None):
        record = EmailRecord.objects.get(pk=path_id(pk))
        return Response(EmailRecordSerializer(record).data, status=status.HTTP_200_OK)
