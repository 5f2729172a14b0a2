# amc_core/proposals/services.py
from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

import httpx
from django.db import IntegrityError, transaction
from django.template.loader import render_to_string
from rest_framework.exceptions import NotFound, ValidationError

from amc_core.common.api.exceptions import DocumentNotGenerated, DuplicateEntry, UpstreamServiceError
from amc_core.common.money import ZERO, ensure_money, ensure_percentage, ensure_positive_int, quantize_money
from amc_core.mailing.services import MailSetupService, send_html_mail
from amc_core.proposals.integrations import DocumentServiceClient, download_file
from amc_core.proposals.models import (
    AmcProposal,
    EmailRecord,
    EmailStatus,
    ProposalDocument,
    ProposalItem,
    ProposalStatus,
)
from amc_core.proposals.updates import AmcProposalUpdate, ProposalItemUpdate
from amc_core.totals.engine import DocumentKind, TotalsEngine, get_engine

logger = logging.getLogger(__name__)


def _ensure_proposalno_free(proposalno: str, *, exclude_id: int | None = None) -> None:
    qs = AmcProposal.objects.filter(proposalno=proposalno)
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    if qs.exists():
        raise DuplicateEntry("Proposal number already exists.")


def _ensure_period(start: date, end: date) -> None:
    if start and end and end < start:
        raise ValidationError({"amc_end_date": "AMC end date must be on or after the start date."})


class AmcProposalService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        proposalno: str,
        proposaldate: date,
        amc_start_date: date,
        amc_end_date: date,
        customer_id: int,
        contract_no: str = "",
        billing_address: str = "",
        terms_conditions: str = "",
        additional_charge: Decimal = ZERO,
        discount: Decimal = ZERO,
        tax_rate: Decimal = ZERO,
        proposal_status: str = ProposalStatus.NEW,
    ) -> AmcProposal:
        """
        Derived totals start at zero and are filled in when items are added.
        """
        proposalno = (proposalno or "").strip()
        if not proposalno:
            raise ValidationError({"proposalno": "This field is required."})
        _ensure_proposalno_free(proposalno)
        _ensure_period(amc_start_date, amc_end_date)

        try:
            with transaction.atomic():
                proposal = AmcProposal.objects.create(
                    proposalno=proposalno,
                    proposaldate=proposaldate,
                    amc_start_date=amc_start_date,
                    amc_end_date=amc_end_date,
                    customer_id=customer_id,
                    contract_no=contract_no or "",
                    billing_address=billing_address or "",
                    terms_conditions=terms_conditions or "",
                    additional_charge=ensure_money(additional_charge, "additional_charge"),
                    discount=ensure_money(discount, "discount"),
                    tax_rate=quantize_money(ensure_percentage(tax_rate, "tax_rate")),
                    proposal_status=proposal_status,
                    total=ZERO,
                    tax_amount=ZERO,
                    grand_total=ZERO,
                )
        except IntegrityError:
            raise DuplicateEntry("Proposal number already exists.")

        logger.info("Proposal %s created (id=%s)", proposal.proposalno, proposal.id)
        return proposal

    @staticmethod
    @transaction.atomic
    def update(
        *,
        proposal_id: int,
        patch: AmcProposalUpdate,
        engine: TotalsEngine | None = None,
    ) -> AmcProposal:
        proposal = AmcProposal.objects.select_for_update().get(pk=proposal_id)

        changes = patch.provided()
        if not changes:
            return proposal

        if patch.is_set("proposalno"):
            new_no = (patch.proposalno or "").strip()
            if not new_no:
                raise ValidationError({"proposalno": "This field may not be blank."})
            # renaming to the current number is a no-op, not a collision
            if new_no != proposal.proposalno:
                _ensure_proposalno_free(new_no, exclude_id=proposal.id)
            changes["proposalno"] = new_no

        if patch.is_set("customer_id") and patch.customer_id is None:
            raise ValidationError({"customer": "This field may not be null."})
        if patch.is_set("additional_charge"):
            changes["additional_charge"] = ensure_money(patch.additional_charge, "additional_charge")
        if patch.is_set("discount"):
            changes["discount"] = ensure_money(patch.discount, "discount")
        if patch.is_set("tax_rate"):
            changes["tax_rate"] = quantize_money(ensure_percentage(patch.tax_rate, "tax_rate"))
        for name in ("contract_no", "billing_address", "terms_conditions"):
            if patch.is_set(name):
                changes[name] = changes[name] or ""

        for name, value in changes.items():
            setattr(proposal, name, value)
        _ensure_period(proposal.amc_start_date, proposal.amc_end_date)

        try:
            with transaction.atomic():
                proposal.save(update_fields=[*changes.keys(), "updated_at"])
        except IntegrityError:
            raise DuplicateEntry("Proposal number already exists.")

        if patch.touches_totals:
            (engine or get_engine()).on_parent_fields_changed(DocumentKind.PROPOSAL, proposal.id)
            proposal.refresh_from_db()

        return proposal

    @staticmethod
    @transaction.atomic
    def delete(*, proposal_id: int) -> None:
        proposal = AmcProposal.objects.select_for_update().get(pk=proposal_id)
        proposal.delete()
        logger.info("Proposal %s deleted (id=%s)", proposal.proposalno, proposal_id)


class ProposalItemService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        proposal_id: int,
        product_id: int,
        amount: Decimal,
        rate: Decimal = ZERO,
        quantity: int = 1,
        location_id: int | None = None,
        invoice_id: int | None = None,
        serial_no: str = "",
        sac_code: str = "",
        engine: TotalsEngine | None = None,
    ) -> ProposalItem:
        if not AmcProposal.objects.filter(pk=proposal_id).exists():
            raise NotFound("AmcProposal not found.")

        item = ProposalItem.objects.create(
            proposal_id=proposal_id,
            product_id=product_id,
            location_id=location_id,
            invoice_id=invoice_id,
            serial_no=serial_no or "",
            sac_code=sac_code or "",
            quantity=ensure_positive_int(quantity),
            rate=ensure_money(rate, "rate"),
            amount=ensure_money(amount),
        )

        (engine or get_engine()).on_item_created(DocumentKind.PROPOSAL, proposal_id)
        return item

    @staticmethod
    @transaction.atomic
    def update(
        *,
        item_id: int,
        patch: ProposalItemUpdate,
        engine: TotalsEngine | None = None,
    ) -> ProposalItem:
        """
        Moving an item (proposal_id change) recomputes the proposal it left
        and the one it joined.
        """
        item = ProposalItem.objects.select_for_update().get(pk=item_id)
        previous_proposal_id = item.proposal_id

        changes = patch.provided()
        if not changes:
            return item

        if patch.is_set("proposal_id"):
            if patch.proposal_id is None:
                raise ValidationError({"proposal": "This field may not be null."})
            if not AmcProposal.objects.filter(pk=patch.proposal_id).exists():
                raise NotFound("AmcProposal not found.")
        if patch.is_set("product_id") and patch.product_id is None:
            raise ValidationError({"product": "This field may not be null."})
        if patch.is_set("quantity"):
            changes["quantity"] = ensure_positive_int(patch.quantity)
        if patch.is_set("rate"):
            changes["rate"] = ensure_money(patch.rate, "rate")
        if patch.is_set("amount"):
            changes["amount"] = ensure_money(patch.amount)
        for name in ("serial_no", "sac_code"):
            if patch.is_set(name):
                changes[name] = changes[name] or ""

        for name, value in changes.items():
            setattr(item, name, value)
        item.save(update_fields=[*changes.keys(), "updated_at"])

        if patch.touches_totals:
            (engine or get_engine()).on_item_updated(
                DocumentKind.PROPOSAL,
                item.proposal_id,
                previous_parent_id=previous_proposal_id,
            )
        return item

    @staticmethod
    @transaction.atomic
    def delete(*, item_id: int, engine: TotalsEngine | None = None) -> None:
        item = ProposalItem.objects.select_for_update().get(pk=item_id)
        proposal_id = item.proposal_id
        item.delete()

        (engine or get_engine()).on_item_deleted(DocumentKind.PROPOSAL, proposal_id)


# -------------------------------------------------------------------
# Document generation / email delivery
# -------------------------------------------------------------------

def _dmy(value: date | None) -> str:
    return value.strftime("%d/%m/%Y") if value else ""


def build_document_payload(proposal: AmcProposal) -> dict:
    """
    Flat proposal snapshot sent to the document template.
    Keys follow the template placeholders.
    """
    items = (
        proposal.items.select_related("location", "product")
        .order_by("created_at", "id")
    )
    return {
        "proposalno": proposal.proposalno,
        "proposaldate": _dmy(proposal.proposaldate),
        "amcstartdate": _dmy(proposal.amc_start_date),
        "amcenddate": _dmy(proposal.amc_end_date),
        "customerName": proposal.customer.name,
        "contactPerson": proposal.customer.contact_person,
        "contractno": proposal.contract_no or "",
        "billingaddress": proposal.billing_address or "",
        "items": [
            {
                "location": item.location.display_name if item.location else None,
                "product": item.product.name,
                "serialno": item.serial_no,
                "saccode": item.sac_code,
                "quantity": item.quantity,
                "rate": float(item.rate),
                "amount": float(item.amount),
            }
            for item in items
        ],
        "total": float(proposal.total),
        "additionalcharge": float(proposal.additional_charge),
        "discount": float(proposal.discount),
        "taxrate": float(proposal.tax_rate),
        "taxamount": float(proposal.tax_amount),
        "grandtotal": float(proposal.grand_total),
        "termsconditions": proposal.terms_conditions or "",
    }


class ProposalDocumentService:
    @staticmethod
    def generate_document(
        *,
        proposal_id: int,
        actor_email: str,
        client: DocumentServiceClient | None = None,
    ) -> ProposalDocument:
        """
        Render the proposal to PDF via the document service, store the link
        on the proposal and log a ProposalDocument row.
        """
        proposal = AmcProposal.objects.select_related("customer").get(pk=proposal_id)

        doclink = (client or DocumentServiceClient.from_settings()).generate(build_document_payload(proposal))

        with transaction.atomic():
            AmcProposal.objects.filter(pk=proposal.pk).update(doclink=doclink)
            document = ProposalDocument.objects.create(
                proposalno=proposal.proposalno,
                doclink=doclink,
                created_by=actor_email or "Unknown",
            )

        logger.info("Proposal %s document generated: %s", proposal.proposalno, doclink)
        return document

    @staticmethod
    def send_email(
        *,
        proposal_id: int,
        email: str,
        actor_email: str,
        message: str = "",
        transport: httpx.BaseTransport | None = None,
    ) -> EmailRecord:
        """
        Mail the generated PDF to `email`.

        Every attempt is logged as an EmailRecord; a failed delivery is
        recorded first and then raised as UpstreamServiceError.
        """
        proposal = AmcProposal.objects.select_related("customer").get(pk=proposal_id)
        if not proposal.doclink:
            raise DocumentNotGenerated()

        setup = MailSetupService.require()

        status = EmailStatus.SENT
        error = ""
        try:
            pdf = download_file(proposal.doclink, transport=transport)
            html = render_to_string(
                "proposals/email/proposal.html",
                {
                    "proposalno": proposal.proposalno,
                    "customer_name": proposal.customer.name,
                    "message": message,
                },
            )
            send_html_mail(
                setup=setup,
                to=email,
                subject=f"AMC Proposal {proposal.proposalno}",
                html=html,
                attachment_name=f"Proposal_{proposal.proposalno}.pdf",
                attachment=pdf,
            )
        except (UpstreamServiceError, OSError, ValueError) as exc:
            status = EmailStatus.FAILED
            error = str(getattr(exc, "detail", exc))
            logger.error("Proposal %s email to %s failed: %s", proposal.proposalno, email, error)

        record = EmailRecord.objects.create(
            proposalno=proposal.proposalno,
            email=email,
            status=status,
            sent_by=actor_email or "Unknown",
            message=message or error,
        )

        if status == EmailStatus.FAILED:
            raise UpstreamServiceError(
                f"Failed to send email: {error}",
                details={"email_record_id": record.id},
            )
        return record
