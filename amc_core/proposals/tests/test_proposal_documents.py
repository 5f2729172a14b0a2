# amc_core/proposals/tests/test_proposal_documents.py
import json

import httpx
import pytest
from django.core import mail

from amc_core.common.api.exceptions import (
    DocumentNotGenerated,
    ServiceNotConfigured,
    UpstreamServiceError,
)
from amc_core.proposals.integrations import DocumentServiceClient
from amc_core.proposals.models import AmcProposal, EmailRecord, ProposalDocument
from amc_core.proposals.services import ProposalDocumentService

pytestmark = pytest.mark.django_db

PDF_URL = "https://files.example.com/proposal.pdf"


def _client(handler):
    return DocumentServiceClient(
        url="https://script.example.com/exec",
        template_id="tpl-1",
        folder_id="folder-1",
        transport=httpx.MockTransport(handler),
    )


def _with_doclink(proposal):
    AmcProposal.objects.filter(pk=proposal.pk).update(doclink=PDF_URL)
    return proposal


def test_generate_document_stores_link_and_logs(proposal):
    seen = {}

    def handler(request):
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"status": "success", "pdfUrl": PDF_URL})

    doc = ProposalDocumentService.generate_document(
        proposal_id=proposal.id,
        actor_email="admin@example.com",
        client=_client(handler),
    )

    assert doc.doclink == PDF_URL
    assert doc.created_by == "admin@example.com"
    assert AmcProposal.objects.get(pk=proposal.pk).doclink == PDF_URL
    assert seen["body"]["templateId"] == "tpl-1"
    assert seen["body"]["folderId"] == "folder-1"
    assert seen["body"]["proposalData"]["proposalno"] == "AMC-001"


def test_generate_document_upstream_error(proposal):
    def handler(request):
        return httpx.Response(200, json={"status": "error", "message": "template missing"})

    with pytest.raises(UpstreamServiceError) as exc:
        ProposalDocumentService.generate_document(
            proposal_id=proposal.id,
            actor_email="admin@example.com",
            client=_client(handler),
        )

    assert "template missing" in str(exc.value.detail)
    assert ProposalDocument.objects.count() == 0
    assert AmcProposal.objects.get(pk=proposal.pk).doclink == ""


def test_generate_document_http_failure(proposal):
    def handler(request):
        return httpx.Response(500, text="boom")

    with pytest.raises(UpstreamServiceError):
        ProposalDocumentService.generate_document(
            proposal_id=proposal.id,
            actor_email="admin@example.com",
            client=_client(handler),
        )


def test_generate_document_requires_configuration(proposal, settings):
    settings.DOCUMENT_SERVICE = {"URL": "", "TEMPLATE_ID": "", "FOLDER_ID": ""}

    with pytest.raises(ServiceNotConfigured):
        ProposalDocumentService.generate_document(proposal_id=proposal.id, actor_email="a@example.com")


def test_send_email_requires_document(proposal, mail_setup):
    with pytest.raises(DocumentNotGenerated):
        ProposalDocumentService.send_email(
            proposal_id=proposal.id,
            email="client@example.com",
            actor_email="admin@example.com",
        )

    assert EmailRecord.objects.count() == 0


def test_send_email_without_mail_setup(proposal):
    _with_doclink(proposal)

    with pytest.raises(ServiceNotConfigured):
        ProposalDocumentService.send_email(
            proposal_id=proposal.id,
            email="client@example.com",
            actor_email="admin@example.com",
        )

    assert EmailRecord.objects.count() == 0


def test_send_email_attaches_pdf_and_records(proposal, mail_setup):
    _with_doclink(proposal)
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"%PDF-1.4 test"))

    record = ProposalDocumentService.send_email(
        proposal_id=proposal.id,
        email="client@example.com",
        actor_email="admin@example.com",
        message="Please review.",
        transport=transport,
    )

    assert record.status == "sent"
    assert record.message == "Please review."
    assert record.sent_by == "admin@example.com"

    assert len(mail.outbox) == 1
    sent = mail.outbox[0]
    assert sent.subject == "AMC Proposal AMC-001"
    assert sent.to == ["client@example.com"]
    assert sent.from_email == '"AMC Desk" <amc@example.com>'
    assert sent.attachments[0][0] == "Proposal_AMC-001.pdf"
    assert sent.attachments[0][1] == b"%PDF-1.4 test"
    assert "Acme Labs" in sent.alternatives[0][0]


def test_send_email_failure_is_recorded(proposal, mail_setup):
    _with_doclink(proposal)
    transport = httpx.MockTransport(lambda request: httpx.Response(404))

    with pytest.raises(UpstreamServiceError) as exc:
        ProposalDocumentService.send_email(
            proposal_id=proposal.id,
            email="client@example.com",
            actor_email="admin@example.com",
            transport=transport,
        )

    record = EmailRecord.objects.get()
    assert record.status == "failed"
    assert record.message == "Failed to download PDF attachment"
    assert exc.value.details == {"email_record_id": record.id}
    assert len(mail.outbox) == 0
