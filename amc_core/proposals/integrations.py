# amc_core/proposals/integrations.py
"""
Outbound HTTP for proposals:
- document service (Apps Script web app filling a Docs template -> PDF URL)
- PDF download for email attachments

Failures surface as UpstreamServiceError; configuration gaps as ServiceNotConfigured.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx
from django.conf import settings

from amc_core.common.api.exceptions import ServiceNotConfigured, UpstreamServiceError

logger = logging.getLogger(__name__)


class DocumentServiceClient:
    def __init__(
        self,
        *,
        url: str,
        template_id: str,
        folder_id: str,
        timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = url
        self.template_id = template_id
        self.folder_id = folder_id
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, *, transport: httpx.BaseTransport | None = None) -> "DocumentServiceClient":
        cfg = getattr(settings, "DOCUMENT_SERVICE", {}) or {}
        return cls(
            url=cfg.get("URL", ""),
            template_id=cfg.get("TEMPLATE_ID", ""),
            folder_id=cfg.get("FOLDER_ID", ""),
            timeout=float(cfg.get("TIMEOUT", 60)),
            transport=transport,
        )

    def _ensure_configured(self) -> None:
        if not (self.url and self.template_id and self.folder_id):
            raise ServiceNotConfigured("Document template or folder not configured.")

    def generate(self, proposal_data: dict[str, Any]) -> str:
        """
        POST {templateId, folderId, proposalData}; expects {status, pdfUrl}.
        Returns the PDF URL.
        """
        self._ensure_configured()

        body = {
            "templateId": self.template_id,
            "folderId": self.folder_id,
            "proposalData": proposal_data,
        }

        try:
            # Apps Script answers with a redirect to the actual result
            with httpx.Client(timeout=self.timeout, transport=self.transport, follow_redirects=True) as client:
                r = client.post(self.url, json=body)
                r.raise_for_status()
                result = r.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Document service call failed: %s", exc)
            raise UpstreamServiceError(f"Failed to generate proposal document: {exc}")

        if not isinstance(result, dict):
            raise UpstreamServiceError("Failed to generate proposal document: unexpected response.")

        if result.get("status") == "error":
            message = result.get("message") or "document service reported an error"
            logger.warning("Document service error: %s", message)
            raise UpstreamServiceError(f"Failed to generate proposal document: {message}")

        pdf_url = result.get("pdfUrl")
        if not pdf_url:
            raise UpstreamServiceError("Failed to generate proposal document: no PDF URL returned.")

        return pdf_url


def download_file(url: str, *, timeout: float = 60.0, transport: httpx.BaseTransport | None = None) -> bytes:
    try:
        with httpx.Client(timeout=timeout, transport=transport, follow_redirects=True) as client:
            r = client.get(url)
            r.raise_for_status()
            return r.content
    except httpx.HTTPError as exc:
        logger.warning("Attachment download failed for %s: %s", url, exc)
        raise UpstreamServiceError("Failed to download PDF attachment")
