"""Turns a file into a Document: plain text as-is, PDFs through page OCR."""

import mimetypes
from contextlib import closing
from pathlib import Path

from docreview.credentials.store import CredentialStore
from docreview.documents.exceptions import DocumentReadError
from docreview.documents.models import Document, DocumentType
from docreview.documents.rasterizer_base import BasePageRasterizer
from docreview.logging.logger import Log
from docreview.providers.exceptions import (
    InvalidCredentialError,
    ProviderError,
    ProviderNotConfiguredError,
)
from docreview.providers.gateway import CompletionGateway

PDF_MIME_TYPE = "application/pdf"


def page_header(number: int) -> str:
    return f"--- Page {number} ---\n"


class DocumentLoader:
    """Reads files and produces Documents ready for a workflow run.

    PDF pages are rendered to images and transcribed one by one with the
    gateway's OCR model. The first page that fails is replaced with an
    ``[OCR Failed: ...]`` marker and the remaining pages are skipped.
    """

    def __init__(
        self,
        gateway: CompletionGateway,
        credentials: CredentialStore,
        rasterizer: BasePageRasterizer,
    ) -> None:
        self._gateway = gateway
        self._credentials = credentials
        self._rasterizer = rasterizer

    def load(self, path: Path) -> Document:
        """Read a document from disk.

        Raises:
            DocumentReadError: if the file cannot be read.
            ProviderNotConfiguredError: for a PDF when the OCR provider has no key.
            PdfRasterizationError: if PDF pages cannot be rendered.
        """
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise DocumentReadError(f"Failed to read {path}: {exc}") from exc
        mime_type, _ = mimetypes.guess_type(path.name)
        return self.load_bytes(path.name, data, mime_type or "")

    def load_bytes(self, name: str, data: bytes, mime_type: str = "") -> Document:
        if mime_type == PDF_MIME_TYPE or name.lower().endswith(".pdf"):
            content = self._transcribe_pdf(name, data)
            return Document(name=name, type=DocumentType.PDF, content=content)
        content = data.decode("utf-8", errors="replace")
        Log.info(f"Loaded text document '{name}' ({len(content)} chars)")
        return Document(name=name, type=DocumentType.TXT, content=content)

    def _transcribe_pdf(self, name: str, data: bytes) -> str:
        provider = self._gateway.ocr_provider
        if not self._credentials.is_configured(provider):
            raise ProviderNotConfiguredError(provider)
        if not self._gateway.is_configured(provider):
            self._gateway.configure(provider, self._credentials.get(provider))

        pages: list[str] = []
        with closing(self._rasterizer.iter_pages(data)) as images:
            for number, image in enumerate(images, start=1):
                try:
                    text = self._gateway.perform_ocr(image)
                except ProviderError as exc:
                    Log.warning(f"OCR failed on page {number} of '{name}': {exc.message}")
                    if isinstance(exc, InvalidCredentialError):
                        self._gateway.deconfigure(exc.provider)
                        self._credentials.invalidate(exc.provider)
                    pages.append(f"{page_header(number)}[OCR Failed: {exc.message}]")
                    break
                pages.append(f"{page_header(number)}{text}")

        Log.info(f"Transcribed {len(pages)} pages from '{name}'")
        return "\n\n".join(pages)
