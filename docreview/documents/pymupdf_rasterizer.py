from collections.abc import Iterator

import pymupdf

from docreview.documents.exceptions import PdfRasterizationError
from docreview.documents.rasterizer_base import BasePageRasterizer


class PyMuPdfRasterizer(BasePageRasterizer):
    """Renders PDF pages with PyMuPDF."""

    def iter_pages(self, pdf_bytes: bytes) -> Iterator[bytes]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                matrix = pymupdf.Matrix(self._scale, self._scale)
                for page in doc:
                    yield page.get_pixmap(matrix=matrix).tobytes("jpeg")
        except PdfRasterizationError:
            raise
        except Exception as exc:
            raise PdfRasterizationError(f"pymupdf rendering failed: {exc}") from exc
