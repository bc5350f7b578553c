import io
from collections.abc import Iterator

import pdfplumber

from docreview.documents.exceptions import PdfRasterizationError
from docreview.documents.rasterizer_base import BasePageRasterizer


class PdfPlumberRasterizer(BasePageRasterizer):
    """Renders PDF pages with pdfplumber (pypdfium2 under the hood)."""

    def iter_pages(self, pdf_bytes: bytes) -> Iterator[bytes]:
        resolution = int(72 * self._scale)
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                for page in pdf.pages:
                    image = page.to_image(resolution=resolution).original.convert("RGB")
                    buf = io.BytesIO()
                    image.save(buf, format="JPEG")
                    yield buf.getvalue()
        except PdfRasterizationError:
            raise
        except Exception as exc:
            raise PdfRasterizationError(f"pdfplumber rendering failed: {exc}") from exc
