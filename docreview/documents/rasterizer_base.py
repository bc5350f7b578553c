from abc import ABC, abstractmethod
from collections.abc import Iterator


class BasePageRasterizer(ABC):
    """Contract for all PDF page rendering adapters."""

    def __init__(self, scale: float = 2.0) -> None:
        self._scale = scale

    @abstractmethod
    def iter_pages(self, pdf_bytes: bytes) -> Iterator[bytes]:
        """Render each page of a PDF to a JPEG image, lazily and in order.

        Args:
            pdf_bytes: Raw PDF file content.

        Yields:
            JPEG bytes for one page at a time.

        Raises:
            PdfRasterizationError: if the PDF cannot be opened or rendered.
        """
