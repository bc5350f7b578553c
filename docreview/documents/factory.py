from docreview.config.settings import Settings
from docreview.documents.pdfplumber_rasterizer import PdfPlumberRasterizer
from docreview.documents.pymupdf_rasterizer import PyMuPdfRasterizer
from docreview.documents.rasterizer_base import BasePageRasterizer


class RasterizerFactory:
    """Creates the PDF page rasterizer selected in settings."""

    ADAPTERS: dict[str, type[BasePageRasterizer]] = {
        "pymupdf": PyMuPdfRasterizer,
        "pdfplumber": PdfPlumberRasterizer,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePageRasterizer:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls(scale=settings.pdf_render_scale)
