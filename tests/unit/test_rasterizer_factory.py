import pytest

from docreview.config.settings import Settings
from docreview.documents.factory import RasterizerFactory
from docreview.documents.pdfplumber_rasterizer import PdfPlumberRasterizer
from docreview.documents.pymupdf_rasterizer import PyMuPdfRasterizer


class TestRasterizerFactory:
    def test_default_engine_is_pymupdf(self) -> None:
        rasterizer = RasterizerFactory.create(Settings(_env_file=None, pdf_engine="pymupdf"))
        assert isinstance(rasterizer, PyMuPdfRasterizer)

    def test_pdfplumber_engine(self) -> None:
        rasterizer = RasterizerFactory.create(Settings(_env_file=None, pdf_engine="PDFPlumber"))
        assert isinstance(rasterizer, PdfPlumberRasterizer)

    def test_unknown_engine_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            RasterizerFactory.create(Settings(_env_file=None, pdf_engine="ghostscript"))
