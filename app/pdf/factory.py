from typing import ClassVar

from app.config.settings import Settings
from app.logging.logger import Log
from app.pdf.base import BasePdfRasterizer
from app.pdf.pdfplumber_adapter import PdfPlumberAdapter
from app.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfRasterizerFactory:
    """Creates the page rasterizer used for image-only AI providers."""

    ADAPTERS: ClassVar[dict[str, type[BasePdfRasterizer]]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }
    # PyMuPDF is still widely known by its import name.
    ALIASES: ClassVar[dict[str, str]] = {"fitz": "pymupdf"}

    @classmethod
    def create(cls, settings: Settings) -> BasePdfRasterizer:
        engine = settings.pdf_engine.strip().lower()
        engine = cls.ALIASES.get(engine, engine)
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{settings.pdf_engine}'. Choose from: {sorted(cls.ADAPTERS)}"
            )
        Log.debug(f"Rendering PDF pages with {engine} at {settings.pdf_render_dpi} dpi")
        return adapter_cls()
