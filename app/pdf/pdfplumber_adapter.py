import io

import pdfplumber
from pdfplumber.page import Page

from app.pdf.base import BasePdfRasterizer
from app.pdf.exceptions import PdfRenderError


class PdfPlumberAdapter(BasePdfRasterizer):
    """Renders PDF pages with pdfplumber (pypdfium2 backend)."""

    def render(self, pdf_bytes: bytes, *, dpi: int, max_pages: int) -> list[bytes]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                if not pdf.pages:
                    raise PdfRenderError("PDF has no pages")
                return [
                    self._to_png(page, dpi) for page in pdf.pages[:max_pages]
                ]
        except PdfRenderError:
            raise
        except Exception as exc:
            raise PdfRenderError(f"pdfplumber rendering failed: {exc}") from exc

    @staticmethod
    def _to_png(page: Page, dpi: int) -> bytes:
        buf = io.BytesIO()
        page.to_image(resolution=dpi).original.save(buf, format="PNG")
        return buf.getvalue()
