import pymupdf

from app.pdf.base import BasePdfRasterizer
from app.pdf.exceptions import PdfRenderError


class PyMuPdfAdapter(BasePdfRasterizer):
    """Renders PDF pages with PyMuPDF."""

    def render(self, pdf_bytes: bytes, *, dpi: int, max_pages: int) -> list[bytes]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if doc.page_count == 0:
                    raise PdfRenderError("PDF has no pages")
                return [
                    page.get_pixmap(dpi=dpi).tobytes("png")
                    for page in doc.pages(0, min(max_pages, doc.page_count))
                ]
        except PdfRenderError:
            raise
        except Exception as exc:
            raise PdfRenderError(f"pymupdf rendering failed: {exc}") from exc
