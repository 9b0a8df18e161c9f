from abc import ABC, abstractmethod


class BasePdfRasterizer(ABC):
    """Contract for adapters that turn PDF pages into PNG images."""

    @abstractmethod
    def render(self, pdf_bytes: bytes, *, dpi: int, max_pages: int) -> list[bytes]:
        """Render the leading pages of a PDF.

        Args:
            pdf_bytes: Raw PDF file content.
            dpi: Output resolution.
            max_pages: Render at most this many pages, starting from the first.

        Returns:
            One PNG-encoded image per rendered page, in page order.

        Raises:
            PdfRenderError: if the PDF cannot be opened or has no pages.
        """
