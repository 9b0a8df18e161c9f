import io
from collections.abc import Callable

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


def make_pdf(*pages: str) -> bytes:
    """Build a PDF with one page per string, each drawn at the top-left."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for text in pages:
        c.drawString(72, 720, text)
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return make_pdf("ORDEN DE TRABAJO 4500123")


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a three-page PDF with known text on each page."""
    return make_pdf("Page one content", "Page two content", "Page three content")


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with a single blank page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def pdf_factory() -> Callable[..., bytes]:
    return make_pdf
