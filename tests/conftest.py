import io
from collections.abc import Callable
from pathlib import Path

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from enricher.extraction.models import PropertySpec
from tests.fakes import FakeExtractor, FakePdfExtractor, FakeWebFetcher


def make_pdf(*pages: str) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for text in pages:
        if text:
            c.drawString(72, 720, text)
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return make_pdf("Hello PDF World")


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    return make_pdf("Page one content", "Page two content")


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    return make_pdf("")


@pytest.fixture()
def pdf_folder(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write one real PDF per file name into a folder and return the folder."""

    def _write(files: dict[str, str]) -> Path:
        folder = tmp_path / "pdfs"
        folder.mkdir(exist_ok=True)
        for name, text in files.items():
            (folder / name).write_bytes(make_pdf(text))
        return folder

    return _write


@pytest.fixture()
def fake_pdf_extractor() -> FakePdfExtractor:
    return FakePdfExtractor()


@pytest.fixture()
def fake_web_fetcher() -> FakeWebFetcher:
    return FakeWebFetcher()


@pytest.fixture()
def fake_extractor() -> FakeExtractor:
    return FakeExtractor()


@pytest.fixture()
def property_specs() -> list[PropertySpec]:
    return [PropertySpec(name="Width", type="mm"), PropertySpec(name="Weight", type="kg")]
