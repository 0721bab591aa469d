import pymupdf

from enricher.pdf.base import BasePdfExtractor
from enricher.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Fast extraction with PyMuPDF; better on large scanned-and-OCRed manuals."""

    engine = "pymupdf"

    def _read_pages(self, pdf_bytes: bytes) -> list[str]:
        with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            if doc.needs_pass:
                raise PdfExtractionError("pymupdf extraction failed: document is password protected")
            return [page.get_text() for page in doc]
