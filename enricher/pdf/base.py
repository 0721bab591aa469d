from abc import ABC, abstractmethod
from typing import ClassVar

from enricher.pdf.exceptions import PdfExtractionError
from enricher.pdf.models import ExtractedContent


class BasePdfExtractor(ABC):
    """Reads the text of a PDF, page by page.

    Engines implement ``_read_pages``; joining the pages and turning library
    errors into ``PdfExtractionError`` happens here, so every engine fails
    the same way.
    """

    engine: ClassVar[str] = "pdf"

    def extract(self, pdf_bytes: bytes) -> ExtractedContent:
        """Extract plain text from PDF bytes.

        Returns:
            ExtractedContent with the page texts joined by newlines and the
            number of pages in the document.

        Raises:
            PdfExtractionError: if the document cannot be read.
        """
        if not pdf_bytes:
            raise PdfExtractionError(f"{self.engine} extraction failed: file is empty")
        try:
            pages = self._read_pages(pdf_bytes)
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"{self.engine} extraction failed: {exc}") from exc
        text = "\n".join(page.strip() for page in pages).strip()
        return ExtractedContent(text=text, page_count=len(pages))

    @abstractmethod
    def _read_pages(self, pdf_bytes: bytes) -> list[str]:
        """Return the text of every page, in page order."""
