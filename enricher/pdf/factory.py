from enricher.config.settings import Settings
from enricher.pdf.base import BasePdfExtractor
from enricher.pdf.pdfplumber_adapter import PdfPlumberAdapter
from enricher.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Picks the text extraction engine named by ``PDF_ENGINE``."""

    ENGINES: tuple[type[BasePdfExtractor], ...] = (PdfPlumberAdapter, PyMuPdfAdapter)

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        return cls.for_engine(settings.pdf_engine)

    @classmethod
    def for_engine(cls, name: str) -> BasePdfExtractor:
        wanted = name.strip().lower()
        for engine_cls in cls.ENGINES:
            if engine_cls.engine == wanted:
                return engine_cls()
        choices = [engine_cls.engine for engine_cls in cls.ENGINES]
        raise ValueError(f"Unknown PDF engine '{wanted}'. Choose from: {choices}")
