from enricher.extraction.base import BaseExtractor
from enricher.extraction.factory import ExtractorFactory
from enricher.extraction.http_extractor import HttpExtractor
from enricher.extraction.llm_extractor import LlmExtractor

__all__ = ["BaseExtractor", "ExtractorFactory", "HttpExtractor", "LlmExtractor"]
