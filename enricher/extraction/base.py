from abc import ABC, abstractmethod

from enricher.extraction.models import ExtractionRequest, ExtractionResult


class BaseExtractor(ABC):
    """Contract for all extraction service adapters."""

    @abstractmethod
    async def extract(self, request: ExtractionRequest) -> ExtractionResult:
        """Extract the requested properties from the combined text.

        Args:
            request: Product identity, combined text, property schema and AI config.

        Returns:
            ExtractionResult with per-property value, sources and confidence.

        Raises:
            ExtractionError: on any failure.
        """
