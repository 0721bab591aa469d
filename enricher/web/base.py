from abc import ABC, abstractmethod

from enricher.web.models import WebContentResult


class BaseWebFetcher(ABC):
    """Contract for all web-content fetch adapters."""

    @abstractmethod
    async def fetch(self, url: str, article_number: str | None = None) -> WebContentResult:
        """Fetch the readable text of a product page.

        Args:
            url: Page to fetch.
            article_number: Article context passed along to the fetcher.

        Returns:
            WebContentResult; ``success`` is False when the page could be
            reached but yielded no usable content.

        Raises:
            WebFetchError: on network or timeout failures.
        """
