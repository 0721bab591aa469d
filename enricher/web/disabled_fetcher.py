from enricher.web.base import BaseWebFetcher
from enricher.web.models import WebContentResult


class DisabledWebFetcher(BaseWebFetcher):
    """Fetcher used when web lookups are switched off; always a soft failure."""

    async def fetch(self, url: str, article_number: str | None = None) -> WebContentResult:
        _ = url, article_number
        return WebContentResult(
            success=False, method="disabled", error="Web content fetching is disabled"
        )
