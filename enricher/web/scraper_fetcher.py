import httpx

from enricher.logging.logger import Log
from enricher.web.base import BaseWebFetcher
from enricher.web.exceptions import WebFetchError
from enricher.web.models import WebContentResult


class ScraperWebFetcher(BaseWebFetcher):
    """Fetches page text through the external scraping endpoint."""

    def __init__(
        self,
        *,
        endpoint: str,
        timeout_seconds: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._timeout = httpx.Timeout(timeout_seconds)
        self._transport = transport

    async def fetch(self, url: str, article_number: str | None = None) -> WebContentResult:
        payload = {"url": url.strip(), "articleNumber": article_number}
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._endpoint, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise WebFetchError(f"Scraper request for {url} failed: {exc}") from exc

        if not response.is_success:
            return WebContentResult(
                success=False, method="scraper", error=f"HTTP {response.status_code}"
            )
        try:
            data = response.json()
        except ValueError:
            return WebContentResult(
                success=False, method="scraper", error="Scraper returned invalid JSON"
            )
        if not isinstance(data, dict):
            return WebContentResult(
                success=False, method="scraper", error="Scraper returned an unexpected payload"
            )

        content = data.get("content") or ""
        method = str(data.get("method") or "scraper")
        if not data.get("success") or not isinstance(content, str) or not content.strip():
            return WebContentResult(
                success=False, method=method, error=str(data.get("error") or "Unknown error")
            )
        Log.info(f"Web content extracted: {len(content)} characters using method: {method}")
        return WebContentResult(success=True, content=content, method=method)
