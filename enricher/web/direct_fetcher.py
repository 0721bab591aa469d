import re

import httpx
from bs4 import BeautifulSoup

from enricher.web.base import BaseWebFetcher
from enricher.web.exceptions import WebFetchError
from enricher.web.models import WebContentResult

_BLANK_LINES = re.compile(r"\n\s*\n+")


class DirectWebFetcher(BaseWebFetcher):
    """Downloads the page itself and reduces the HTML to visible text."""

    USER_AGENT = "Mozilla/5.0 (compatible; product-enricher/1.0)"
    NOISE_TAGS = ("script", "style", "noscript", "svg", "iframe", "header", "footer", "nav")

    def __init__(
        self,
        *,
        timeout_seconds: float,
        max_content_chars: int = 50_000,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = httpx.Timeout(timeout_seconds)
        self._max_content_chars = max_content_chars
        self._transport = transport

    async def fetch(self, url: str, article_number: str | None = None) -> WebContentResult:
        _ = article_number
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                follow_redirects=True,
                headers={"User-Agent": self.USER_AGENT},
            ) as client:
                response = await client.get(url.strip())
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise WebFetchError(f"Request for {url} failed: {exc}") from exc

        if not response.is_success:
            return WebContentResult(
                success=False, method="direct", error=f"HTTP {response.status_code}"
            )
        text = self.html_to_text(response.text)
        if not text:
            return WebContentResult(
                success=False, method="direct", error="Page contained no readable text"
            )
        return WebContentResult(
            success=True, content=text[: self._max_content_chars], method="direct"
        )

    @classmethod
    def html_to_text(cls, html: str) -> str:
        soup = BeautifulSoup(html, "html.parser")
        for tag in soup.find_all(list(cls.NOISE_TAGS)):
            tag.decompose()
        text = soup.get_text("\n")
        lines = (line.strip() for line in text.splitlines())
        return _BLANK_LINES.sub("\n\n", "\n".join(line for line in lines if line)).strip()
