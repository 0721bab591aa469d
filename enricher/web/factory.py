from enricher.config.settings import Settings
from enricher.web.base import BaseWebFetcher
from enricher.web.direct_fetcher import DirectWebFetcher
from enricher.web.disabled_fetcher import DisabledWebFetcher
from enricher.web.scraper_fetcher import ScraperWebFetcher


class WebFetcherFactory:
    """Creates the configured web-content fetcher."""

    PROVIDERS = ("scraper", "direct", "disabled")

    @classmethod
    def create(cls, settings: Settings) -> BaseWebFetcher:
        provider = settings.web_fetch_provider.lower()
        if provider == "scraper":
            endpoint = settings.web_fetch_endpoint.strip()
            if not endpoint:
                raise ValueError("web_fetch_endpoint is required for web_fetch_provider=scraper")
            return ScraperWebFetcher(
                endpoint=endpoint,
                timeout_seconds=settings.web_fetch_timeout_seconds,
            )
        if provider == "direct":
            return DirectWebFetcher(
                timeout_seconds=settings.web_fetch_timeout_seconds,
                max_content_chars=settings.web_max_content_chars,
            )
        if provider == "disabled":
            return DisabledWebFetcher()
        raise ValueError(
            f"Unknown web fetch provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
