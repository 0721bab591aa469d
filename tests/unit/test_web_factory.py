import pytest

from enricher.config.settings import Settings
from enricher.web.direct_fetcher import DirectWebFetcher
from enricher.web.disabled_fetcher import DisabledWebFetcher
from enricher.web.factory import WebFetcherFactory
from enricher.web.scraper_fetcher import ScraperWebFetcher


class TestWebFetcherFactory:
    def test_creates_scraper_fetcher_by_default(self) -> None:
        assert isinstance(WebFetcherFactory.create(Settings()), ScraperWebFetcher)

    def test_creates_direct_fetcher(self) -> None:
        fetcher = WebFetcherFactory.create(Settings(web_fetch_provider="Direct"))
        assert isinstance(fetcher, DirectWebFetcher)

    def test_creates_disabled_fetcher(self) -> None:
        fetcher = WebFetcherFactory.create(Settings(web_fetch_provider="disabled"))
        assert isinstance(fetcher, DisabledWebFetcher)

    def test_scraper_requires_endpoint(self) -> None:
        with pytest.raises(ValueError, match="web_fetch_endpoint is required"):
            WebFetcherFactory.create(Settings(web_fetch_provider="scraper", web_fetch_endpoint=" "))

    def test_raises_for_unknown_provider(self) -> None:
        with pytest.raises(ValueError, match="Unknown web fetch provider"):
            WebFetcherFactory.create(Settings(web_fetch_provider="carrier-pigeon"))


class TestDisabledWebFetcher:
    @pytest.mark.asyncio
    async def test_always_soft_fails(self) -> None:
        result = await DisabledWebFetcher().fetch("https://shop.example/p/1", "A1")
        assert not result.success
        assert result.method == "disabled"
