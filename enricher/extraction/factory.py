from typing import ClassVar

from enricher.config.settings import Settings
from enricher.extraction.base import BaseExtractor
from enricher.extraction.example_client_adapter import ExampleClientAdapter
from enricher.extraction.http_extractor import HttpExtractor
from enricher.extraction.llm_extractor import LlmExtractor
from enricher.extraction.models import AIConfig
from enricher.extraction.openai_client_adapter import OpenAIClientAdapter


class ExtractorFactory:
    """Creates the configured extraction adapter."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseExtractor:
        """Create a configured extractor from application settings."""
        provider = settings.extraction_provider.lower()
        if provider == "http":
            endpoint = settings.extraction_endpoint.strip()
            if not endpoint:
                raise ValueError("extraction_endpoint is required for extraction_provider=http")
            return HttpExtractor(
                endpoint=endpoint,
                timeout_seconds=settings.extraction_timeout_seconds,
            )
        if provider == "example":
            return LlmExtractor(client=ExampleClientAdapter(), model="example")
        client = OpenAIClientAdapter(
            api_key=settings.openai_api_key,
            timeout_seconds=settings.extraction_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )
        return LlmExtractor(
            client=client,
            model=settings.openai_model_name,
            temperature=settings.openai_temperature,
        )

    @classmethod
    def ai_config(cls, settings: Settings) -> AIConfig:
        """AI credentials forwarded with each extraction request."""
        provider = settings.extraction_provider.lower()
        return AIConfig(
            provider="openai" if provider in ("http", "example") else provider,
            model=settings.openai_model_name,
            api_key=settings.openai_api_key,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = (settings.openai_compatible_base_url or "").strip()
            if not url:
                raise ValueError(
                    "openai_compatible_base_url is required for "
                    "extraction_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "http",
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown extraction provider '{provider}'. Choose from: {supported}"
        )
