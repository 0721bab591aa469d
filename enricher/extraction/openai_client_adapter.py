import httpx
import openai

from enricher.extraction.client_base import BaseExtractionClient
from enricher.extraction.exceptions import ExtractionError, ExtractionNetworkError

_SCHEMA_NAME = "product_properties"
_NETWORK_ERRORS = (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException)


class OpenAIClientAdapter(BaseExtractionClient):
    """Extraction client for any OpenAI-compatible chat endpoint.

    The model is asked for a strict ``json_schema`` response so the reply can
    be validated without any free-text parsing.
    """

    provider = "openai"

    def __init__(self, *, api_key: str, timeout_seconds: int, base_url: str | None = None) -> None:
        self._client = openai.AsyncOpenAI(api_key=api_key, timeout=timeout_seconds, base_url=base_url)

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        request = {
            "model": model,
            "temperature": temperature,
            "messages": _messages(system_prompt, user_prompt),
            "response_format": _strict_schema_format(json_schema),
        }
        try:
            response = await self._client.chat.completions.create(**request)
        except _NETWORK_ERRORS as exc:
            raise ExtractionNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ExtractionNetworkError(f"AI provider API error: {exc}") from exc
        return _reply_text(response)


def _messages(system_prompt: str, user_prompt: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]


def _strict_schema_format(json_schema: dict[str, object]) -> dict[str, object]:
    return {
        "type": "json_schema",
        "json_schema": {"name": _SCHEMA_NAME, "strict": True, "schema": json_schema},
    }


def _reply_text(response: object) -> str:
    choices = getattr(response, "choices", None)
    if not choices:
        raise ExtractionError("AI returned no choices")
    text = choices[0].message.content
    if text is None:
        raise ExtractionError("AI returned empty response")
    return text
