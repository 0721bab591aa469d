from abc import ABC, abstractmethod
from typing import ClassVar


class BaseExtractionClient(ABC):
    """Chat-completion backend used by ``LlmExtractor``.

    Implementations send one system and one user message and ask the model
    to answer with JSON matching ``json_schema``. The raw answer text is
    returned unparsed; parsing and validation stay in the extractor.
    """

    provider: ClassVar[str] = "unknown"

    @abstractmethod
    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        """Return the model's answer text.

        Raises:
            ExtractionNetworkError: when the provider cannot be reached.
            ExtractionError: when the provider answers without content.
        """
