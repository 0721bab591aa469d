"""AI-powered property extractor built on a chat completion client."""

import json
import re
from pathlib import Path

from enricher.extraction.base import BaseExtractor
from enricher.extraction.client_base import BaseExtractionClient
from enricher.extraction.exceptions import ExtractionError
from enricher.extraction.models import ExtractionRequest, ExtractionResult, PropertySpec
from enricher.extraction.prompt_loader import load_prompt_template, load_system_prompt
from enricher.extraction.schema import build_json_schema
from enricher.extraction.validator import validate_and_build
from enricher.logging.logger import Log

_CODE_FENCE = re.compile(r"^\s*```[\w-]*\s*\n(.*?)\n?\s*```\s*$", re.DOTALL)


class LlmExtractor(BaseExtractor):
    """Extracts product properties by asking a chat model for structured JSON."""

    def __init__(
        self,
        *,
        client: BaseExtractionClient,
        model: str,
        temperature: float = 0.0,
        prompt_template_path: Path | None = None,
        system_prompt_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._system_prompt = load_system_prompt(system_prompt_path)

    async def extract(self, request: ExtractionRequest) -> ExtractionResult:
        prompt = self._build_prompt(request)
        Log.debug(f"Extraction prompt:\n{prompt}")

        raw_response = await self._client.create_chat_completion(
            model=request.ai_config.model or self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=build_json_schema(request.properties),
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        parsed = self._parse_json(raw_response)
        result = validate_and_build(
            {
                "searchMethod": request.search_method,
                "products": [
                    {
                        "articleNumber": request.article_number,
                        "productName": request.product_name,
                        "properties": parsed.get("properties", {}),
                    }
                ],
            }
        )
        Log.info(
            f"Extraction complete: {result.property_count} properties for {request.product_name}",
            provider=self._client.provider,
        )
        return result

    def _build_prompt(self, request: ExtractionRequest) -> str:
        return self._prompt_template.format(
            product_name=request.product_name,
            article_number=request.article_number or "-",
            property_list=self._format_properties(request.properties),
            document_text=request.combined_text,
        )

    @staticmethod
    def _format_properties(properties: list[PropertySpec]) -> str:
        lines = []
        for spec in properties:
            line = f"- {spec.name}: {spec.type}"
            if spec.description:
                line += f" ({spec.description})"
            lines.append(line)
        return "\n".join(lines)

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        fenced = _CODE_FENCE.match(raw)
        payload = fenced.group(1) if fenced else raw.strip()
        try:
            parsed = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ExtractionError(f"Invalid JSON response: {exc}") from exc
        if not isinstance(parsed, dict):
            raise ExtractionError("JSON response must be an object")
        return parsed
