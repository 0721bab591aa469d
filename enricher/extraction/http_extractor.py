import httpx

from enricher.extraction.base import BaseExtractor
from enricher.extraction.exceptions import (
    ExtractionNetworkError,
    ExtractionResponseError,
    ExtractionValidationError,
)
from enricher.extraction.models import ExtractionRequest, ExtractionResult
from enricher.extraction.validator import validate_and_build
from enricher.logging.logger import Log


class HttpExtractor(BaseExtractor):
    """Submits the combined text to the remote extraction endpoint."""

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

    async def extract(self, request: ExtractionRequest) -> ExtractionResult:
        payload = self.build_payload(request)
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._endpoint, json=payload)
        except httpx.HTTPError as exc:
            raise ExtractionNetworkError(f"Extraction service unreachable: {exc}") from exc

        if not response.is_success:
            raise ExtractionResponseError(response.status_code, self._error_detail(response))

        try:
            data = response.json()
        except ValueError as exc:
            raise ExtractionValidationError(f"Invalid JSON response: {exc}") from exc
        if not isinstance(data, dict):
            raise ExtractionValidationError("JSON response must be an object")

        result = validate_and_build(data)
        Log.info(f"Extraction complete: {result.property_count} properties for {request.product_name}")
        return result

    @staticmethod
    def build_payload(request: ExtractionRequest) -> dict[str, object]:
        """Request body in the field naming the extraction service expects."""
        return {
            "searchMethod": request.search_method,
            "articleNumber": request.article_number,
            "productName": request.product_name,
            "pdfText": request.combined_text,
            "properties": [{"name": p.name, "type": p.type} for p in request.properties],
            "useAI": True,
            "modelProvider": request.ai_config.provider,
            "aiModel": request.ai_config.model,
            "openaiApiKey": request.ai_config.api_key,
        }

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text[:200]
        if isinstance(body, dict):
            return str(body.get("message") or body.get("error") or "")
        return ""
