"""Example extraction client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseExtractionClient and register the provider in ExtractorFactory.
"""

import json
from typing import ClassVar

from enricher.extraction.client_base import BaseExtractionClient
from enricher.extraction.schema import requested_property_names


class ExampleClientAdapter(BaseExtractionClient):
    """Example adapter that answers every requested property with an empty value.

    No network calls. Useful for local development, dry runs of a batch and
    tests.
    """

    provider = "example"

    EMPTY_PROPERTY: ClassVar[dict[str, object]] = {
        "value": "",
        "confidence": 0,
        "sources": [],
        "consistencyCount": 0,
    }

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt
        names = requested_property_names(json_schema)
        return json.dumps({"properties": {name: dict(self.EMPTY_PROPERTY) for name in names}})
