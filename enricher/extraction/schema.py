"""JSON schema for the structured chat completion response."""

from enricher.extraction.models import PropertySpec

_SOURCE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "url": {"type": "string"},
        "title": {"type": "string"},
        "sourceLabel": {"type": "string"},
    },
    "required": ["url", "title", "sourceLabel"],
    "additionalProperties": False,
}

_PROPERTY_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "value": {"type": "string"},
        "confidence": {"type": "number"},
        "sources": {"type": "array", "items": _SOURCE_SCHEMA},
        "consistencyCount": {"type": "integer"},
    },
    "required": ["value", "confidence", "sources", "consistencyCount"],
    "additionalProperties": False,
}


def build_json_schema(properties: list[PropertySpec]) -> dict[str, object]:
    """Build a strict schema with one required entry per requested property."""
    names = [p.name for p in properties]
    return {
        "type": "object",
        "properties": {
            "properties": {
                "type": "object",
                "properties": {name: _PROPERTY_SCHEMA for name in names},
                "required": names,
                "additionalProperties": False,
            }
        },
        "required": ["properties"],
        "additionalProperties": False,
    }


def requested_property_names(json_schema: dict[str, object]) -> list[str]:
    """Inverse of build_json_schema: the property names a schema asks for."""
    outer = json_schema.get("properties")
    if not isinstance(outer, dict):
        return []
    container = outer.get("properties")
    if not isinstance(container, dict):
        return []
    names = container.get("properties")
    return list(names) if isinstance(names, dict) else []
