import json
from pathlib import Path
from typing import Any

from enricher.extraction.exceptions import ExtractionError
from enricher.extraction.models import PropertySpec

DEFAULT_PROPERTIES: tuple[PropertySpec, ...] = (
    PropertySpec(name="Width", type="mm"),
    PropertySpec(name="Height", type="mm"),
    PropertySpec(name="Depth", type="mm"),
    PropertySpec(name="Weight", type="kg"),
    PropertySpec(name="Rated power", type="kW"),
)


def load_properties(path: Path | None = None) -> list[PropertySpec]:
    """Load the property schema from a JSON file.

    The file holds a list of objects with ``name`` and an optional
    ``expectedFormat`` (or ``type``) and ``description``. Without a path the
    built-in defaults are returned.

    Raises:
        ExtractionError: if the file cannot be read or is malformed.
    """
    if path is None:
        return list(DEFAULT_PROPERTIES)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ExtractionError(f"Failed to load properties file {path}: {exc}") from exc
    if not isinstance(raw, list) or not raw:
        raise ExtractionError(f"Properties file {path} must contain a non-empty list")
    return [_build_spec(item, i) for i, item in enumerate(raw)]


def _build_spec(raw: Any, index: int) -> PropertySpec:
    if isinstance(raw, str) and raw.strip():
        return PropertySpec(name=raw.strip())
    if not isinstance(raw, dict):
        raise ExtractionError(f"Property at index {index} must be an object")
    name = raw.get("name")
    if not name or not isinstance(name, str):
        raise ExtractionError(f"Property at index {index}: 'name' must be a non-empty string")
    expected = raw.get("expectedFormat") or raw.get("type") or "text"
    return PropertySpec(
        name=name.strip(),
        type=str(expected),
        description=str(raw.get("description") or ""),
    )
