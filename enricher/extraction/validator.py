"""Validates the extraction service response and builds typed results.

Property values arrive either as a plain string or as an object carrying
``value``, ``sources`` and ``confidence``; both shapes are resolved here so
nothing past this boundary handles untyped data.
"""

from typing import Any

from enricher.extraction.exceptions import ExtractionValidationError
from enricher.extraction.models import (
    ExtractionResult,
    ProductResult,
    PropertyResult,
    RawContent,
    Source,
)

_MAX_PROPERTIES = 200


def validate_and_build(data: dict[str, Any]) -> ExtractionResult:
    """Validate a raw service response and build an ExtractionResult.

    Raises:
        ExtractionValidationError: on any validation failure.
    """
    if "products" not in data:
        raise ExtractionValidationError("Missing required top-level field: products")
    search_method = data.get("searchMethod", "pdf")
    if not isinstance(search_method, str):
        raise ExtractionValidationError("'searchMethod' must be a string")
    products = _build_products(data["products"])
    raw_content = _build_raw_content(data.get("rawContent"))
    return ExtractionResult(
        search_method=search_method,
        products=products,
        raw_content=raw_content,
    )


def _build_products(raw: Any) -> list[ProductResult]:
    if not isinstance(raw, list):
        raise ExtractionValidationError("'products' must be a list")
    return [_build_product(item, i) for i, item in enumerate(raw)]


def _build_product(raw: Any, index: int) -> ProductResult:
    if not isinstance(raw, dict):
        raise ExtractionValidationError(f"Product at index {index} must be an object")
    product_name = raw.get("productName")
    if not product_name or not isinstance(product_name, str):
        raise ExtractionValidationError(
            f"Product at index {index}: 'productName' must be a non-empty string"
        )
    article_number = raw.get("articleNumber")
    if article_number is not None and not isinstance(article_number, (str, int)):
        raise ExtractionValidationError(
            f"Product at index {index}: 'articleNumber' must be a string or null"
        )
    properties = _build_properties(raw.get("properties", {}), index)
    return ProductResult(
        product_name=product_name,
        article_number=str(article_number) if article_number is not None else None,
        properties=properties,
    )


def _build_properties(raw: Any, product_index: int) -> dict[str, PropertyResult]:
    if not isinstance(raw, dict):
        raise ExtractionValidationError(
            f"Product at index {product_index}: 'properties' must be an object"
        )
    if len(raw) > _MAX_PROPERTIES:
        raise ExtractionValidationError(
            f"Too many properties: {len(raw)} (max {_MAX_PROPERTIES})"
        )
    return {
        str(name): _build_property(str(name), value, product_index)
        for name, value in raw.items()
    }


def _build_property(name: str, raw: Any, product_index: int) -> PropertyResult:
    where = f"Product at index {product_index}, property '{name}'"
    if raw is None:
        return PropertyResult(name=name, value="")
    if isinstance(raw, (str, int, float)) and not isinstance(raw, bool):
        return PropertyResult(name=name, value=str(raw))
    if not isinstance(raw, dict):
        raise ExtractionValidationError(f"{where}: must be a string or an object")

    value = raw.get("value")
    if value is None:
        value = ""
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    elif not isinstance(value, str):
        raise ExtractionValidationError(f"{where}: 'value' must be a string or number")

    confidence = raw.get("confidence", 0)
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise ExtractionValidationError(f"{where}: 'confidence' must be a number")
    if not 0 <= confidence <= 100:
        raise ExtractionValidationError(f"{where}: 'confidence' must be between 0 and 100")

    return PropertyResult(
        name=name,
        value=value,
        sources=_build_sources(raw.get("sources"), where),
        confidence=float(confidence),
        is_consistent=_optional_bool(raw.get("isConsistent"), f"{where}: 'isConsistent'"),
        consistency_count=_optional_int(
            raw.get("consistencyCount"), f"{where}: 'consistencyCount'"
        ),
        source_count=_optional_int(raw.get("sourceCount"), f"{where}: 'sourceCount'"),
    )


def _build_sources(raw: Any, where: str) -> list[Source]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ExtractionValidationError(f"{where}: 'sources' must be a list")
    sources: list[Source] = []
    for item in raw:
        if isinstance(item, str):
            sources.append(Source(url=item))
            continue
        if not isinstance(item, dict) or not isinstance(item.get("url"), str):
            raise ExtractionValidationError(f"{where}: each source needs a 'url' string")
        sources.append(
            Source(
                url=item["url"],
                title=_optional_str(item.get("title")),
                source_label=_optional_str(item.get("sourceLabel")),
            )
        )
    return sources


def _build_raw_content(raw: Any) -> list[RawContent]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ExtractionValidationError("'rawContent' must be a list")
    entries: list[RawContent] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict) or not isinstance(item.get("content"), str):
            raise ExtractionValidationError(
                f"rawContent at index {i} must be an object with 'content'"
            )
        entries.append(
            RawContent(
                source_label=str(item.get("sourceLabel") or f"Source {i + 1}"),
                content=item["content"],
                title=_optional_str(item.get("title")),
                url=_optional_str(item.get("url")),
            )
        )
    return entries


def _optional_str(raw: Any) -> str | None:
    return raw if isinstance(raw, str) and raw else None


def _optional_bool(raw: Any, where: str) -> bool | None:
    if raw is None:
        return None
    if not isinstance(raw, bool):
        raise ExtractionValidationError(f"{where} must be a boolean")
    return raw


def _optional_int(raw: Any, where: str) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ExtractionValidationError(f"{where} must be an integer")
    return raw
