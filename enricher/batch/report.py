"""JSON-ready views of status records and batch summaries."""

from dataclasses import asdict

from enricher.batch.models import BatchSummary
from enricher.pipeline.models import StatusRecord


def record_to_dict(record: StatusRecord, *, include_text: bool = False) -> dict[str, object]:
    data: dict[str, object] = {
        "itemId": record.item_id,
        "articleNumber": record.article_number,
        "productName": record.product_name,
        "url": record.url,
        "status": record.status.value,
        "progress": record.progress,
        "error": record.error,
        "warnings": list(record.warnings),
        "result": asdict(record.result) if record.result is not None else None,
    }
    if include_text:
        data["documentText"] = record.document_text
        data["webContent"] = record.web_content
    return data


def summary_to_dict(summary: BatchSummary, *, include_text: bool = False) -> dict[str, object]:
    return {
        "total": summary.total,
        "completed": summary.completed,
        "failed": summary.failed,
        "items": [record_to_dict(r, include_text=include_text) for r in summary.records],
    }


def format_progress(record: StatusRecord) -> str:
    """One-line progress message for console output."""
    label = record.article_number or record.product_name
    line = f"[{record.progress:>3}%] {label}: {record.status.value}"
    if record.error:
        line += f" ({record.error})"
    return line
