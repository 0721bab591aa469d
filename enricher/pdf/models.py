from dataclasses import dataclass


@dataclass(frozen=True)
class ExtractedContent:
    """Text and page count read from one PDF."""

    text: str
    page_count: int
