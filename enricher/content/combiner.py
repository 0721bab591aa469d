from enricher.content.sanitizer import sanitize_text


def web_section_header(label: str | None) -> str:
    return f"[WEB CONTENT FROM {label or 'web'}]"


def combine(
    document_text: str,
    web_text: str | None = None,
    web_source_label: str | None = None,
) -> str:
    """Build the sanitized payload sent for extraction.

    Web text, when present, follows the document text under a section
    header naming its source.
    """
    combined = document_text or ""
    if web_text and web_text.strip():
        header = web_section_header(web_source_label)
        combined = f"{combined}\n\n{header}\n{web_text}" if combined else f"{header}\n{web_text}"
    return sanitize_text(combined)
