"""Cleans text before it is sent to the extraction service.

PDF text regularly carries control characters, lone surrogates and
formatting code points that the service rejects when validating the
request body.
"""

import re

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_SURROGATES = re.compile(r"[\ud800-\udfff]")
_REPLACEMENT_AND_BOM = re.compile(r"[\uFFFD\uFEFF]")
_WIDE_SPACES = re.compile(r"[\u00A0\u2000-\u200B\u202F\u205F\u3000]")
_INVISIBLE = re.compile(r"[\u200B-\u200F\u2028-\u202E\u2060-\u206F]")
_EXCESS_NEWLINES = re.compile(r"\n{4,}")


def sanitize_text(text: str | None) -> str:
    """Return *text* with characters known to break submission removed."""
    if not text:
        return ""
    cleaned = _CONTROL_CHARS.sub("", text)
    cleaned = _SURROGATES.sub("", cleaned)
    cleaned = _REPLACEMENT_AND_BOM.sub("", cleaned)
    cleaned = _WIDE_SPACES.sub(" ", cleaned)
    cleaned = _INVISIBLE.sub("", cleaned)
    cleaned = cleaned.replace("\r\n", "\n").replace("\r", "\n")
    cleaned = _EXCESS_NEWLINES.sub("\n\n\n", cleaned)
    # Anything that still cannot round-trip through UTF-8 is dropped.
    cleaned = cleaned.encode("utf-8", errors="ignore").decode("utf-8")
    return cleaned.strip()
