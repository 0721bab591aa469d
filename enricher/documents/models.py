import uuid
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from enricher.pdf.models import ExtractedContent


class FileState(str, Enum):
    PENDING = "pending"
    EXTRACTED = "extracted"
    ERRORED = "errored"


@dataclass(eq=False)
class SourceFile:
    """One uploaded document and the outcome of extracting its text.

    The binary content is either held in memory (uploads) or read lazily
    from ``path`` (folder-batch mode).
    """

    name: str
    content: bytes | None = None
    path: Path | None = None
    file_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    text: str | None = None
    page_count: int = 0
    char_count: int = 0
    word_count: int = 0
    is_processing: bool = False
    error: str | None = None

    @classmethod
    def from_path(cls, path: Path) -> "SourceFile":
        return cls(name=path.name, path=path)

    @property
    def size_bytes(self) -> int:
        if self.content is not None:
            return len(self.content)
        if self.path is not None and self.path.exists():
            return self.path.stat().st_size
        return 0

    @property
    def state(self) -> FileState:
        if self.error is not None:
            return FileState.ERRORED
        if self.text is not None and not self.is_processing:
            return FileState.EXTRACTED
        return FileState.PENDING

    def read_bytes(self) -> bytes:
        """Return the file content, reading it from disk when needed.

        Raises:
            FileNotFoundError: if the file has neither content nor a readable path.
        """
        if self.content is not None:
            return self.content
        if self.path is None:
            raise FileNotFoundError(f"No content available for {self.name}")
        return self.path.read_bytes()

    def mark_processing(self) -> None:
        self.is_processing = True
        self.error = None

    def mark_extracted(self, extracted: ExtractedContent) -> None:
        self.text = extracted.text
        self.page_count = extracted.page_count
        self.char_count = len(extracted.text)
        stripped = extracted.text.strip()
        self.word_count = len(stripped.split()) if stripped else 0
        self.is_processing = False
        self.error = None

    def mark_failed(self, message: str) -> None:
        self.text = None
        self.page_count = 0
        self.char_count = 0
        self.word_count = 0
        self.is_processing = False
        self.error = message


@dataclass(frozen=True)
class AggregateStats:
    """Totals across all successfully extracted files."""

    total_files: int = 0
    total_pages: int = 0
    total_characters: int = 0
    total_words: int = 0
