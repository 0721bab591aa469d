"""File validation and folder-based document lookup."""

from pathlib import Path

from enricher.documents.models import SourceFile
from enricher.pdf.exceptions import InvalidFileError

PDF_SUFFIX = ".pdf"
PDF_MAGIC = b"%PDF"


def validate_pdf(name: str, data: bytes, max_size_bytes: int | None) -> None:
    """Reject files that are not PDFs or exceed the size limit.

    Raises:
        InvalidFileError: with a message naming the offending file.
    """
    if not name.lower().endswith(PDF_SUFFIX) and not data.startswith(PDF_MAGIC):
        raise InvalidFileError(f"{name} is not a PDF file")
    if max_size_bytes is not None and len(data) > max_size_bytes:
        limit_mb = max_size_bytes // (1024 * 1024)
        raise InvalidFileError(f"{name} is larger than {limit_mb} MB")


class PdfFolder:
    """Read-only view of a folder of candidate PDF files.

    Matching rule: a file belongs to an article when its name ends with
    ``.pdf`` and starts with the article number, both compared
    case-insensitively after trimming the article number. Every matching
    file is returned, sorted by file name.
    """

    def __init__(self, root: Path) -> None:
        if not root.is_dir():
            raise NotADirectoryError(f"PDF folder not found: {root}")
        self._root = root
        self._paths = sorted(
            (p for p in root.iterdir() if p.is_file() and p.name.lower().endswith(PDF_SUFFIX)),
            key=lambda p: p.name,
        )

    @property
    def root(self) -> Path:
        return self._root

    def __len__(self) -> int:
        return len(self._paths)

    def match(self, article_number: str | None) -> list[Path]:
        prefix = str(article_number or "").strip().lower()
        if not prefix:
            return []
        return [p for p in self._paths if p.name.lower().startswith(prefix)]

    def source_files(self, article_number: str | None) -> list[SourceFile]:
        """Build fresh SourceFiles for every file matching the article number."""
        return [SourceFile.from_path(p) for p in self.match(article_number)]
