"""Multi-document text aggregation.

Each registered file is extracted independently; the combined text is
derived from the extracted files in insertion order and recomputed whenever
the file set changes. A manual override replaces the derived text until the
next change to the file set.
"""

import asyncio
from collections.abc import Iterable

from enricher.documents.exceptions import DuplicateFileError, TooManyFilesError, UnknownFileError
from enricher.documents.file_loader import validate_pdf
from enricher.documents.models import AggregateStats, FileState, SourceFile
from enricher.logging.logger import Log
from enricher.pdf.base import BasePdfExtractor
from enricher.pdf.exceptions import PdfExtractionError

DOCUMENT_SEPARATOR = "\n\n[PDF CONTENT SEPARATOR]\n\n"


def document_marker(position: int, name: str) -> str:
    return f"[PDF {position}: {name}]"


def combine_texts(files: Iterable[SourceFile]) -> str:
    """Join the text of every extracted file with position markers."""
    extracted = [f for f in files if f.state is FileState.EXTRACTED and f.text]
    sections = [
        f"{document_marker(i, f.name)}\n{f.text}" for i, f in enumerate(extracted, start=1)
    ]
    return DOCUMENT_SEPARATOR.join(sections)


class DocumentAggregator:
    """Holds a bounded, ordered set of source files and their combined text."""

    def __init__(
        self,
        pdf_extractor: BasePdfExtractor,
        *,
        max_files: int | None = 3,
        max_size_bytes: int | None = None,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._max_files = max_files
        self._max_size_bytes = max_size_bytes
        self._files: list[SourceFile] = []
        self._override: str | None = None

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def files(self) -> list[SourceFile]:
        return list(self._files)

    @property
    def max_files(self) -> int | None:
        return self._max_files

    @property
    def combined_text(self) -> str:
        if self._override is not None:
            return self._override
        return combine_texts(self._files)

    @property
    def is_overridden(self) -> bool:
        return self._override is not None

    @property
    def can_add_more(self) -> bool:
        return self._max_files is None or len(self._files) < self._max_files

    @property
    def has_valid_files(self) -> bool:
        return any(f.state is FileState.EXTRACTED and f.text for f in self._files)

    @property
    def has_errors(self) -> bool:
        return any(f.state is FileState.ERRORED for f in self._files)

    @property
    def is_processing(self) -> bool:
        return any(f.is_processing for f in self._files)

    @property
    def stats(self) -> AggregateStats:
        extracted = [f for f in self._files if f.state is FileState.EXTRACTED and f.text]
        return AggregateStats(
            total_files=len(self._files),
            total_pages=sum(f.page_count for f in extracted),
            total_characters=sum(f.char_count for f in extracted),
            total_words=sum(f.word_count for f in extracted),
        )

    def get(self, file_id: str) -> SourceFile:
        for source_file in self._files:
            if source_file.file_id == file_id:
                return source_file
        raise UnknownFileError(f"Unknown file id: {file_id}")

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def register(self, source_file: SourceFile) -> SourceFile:
        """Add a file in pending state without extracting it.

        Raises:
            TooManyFilesError: if the upload limit is reached.
            DuplicateFileError: if a file with the same name and size exists.
        """
        if not self.can_add_more:
            raise TooManyFilesError(
                f"At most {self._max_files} files can be added at the same time"
            )
        if any(self._is_same_upload(f, source_file) for f in self._files):
            raise DuplicateFileError(f"{source_file.name} has already been added")
        self._files.append(source_file)
        self._file_set_changed()
        return source_file

    async def add_file(self, source_file: SourceFile) -> SourceFile:
        """Register a file and extract its text.

        Registration happens before the first suspension point, so several
        ``add_file`` calls running together extract their files concurrently.
        """
        self.register(source_file)
        await self._extract(source_file)
        return source_file

    async def add_files(self, source_files: list[SourceFile]) -> list[SourceFile]:
        """Register several files and extract them concurrently.

        The whole set is checked before anything is registered, so a
        rejected upload leaves the aggregator unchanged.
        """
        if self._max_files is not None and len(self._files) + len(source_files) > self._max_files:
            raise TooManyFilesError(
                f"At most {self._max_files} files can be added at the same time"
            )
        accepted: list[SourceFile] = list(self._files)
        for source_file in source_files:
            if any(self._is_same_upload(f, source_file) for f in accepted):
                raise DuplicateFileError(f"{source_file.name} has already been added")
            accepted.append(source_file)
        for source_file in source_files:
            self.register(source_file)
        await asyncio.gather(*(self._extract(f) for f in source_files))
        return source_files

    def remove_file(self, file_id: str) -> SourceFile:
        source_file = self.get(file_id)
        self._files.remove(source_file)
        self._file_set_changed()
        Log.debug(f"Removed {source_file.name} from aggregator")
        return source_file

    async def retry_file(self, file_id: str) -> bool:
        """Re-run extraction for an errored file.

        Returns:
            False when the file is not in an errored state (nothing is done),
            True when extraction was attempted again.
        """
        source_file = self.get(file_id)
        if source_file.state is not FileState.ERRORED:
            return False
        await self._extract(source_file)
        return True

    def override_combined_text(self, text: str) -> None:
        self._override = text

    def clear(self) -> None:
        self._files.clear()
        self._override = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _extract(self, source_file: SourceFile) -> None:
        if source_file.is_processing:
            return
        source_file.mark_processing()
        try:
            data = await asyncio.to_thread(source_file.read_bytes)
            validate_pdf(source_file.name, data, self._max_size_bytes)
            extracted = await asyncio.to_thread(self._pdf_extractor.extract, data)
        except (PdfExtractionError, OSError) as exc:
            source_file.mark_failed(str(exc))
            Log.warning(f"Text extraction failed for {source_file.name}: {exc}")
        else:
            source_file.mark_extracted(extracted)
            Log.info(
                f"Extracted {source_file.char_count} chars from {source_file.name} "
                f"({source_file.page_count} pages)"
            )
        finally:
            if source_file in self._files:
                self._file_set_changed()

    def _file_set_changed(self) -> None:
        self._override = None

    @staticmethod
    def _is_same_upload(a: SourceFile, b: SourceFile) -> bool:
        return a is b or (a.name == b.name and a.size_bytes == b.size_bytes)
