import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from enricher.documents.models import SourceFile
from enricher.extraction.models import ExtractionResult
from enricher.pipeline.exceptions import InvalidItemError, StatusTransitionError


class ItemStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    EXTRACTING = "extracting"
    COMPLETED = "completed"
    FAILED = "failed"


TERMINAL_STATUSES = frozenset({ItemStatus.COMPLETED, ItemStatus.FAILED})

PROGRESS_DISPATCHED = 25
PROGRESS_DOCUMENTS_AGGREGATED = 50
PROGRESS_WEB_FETCHED = 75
PROGRESS_COMPLETED = 100


@dataclass
class StatusRecord:
    """Progress of one extraction attempt.

    Written only by the pipeline that owns the item. Every change is pushed
    to ``listener`` so observers see live progress.
    """

    item_id: str
    product_name: str
    article_number: str | None = None
    url: str | None = None
    status: ItemStatus = ItemStatus.PENDING
    progress: int = 0
    result: ExtractionResult | None = None
    error: str | None = None
    warnings: list[str] = field(default_factory=list)
    document_text: str = ""
    web_content: str = ""
    listener: Callable[["StatusRecord"], None] | None = field(
        default=None, repr=False, compare=False
    )

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def start(self) -> None:
        if self.status is not ItemStatus.PENDING:
            raise StatusTransitionError(
                f"Item {self.item_id} cannot start from status '{self.status.value}'"
            )
        self.status = ItemStatus.PROCESSING
        self.progress = PROGRESS_DISPATCHED
        self._notify()

    def advance(self, progress: int) -> None:
        self._require_active()
        if progress < self.progress:
            raise StatusTransitionError(
                f"Item {self.item_id} progress cannot go back from {self.progress} to {progress}"
            )
        self.progress = min(progress, PROGRESS_COMPLETED)
        self._notify()

    def mark_extracting(self) -> None:
        self._require_active()
        self.status = ItemStatus.EXTRACTING
        self._notify()

    def complete(self, result: ExtractionResult) -> None:
        self._require_active()
        self.status = ItemStatus.COMPLETED
        self.progress = PROGRESS_COMPLETED
        self.result = result
        self.error = None
        self._notify()

    def fail(self, error: str) -> None:
        self._require_active()
        self.status = ItemStatus.FAILED
        self.error = error
        self._notify()

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)
        self._notify()

    def capture(self, *, document_text: str | None = None, web_content: str | None = None) -> None:
        if document_text is not None:
            self.document_text = document_text
        if web_content is not None:
            self.web_content = web_content

    def _require_active(self) -> None:
        if self.is_terminal:
            raise StatusTransitionError(
                f"Item {self.item_id} is already {self.status.value}"
            )

    def _notify(self) -> None:
        if self.listener is not None:
            self.listener(self)


@dataclass(eq=False)
class ExtractionItem:
    """One article/product to enrich.

    ``files`` are documents attached directly to the item. In folder-batch
    mode ``files`` stays empty, documents are looked up by article number and
    ``documents_required`` is set. ``document_text`` carries text that was
    already aggregated (and possibly edited by hand); when set, the documents
    are not extracted again.
    """

    product_name: str
    article_number: str | None = None
    url: str | None = None
    files: list[SourceFile] = field(default_factory=list)
    documents_required: bool = False
    document_text: str | None = None
    item_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    status: StatusRecord = field(init=False)

    def __post_init__(self) -> None:
        self.product_name = (self.product_name or "").strip()
        if not self.product_name:
            raise InvalidItemError(
                f"Item {self.article_number or self.item_id} has no product name"
            )
        self.article_number = (str(self.article_number).strip() or None) if self.article_number else None
        self.url = (self.url or "").strip() or None
        self.status = self._new_record()

    def new_attempt(self) -> StatusRecord:
        """Replace the status record with a fresh pending one for a retry."""
        listener = self.status.listener
        self.status = self._new_record()
        self.status.listener = listener
        self.status._notify()
        return self.status

    def _new_record(self) -> StatusRecord:
        return StatusRecord(
            item_id=self.item_id,
            product_name=self.product_name,
            article_number=self.article_number,
            url=self.url,
        )
