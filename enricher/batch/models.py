from collections.abc import Iterator
from dataclasses import dataclass, field

from enricher.pipeline.models import ExtractionItem, ItemStatus, StatusRecord


@dataclass(frozen=True)
class BatchSummary:
    """Final tally of a batch run plus the records of every item."""

    total: int
    completed: int
    failed: int
    records: list[StatusRecord] = field(default_factory=list)


@dataclass
class BatchRun:
    """Items of one batch, the parallelism bound and the running tally."""

    items: list[ExtractionItem]
    parallelism: int
    completed: int = 0
    failed: int = 0

    def chunks(self) -> Iterator[list[ExtractionItem]]:
        """Consecutive groups of ``parallelism`` items; the last may be smaller."""
        for start in range(0, len(self.items), self.parallelism):
            yield self.items[start:start + self.parallelism]

    def record(self, status: StatusRecord) -> None:
        if status.status is ItemStatus.COMPLETED:
            self.completed += 1
        elif status.status is ItemStatus.FAILED:
            self.failed += 1

    def summary(self) -> BatchSummary:
        return BatchSummary(
            total=len(self.items),
            completed=self.completed,
            failed=self.failed,
            records=[item.status for item in self.items],
        )
