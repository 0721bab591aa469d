"""Live feed of status records for progress display."""

import dataclasses
from collections import Counter
from collections.abc import Callable

from enricher.logging.logger import Log
from enricher.pipeline.models import ExtractionItem, ItemStatus, StatusRecord

Subscriber = Callable[[StatusRecord], None]


class StatusBoard:
    """Ordered collection of items whose status records can be observed.

    Each record is written by exactly one pipeline; the board only relays
    changes to subscribers and offers consistent read views.
    """

    def __init__(self) -> None:
        self._items: dict[str, ExtractionItem] = {}
        self._subscribers: list[Subscriber] = []

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def register(self, item: ExtractionItem) -> StatusRecord:
        if item.item_id in self._items:
            raise ValueError(f"Item {item.item_id} is already registered")
        self._items[item.item_id] = item
        item.status.listener = self._publish
        return item.status

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register *callback* for every record change; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def get(self, item_id: str) -> StatusRecord:
        return self._items[item_id].status

    def records(self) -> list[StatusRecord]:
        return [item.status for item in self._items.values()]

    def snapshot(self) -> list[StatusRecord]:
        """Detached copies of the current records."""
        return [
            dataclasses.replace(record, warnings=list(record.warnings), listener=None)
            for record in self.records()
        ]

    def tally(self) -> dict[str, int]:
        counts = Counter(record.status for record in self.records())
        return {status.value: counts.get(status, 0) for status in ItemStatus}

    def _publish(self, record: StatusRecord) -> None:
        for callback in list(self._subscribers):
            try:
                callback(record)
            except Exception as exc:
                Log.error(f"Status subscriber failed for item {record.item_id}: {exc}")
