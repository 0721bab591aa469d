"""Runs many items through the item pipeline under a parallelism bound."""

import asyncio
from collections.abc import Iterable

from enricher.batch.models import BatchRun, BatchSummary
from enricher.logging.logger import Log
from enricher.pipeline.exceptions import InvalidItemError
from enricher.pipeline.item_pipeline import ItemPipeline
from enricher.pipeline.models import ExtractionItem
from enricher.pipeline.status_board import StatusBoard


class BatchOrchestrator:
    """Chunked dispatch: items within a chunk run concurrently, chunks run in order.

    At most ``parallelism`` pipelines are in flight at any moment. Item
    failures are tallied, never raised.
    """

    MIN_PARALLELISM = 1
    MAX_PARALLELISM = 10

    def __init__(self, pipeline: ItemPipeline, board: StatusBoard | None = None) -> None:
        self._pipeline = pipeline
        self._board = board if board is not None else StatusBoard()

    @property
    def board(self) -> StatusBoard:
        return self._board

    @classmethod
    def clamp_parallelism(cls, parallelism: int) -> int:
        return max(cls.MIN_PARALLELISM, min(cls.MAX_PARALLELISM, int(parallelism)))

    async def run(self, items: Iterable[ExtractionItem], parallelism: int) -> BatchSummary:
        """Process every item and return the final tally.

        Raises:
            InvalidItemError: before anything is dispatched, if an item has
                no product name or appears more than once.
        """
        items = list(items)
        self._reject_invalid(items)
        bound = self.clamp_parallelism(parallelism)
        for item in items:
            if item.item_id not in self._board:
                self._board.register(item)

        batch = BatchRun(items=items, parallelism=bound)
        Log.info("Starting batch", items=len(items), parallelism=bound)
        for index, chunk in enumerate(batch.chunks(), start=1):
            Log.debug("Dispatching chunk", chunk=index, size=len(chunk))
            records = await asyncio.gather(*(self._pipeline.run(item) for item in chunk))
            for record in records:
                batch.record(record)

        Log.info(
            f"Batch finished: {batch.completed} completed, {batch.failed} failed "
            f"of {len(items)}"
        )
        return batch.summary()

    @staticmethod
    def _reject_invalid(items: list[ExtractionItem]) -> None:
        seen: set[str] = set()
        for item in items:
            if not item.product_name.strip():
                raise InvalidItemError(
                    f"Item {item.article_number or item.item_id} has no product name"
                )
            if item.item_id in seen:
                raise InvalidItemError(
                    f"Item {item.article_number or item.item_id} is listed more than once"
                )
            seen.add(item.item_id)
