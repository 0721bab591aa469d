import asyncio
from pathlib import Path

import pytest

from enricher.batch.models import BatchRun
from enricher.batch.orchestrator import BatchOrchestrator
from enricher.config.settings import Settings
from enricher.extraction.models import ExtractionResult, PropertySpec
from enricher.pipeline.exceptions import InvalidItemError
from enricher.pipeline.item_pipeline import build_item_pipeline
from enricher.pipeline.models import ExtractionItem, ItemStatus, StatusRecord
from enricher.pipeline.status_board import StatusBoard
from tests.fakes import FakeExtractor, FakePdfExtractor, FakeWebFetcher


class CountingPipeline:
    """Completes every item after a few event-loop turns, tracking concurrency."""

    def __init__(self, failing: set[str] | None = None) -> None:
        self.failing = failing or set()
        self.in_flight = 0
        self.max_in_flight = 0
        self.started: list[str] = []

    async def run(self, item: ExtractionItem) -> StatusRecord:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        self.started.append(item.product_name)
        item.status.start()
        for _ in range(3):
            await asyncio.sleep(0)
        if item.product_name in self.failing:
            item.status.fail("boom")
        else:
            item.status.complete(ExtractionResult(search_method="pdf"))
        self.in_flight -= 1
        return item.status


def _items(count: int) -> list[ExtractionItem]:
    return [ExtractionItem(product_name=f"P{i}", article_number=f"A{i}") for i in range(count)]


class TestBatchRun:
    def test_chunks_are_consecutive(self) -> None:
        items = _items(7)
        chunks = list(BatchRun(items=items, parallelism=3).chunks())
        assert [len(c) for c in chunks] == [3, 3, 1]
        assert [i for chunk in chunks for i in chunk] == items

    def test_no_chunks_for_empty_batch(self) -> None:
        assert list(BatchRun(items=[], parallelism=3).chunks()) == []


class TestClampParallelism:
    @pytest.mark.parametrize(("requested", "bound"), [(0, 1), (-5, 1), (1, 1), (4, 4), (10, 10), (50, 10)])
    def test_bounds(self, requested: int, bound: int) -> None:
        assert BatchOrchestrator.clamp_parallelism(requested) == bound


class TestBatchOrchestrator:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("parallelism", [1, 2, 3, 5])
    async def test_never_exceeds_parallelism(self, parallelism: int) -> None:
        pipeline = CountingPipeline()
        summary = await BatchOrchestrator(pipeline).run(_items(11), parallelism)  # type: ignore[arg-type]
        assert pipeline.max_in_flight == parallelism
        assert summary.completed == 11

    @pytest.mark.asyncio
    async def test_items_are_dispatched_in_input_order(self) -> None:
        pipeline = CountingPipeline()
        await BatchOrchestrator(pipeline).run(_items(5), parallelism=2)  # type: ignore[arg-type]
        assert pipeline.started == ["P0", "P1", "P2", "P3", "P4"]

    @pytest.mark.asyncio
    async def test_tally_adds_up(self) -> None:
        pipeline = CountingPipeline(failing={"P1", "P4"})
        summary = await BatchOrchestrator(pipeline).run(_items(6), parallelism=4)  # type: ignore[arg-type]
        assert (summary.total, summary.completed, summary.failed) == (6, 4, 2)
        assert summary.completed + summary.failed == summary.total
        assert [r.product_name for r in summary.records] == [f"P{i}" for i in range(6)]

    @pytest.mark.asyncio
    async def test_empty_batch(self) -> None:
        summary = await BatchOrchestrator(CountingPipeline()).run([], parallelism=3)  # type: ignore[arg-type]
        assert (summary.total, summary.completed, summary.failed) == (0, 0, 0)

    @pytest.mark.asyncio
    async def test_invalid_item_is_rejected_before_dispatch(self) -> None:
        items = _items(3)
        items[2].product_name = "  "
        pipeline = CountingPipeline()
        with pytest.raises(InvalidItemError, match="no product name"):
            await BatchOrchestrator(pipeline).run(items, parallelism=3)  # type: ignore[arg-type]
        assert pipeline.started == []

    @pytest.mark.asyncio
    async def test_repeated_item_is_rejected_before_dispatch(self) -> None:
        items = _items(2)
        items.append(items[0])
        pipeline = CountingPipeline()
        with pytest.raises(InvalidItemError, match="more than once"):
            await BatchOrchestrator(pipeline).run(items, parallelism=3)  # type: ignore[arg-type]
        assert pipeline.started == []

    @pytest.mark.asyncio
    async def test_items_are_registered_on_board(self) -> None:
        board = StatusBoard()
        seen: list[str] = []
        board.subscribe(lambda r: seen.append(r.status.value))
        items = _items(2)
        await BatchOrchestrator(CountingPipeline(), board).run(items, parallelism=2)  # type: ignore[arg-type]
        assert len(board) == 2
        assert board.tally()["completed"] == 2
        assert seen.count("completed") == 2


class TestBatchOrchestratorWithPipeline:
    def _orchestrator(self, folder: Path, extractor: FakeExtractor | None = None) -> BatchOrchestrator:
        pipeline = build_item_pipeline(
            Settings(),
            pdf_folder=folder,
            properties=[PropertySpec(name="Width")],
            pdf_extractor=FakePdfExtractor(),
            web_fetcher=FakeWebFetcher(),
            extractor=extractor or FakeExtractor(),
        )
        return BatchOrchestrator(pipeline)

    @pytest.mark.asyncio
    async def test_one_match_one_miss(self, tmp_path: Path) -> None:
        (tmp_path / "A1.pdf").write_bytes(b"%PDF Width 600 mm")
        items = [
            ExtractionItem(product_name="Boiler X", article_number="A1", documents_required=True),
            ExtractionItem(product_name="Boiler Y", article_number="A2", documents_required=True),
        ]
        summary = await self._orchestrator(tmp_path).run(items, parallelism=1)

        assert (summary.completed, summary.failed) == (1, 1)
        first, second = summary.records
        assert first.status is ItemStatus.COMPLETED
        assert second.status is ItemStatus.FAILED
        assert second.error == "No matching document found for article A2"

    @pytest.mark.asyncio
    async def test_nothing_matches(self, tmp_path: Path) -> None:
        (tmp_path / "Z9.pdf").write_bytes(b"%PDF unrelated")
        extractor = FakeExtractor()
        items = [
            ExtractionItem(product_name=f"P{i}", article_number=f"A{i}", documents_required=True)
            for i in range(4)
        ]
        summary = await self._orchestrator(tmp_path, extractor).run(items, parallelism=3)
        assert (summary.completed, summary.failed) == (0, 4)
        assert extractor.requests == []

    @pytest.mark.asyncio
    async def test_extraction_failure_does_not_stop_batch(self, tmp_path: Path) -> None:
        for article in ("A1", "A2", "A3"):
            (tmp_path / f"{article}.pdf").write_bytes(f"%PDF text {article}".encode())
        items = [
            ExtractionItem(product_name=f"P{a}", article_number=a, documents_required=True)
            for a in ("A1", "A2", "A3")
        ]
        extractor = FakeExtractor(failing={"PA2"})
        summary = await self._orchestrator(tmp_path, extractor).run(items, parallelism=2)
        assert (summary.completed, summary.failed) == (2, 1)
        assert summary.records[1].error == "Extraction service responded with HTTP 500"
