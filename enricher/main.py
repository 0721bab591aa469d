"""Command-line entry point: batch runs over a PDF folder or a single item."""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from enricher.batch.exceptions import RowSourceError
from enricher.batch.orchestrator import BatchOrchestrator
from enricher.batch.report import format_progress, summary_to_dict
from enricher.batch.rows import read_rows, rows_to_items
from enricher.config.settings import Settings
from enricher.documents.models import SourceFile
from enricher.extraction.exceptions import ExtractionError
from enricher.logging.logger import Log
from enricher.pipeline.exceptions import InvalidItemError
from enricher.pipeline.item_pipeline import build_item_pipeline
from enricher.pipeline.models import ExtractionItem, StatusRecord
from enricher.pipeline.status_board import StatusBoard

EXIT_OK = 0
EXIT_INVALID_INPUT = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="enricher",
        description="Extract product properties from PDFs and product pages",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    batch = sub.add_parser("batch", help="Process every row of a CSV against a PDF folder")
    batch.add_argument("--rows", required=True, type=Path, help="CSV with product rows")
    batch.add_argument("--pdf-folder", required=True, type=Path, help="Folder of PDF files")
    batch.add_argument("--parallelism", type=int, default=None, help="Items processed at once (1-10)")
    batch.add_argument("--output", type=Path, default=None, help="Write results as JSON")
    batch.add_argument("--include-text", action="store_true", help="Include source text in output")

    single = sub.add_parser("extract", help="Process a single product")
    single.add_argument("--product-name", required=True)
    single.add_argument("--article-number", default=None)
    single.add_argument("--url", default=None)
    single.add_argument("--pdf", action="append", type=Path, default=[], help="PDF file (repeatable)")
    single.add_argument("--output", type=Path, default=None, help="Write result as JSON")
    single.add_argument("--include-text", action="store_true", help="Include source text in output")
    return parser


def _print_progress(record: StatusRecord) -> None:
    print(format_progress(record), file=sys.stderr, flush=True)


async def _run_batch(args: argparse.Namespace, settings: Settings) -> dict[str, object]:
    rows = read_rows(args.rows)
    items = rows_to_items(rows, documents_required=True)
    pipeline = build_item_pipeline(settings, pdf_folder=args.pdf_folder)
    board = StatusBoard()
    board.subscribe(_print_progress)
    orchestrator = BatchOrchestrator(pipeline, board)
    parallelism = args.parallelism if args.parallelism is not None else settings.batch_parallelism
    summary = await orchestrator.run(items, parallelism)
    print(
        f"Batch extraction finished: {summary.completed} succeeded, "
        f"{summary.failed} failed of {summary.total}",
        file=sys.stderr,
    )
    return summary_to_dict(summary, include_text=args.include_text)


async def _run_single(args: argparse.Namespace, settings: Settings) -> dict[str, object]:
    if len(args.pdf) > settings.max_upload_files:
        raise InvalidItemError(f"At most {settings.max_upload_files} PDF files can be used")
    item = ExtractionItem(
        product_name=args.product_name,
        article_number=args.article_number,
        url=args.url,
        files=[SourceFile.from_path(p) for p in args.pdf],
    )
    pipeline = build_item_pipeline(settings)
    board = StatusBoard()
    board.subscribe(_print_progress)
    summary = await BatchOrchestrator(pipeline, board).run([item], parallelism=1)
    return summary_to_dict(summary, include_text=args.include_text)


def main(argv: list[str] | None = None) -> int:
    """Entry point: parse arguments -> load settings -> run -> write results."""
    args = _build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    runner = _run_batch if args.command == "batch" else _run_single
    try:
        report = asyncio.run(runner(args, settings))
    except (RowSourceError, InvalidItemError, NotADirectoryError, ExtractionError, ValueError) as exc:
        Log.error(str(exc))
        return EXIT_INVALID_INPUT

    output = json.dumps(report, ensure_ascii=False, indent=2)
    if args.output is not None:
        args.output.write_text(output, encoding="utf-8")
        Log.info(f"Results written to {args.output}")
    else:
        print(output)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
