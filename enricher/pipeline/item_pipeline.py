from pathlib import Path

from enricher.config.settings import Settings
from enricher.documents.file_loader import PdfFolder
from enricher.extraction.base import BaseExtractor
from enricher.extraction.factory import ExtractorFactory
from enricher.extraction.models import PropertySpec
from enricher.extraction.properties import load_properties
from enricher.logging.logger import Log
from enricher.pdf.base import BasePdfExtractor
from enricher.pdf.factory import PdfExtractorFactory
from enricher.pipeline.models import ExtractionItem, ItemStatus, StatusRecord
from enricher.pipeline.pipeline import PipelineContext, PipelineStep
from enricher.pipeline.steps import (
    AggregateDocumentsStep,
    CombineContentStep,
    FetchWebContentStep,
    MarkCompletedStep,
    MarkFailedStep,
    MarkProcessingStep,
    ResolveDocumentsStep,
    SubmitExtractionStep,
)
from enricher.web.base import BaseWebFetcher
from enricher.web.factory import WebFetcherFactory


class ItemPipeline:
    """Drives one item through the extraction steps.

    Pipeline: mark processing -> resolve documents -> aggregate -> fetch web
    content -> combine -> submit -> mark completed. Any failure is recorded
    on the item's status record; ``run`` never raises for item-level errors.
    """

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    async def run(self, item: ExtractionItem) -> StatusRecord:
        """Run every step for *item* and return its final status record.

        An item that already ran gets a fresh attempt; nothing is reused
        from the previous run.
        """
        if item.status.status is not ItemStatus.PENDING:
            item.new_attempt()
        context = PipelineContext(item=item)
        try:
            for step in self._steps:
                context = await step.run(context)
        except Exception as exc:
            context.error_message = str(exc) or exc.__class__.__name__
            await self._failed_step.run(context)
        return item.status


def build_item_pipeline(
    settings: Settings,
    *,
    pdf_folder: Path | None = None,
    properties: list[PropertySpec] | None = None,
    pdf_extractor: BasePdfExtractor | None = None,
    web_fetcher: BaseWebFetcher | None = None,
    extractor: BaseExtractor | None = None,
) -> ItemPipeline:
    """Build an ItemPipeline with all required adapters."""
    if properties is None:
        properties_path = Path(settings.properties_file) if settings.properties_file else None
        properties = load_properties(properties_path)
    folder = PdfFolder(pdf_folder) if pdf_folder is not None else None
    if folder is not None:
        Log.info(f"{len(folder)} PDF file(s) found in {folder.root}")

    steps: list[PipelineStep] = [
        MarkProcessingStep(),
        ResolveDocumentsStep(pdf_folder=folder),
        AggregateDocumentsStep(
            pdf_extractor=pdf_extractor or PdfExtractorFactory.create(settings),
            max_size_bytes=settings.max_pdf_size_bytes,
        ),
        FetchWebContentStep(web_fetcher=web_fetcher or WebFetcherFactory.create(settings)),
        CombineContentStep(),
        SubmitExtractionStep(
            extractor=extractor or ExtractorFactory.create(settings),
            properties=properties,
            ai_config=ExtractorFactory.ai_config(settings),
            search_method=settings.extraction_search_method,
        ),
        MarkCompletedStep(),
    ]
    return ItemPipeline(steps=steps, failed_step=MarkFailedStep())
