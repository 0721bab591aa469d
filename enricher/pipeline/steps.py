from enricher.content.combiner import combine
from enricher.documents.aggregator import DocumentAggregator
from enricher.documents.file_loader import PdfFolder
from enricher.documents.models import FileState
from enricher.extraction.base import BaseExtractor
from enricher.extraction.models import AIConfig, ExtractionRequest, PropertySpec
from enricher.logging.logger import Log
from enricher.pdf.base import BasePdfExtractor
from enricher.pipeline.exceptions import (
    EmptyContentError,
    NoExtractableTextError,
    NoMatchingDocumentError,
)
from enricher.pipeline.models import PROGRESS_DOCUMENTS_AGGREGATED, PROGRESS_WEB_FETCHED
from enricher.pipeline.pipeline import PipelineContext, PipelineStep
from enricher.web.base import BaseWebFetcher
from enricher.web.exceptions import WebFetchError


def _label(context: PipelineContext) -> str:
    item = context.item
    return item.article_number or item.product_name


class MarkProcessingStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        context.record.start()
        Log.info(f"Item {_label(context)} marked as processing", item_id=context.item.item_id)
        return context


class MarkFailedStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        context.record.fail(context.error_message)
        Log.error(
            f"Item {_label(context)} marked as failed: {context.error_message}",
            item_id=context.item.item_id,
        )
        return context


class MarkCompletedStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.result is None:
            raise ValueError("PipelineContext.result must be set before completion")
        context.record.complete(context.result)
        Log.info(
            f"Item {_label(context)} completed",
            item_id=context.item.item_id,
            properties=context.result.property_count,
        )
        return context


class ResolveDocumentsStep(PipelineStep):
    """Collects the item's documents: attached files or folder matches."""

    def __init__(self, pdf_folder: PdfFolder | None = None) -> None:
        self._pdf_folder = pdf_folder

    async def run(self, context: PipelineContext) -> PipelineContext:
        item = context.item
        if item.document_text is not None:
            context.documents = []
            return context
        if item.files:
            context.documents = list(item.files)
        elif self._pdf_folder is not None:
            context.documents = self._pdf_folder.source_files(item.article_number)
        else:
            context.documents = []

        if not context.documents and item.documents_required:
            raise NoMatchingDocumentError(
                f"No matching document found for article {item.article_number or '-'}"
            )
        if context.documents:
            names = ", ".join(d.name for d in context.documents)
            Log.info(f"Found {len(context.documents)} document(s) for {_label(context)}: {names}")
        return context


class AggregateDocumentsStep(PipelineStep):
    """Extracts every document and builds the combined document text.

    Individual failures become warnings; the item fails only when no
    document yields text.
    """

    def __init__(self, pdf_extractor: BasePdfExtractor, max_size_bytes: int | None = None) -> None:
        self._pdf_extractor = pdf_extractor
        self._max_size_bytes = max_size_bytes

    async def run(self, context: PipelineContext) -> PipelineContext:
        item = context.item
        if item.document_text is not None:
            context.document_text = item.document_text
        elif context.documents:
            aggregator = DocumentAggregator(
                self._pdf_extractor,
                max_files=None,
                max_size_bytes=self._max_size_bytes,
            )
            await aggregator.add_files(context.documents)
            for source_file in aggregator.files:
                if source_file.state is FileState.ERRORED:
                    context.record.add_warning(f"{source_file.name}: {source_file.error}")
            if not aggregator.has_valid_files:
                raise NoExtractableTextError(
                    f"No text could be extracted from {len(context.documents)} document(s)"
                )
            context.document_text = aggregator.combined_text
            Log.info(
                f"Extracted text from {aggregator.stats.total_files} document(s) "
                f"for {_label(context)}"
            )

        context.record.capture(document_text=context.document_text)
        context.record.advance(PROGRESS_DOCUMENTS_AGGREGATED)
        return context


class FetchWebContentStep(PipelineStep):
    """Adds the product page text when the item has a URL.

    Any fetch problem is recorded as a warning and the item continues with
    its document text alone.
    """

    def __init__(self, web_fetcher: BaseWebFetcher) -> None:
        self._web_fetcher = web_fetcher

    async def run(self, context: PipelineContext) -> PipelineContext:
        url = context.item.url
        if url:
            Log.info(f"Fetching web content from: {url}")
            try:
                result = await self._web_fetcher.fetch(url, context.item.article_number)
            except WebFetchError as exc:
                self._warn(context, f"Web content unavailable for {url}: {exc}")
            except Exception as exc:
                self._warn(context, f"Web content unavailable for {url}: {exc!r}")
            else:
                if result.has_content:
                    context.web_content = result.content
                    context.web_label = url
                else:
                    self._warn(
                        context,
                        f"Web content unavailable for {url}: {result.error or 'no content'}",
                    )

        context.record.capture(web_content=context.web_content)
        context.record.advance(PROGRESS_WEB_FETCHED)
        return context

    @staticmethod
    def _warn(context: PipelineContext, message: str) -> None:
        Log.warning(message)
        context.record.add_warning(message)


class CombineContentStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        context.combined_text = combine(
            context.document_text,
            context.web_content,
            context.web_label,
        )
        if not context.combined_text:
            raise EmptyContentError(f"No text available for extraction of {_label(context)}")
        return context


class SubmitExtractionStep(PipelineStep):
    def __init__(
        self,
        extractor: BaseExtractor,
        properties: list[PropertySpec],
        ai_config: AIConfig,
        search_method: str = "pdf",
    ) -> None:
        self._extractor = extractor
        self._properties = list(properties)
        self._ai_config = ai_config
        self._search_method = search_method

    async def run(self, context: PipelineContext) -> PipelineContext:
        item = context.item
        context.record.mark_extracting()
        request = ExtractionRequest(
            article_number=item.article_number,
            product_name=item.product_name,
            combined_text=context.combined_text,
            properties=self._properties,
            ai_config=self._ai_config,
            search_method=self._search_method,
        )
        Log.debug(
            f"Submitting {len(context.combined_text)} chars for {_label(context)} "
            f"with {len(self._properties)} properties"
        )
        context.result = await self._extractor.extract(request)
        return context
