from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from enricher.documents.models import SourceFile
from enricher.extraction.models import ExtractionResult
from enricher.pipeline.models import ExtractionItem, StatusRecord


@dataclass(slots=True)
class PipelineContext:
    item: ExtractionItem
    documents: list[SourceFile] = field(default_factory=list)
    document_text: str = ""
    web_content: str = ""
    web_label: str | None = None
    combined_text: str = ""
    result: ExtractionResult | None = None
    error_message: str = ""

    @property
    def record(self) -> StatusRecord:
        return self.item.status


class PipelineStep(ABC):
    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
