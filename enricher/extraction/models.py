from dataclasses import dataclass, field


@dataclass(frozen=True)
class PropertySpec:
    """One requested property: its name and the expected value format."""

    name: str
    type: str = "text"
    description: str = ""


@dataclass(frozen=True)
class AIConfig:
    """Credentials and model selection forwarded with each extraction call."""

    provider: str = "openai"
    model: str = ""
    api_key: str = field(default="", repr=False)


@dataclass(frozen=True)
class ExtractionRequest:
    """Everything the extraction service needs for one item."""

    article_number: str | None
    product_name: str
    combined_text: str
    properties: list[PropertySpec]
    ai_config: AIConfig = field(default_factory=AIConfig)
    search_method: str = "pdf"


@dataclass(frozen=True)
class Source:
    """Where a property value was found."""

    url: str
    title: str | None = None
    source_label: str | None = None


@dataclass(frozen=True)
class PropertyResult:
    """A single extracted property value with provenance and confidence."""

    name: str
    value: str
    sources: list[Source] = field(default_factory=list)
    confidence: float = 0.0
    is_consistent: bool | None = None
    consistency_count: int | None = None
    source_count: int | None = None

    @property
    def consistency_tier(self) -> str:
        """Coarse corroboration signal: none, low, medium or high."""
        count = self.consistency_count
        if count is None:
            count = 1 if self.value and self.sources else 0
        if count <= 0:
            return "none"
        if count == 1:
            return "low"
        if count == 2:
            return "medium"
        return "high"


@dataclass(frozen=True)
class ProductResult:
    """Extracted properties for one product."""

    product_name: str
    article_number: str | None = None
    properties: dict[str, PropertyResult] = field(default_factory=dict)


@dataclass(frozen=True)
class RawContent:
    """Text the service analysed, returned for diagnostics."""

    source_label: str
    content: str
    title: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class ExtractionResult:
    """Output of the extraction service for one request."""

    search_method: str
    products: list[ProductResult] = field(default_factory=list)
    raw_content: list[RawContent] = field(default_factory=list)

    @property
    def property_count(self) -> int:
        return sum(len(p.properties) for p in self.products)
