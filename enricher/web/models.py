from dataclasses import dataclass


@dataclass(frozen=True)
class WebContentResult:
    """Outcome of fetching the text of a product page.

    ``success=False`` is a soft failure: the caller continues without web text.
    """

    success: bool
    content: str = ""
    method: str = ""
    error: str | None = None

    @property
    def has_content(self) -> bool:
        return self.success and bool(self.content.strip())
