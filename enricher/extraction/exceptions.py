class ExtractionError(Exception):
    """Raised when the extraction service cannot produce a result."""


class ExtractionValidationError(ExtractionError):
    """Raised when the service response fails domain validation."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the service call fails due to network/infrastructure issues."""


class ExtractionResponseError(ExtractionError):
    """Raised when the service answers with a non-2xx status."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        message = f"Extraction service responded with HTTP {status_code}"
        super().__init__(f"{message}: {detail}" if detail else message)
