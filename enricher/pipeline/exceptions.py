class PipelineError(Exception):
    """Base exception for item-level pipeline failures."""


class InvalidItemError(PipelineError):
    """Raised when an item cannot be dispatched, e.g. it has no product name."""


class NoMatchingDocumentError(PipelineError):
    """Raised when documents are required but none match the item."""


class NoExtractableTextError(PipelineError):
    """Raised when every document of an item failed text extraction."""


class EmptyContentError(PipelineError):
    """Raised when no text is left to submit after combining sources."""


class StatusTransitionError(PipelineError):
    """Raised when a status record is moved out of a terminal state or backwards."""
