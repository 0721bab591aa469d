class AggregatorError(Exception):
    """Base exception for document aggregator errors."""


class TooManyFilesError(AggregatorError):
    """Raised when adding a file would exceed the upload limit."""


class DuplicateFileError(AggregatorError):
    """Raised when a file with the same name and size is already registered."""


class UnknownFileError(AggregatorError):
    """Raised when a file id does not belong to the aggregator."""
