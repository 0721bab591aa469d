class PdfExtractionError(Exception):
    """Raised when a PDF cannot be read or its text cannot be extracted."""


class InvalidFileError(PdfExtractionError):
    """Raised when an uploaded file is not an acceptable PDF."""
