class RowSourceError(Exception):
    """Raised when the input rows cannot be read."""
