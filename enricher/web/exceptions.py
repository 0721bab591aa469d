class WebFetchError(Exception):
    """Raised when web content cannot be fetched because of a transport failure."""
