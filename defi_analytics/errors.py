"""Exceptions raised by data sources."""


class SourceFetchError(Exception):
    """A data source could not deliver a collection.

    Refresh failures are transient by default; the refresh controller keeps
    its timer running and retries on the next tick.
    """

    def __init__(self, message: str, retryable: bool = True) -> None:
        super().__init__(message)
        self.retryable = retryable
