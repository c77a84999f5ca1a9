"""Exception hierarchy for page fetching, content extraction and search."""

from __future__ import annotations


class ScraperError(Exception):
    """Base exception for all fetch, parse and search errors."""

    pass


class FetchError(ScraperError):
    """Raised for transport failures and non-2xx HTTP responses.

    ``status_code`` is set when the server answered with an error status and
    is None for network-level failures (timeout, connection, DNS).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ParseError(ScraperError):
    """Raised when a response body cannot be parsed or traversed."""

    pass


class SearchError(ScraperError):
    """Raised when headless search fails (navigation, render wait, evaluation).

    The underlying exception is available as ``cause`` and as ``__cause__``.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(message)
