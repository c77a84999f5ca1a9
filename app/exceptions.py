"""Custom exceptions for the grokipedia-api service.

Errors raised by the extraction components live in
``app.services.extractors.exceptions``; this module holds the errors that
originate from the caller's input.
"""

from __future__ import annotations


class ValidationError(Exception):
    """Raised when a required request input is missing or empty.

    Mapped to HTTP 400 by the API layer.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
