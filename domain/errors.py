"""
Error kinds raised by the BOE adapters.

The orchestrator converts every one of these into result fields, so they only
escape to the user when something outside the per-article loop fails.
"""

from typing import Optional


class CheckerError(Exception):
    """Base class for errors raised while querying the BOE API."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class NotFoundError(CheckerError):
    """The requested document, index or block does not exist."""


class TransportError(CheckerError):
    """Network failure or unexpected HTTP status from the API."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, url)
        self.status_code = status_code


class MalformedResponseError(CheckerError):
    """The API answered with a body that cannot be interpreted."""
