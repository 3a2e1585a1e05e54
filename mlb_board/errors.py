# mlb_board/errors.py
"""
Error taxonomy for board building.

Day-level FetchErrors drop the day; image-level FetchErrors degrade to a fallback
record. Only NoScheduleDataError is meant to reach the user.
"""

from __future__ import annotations

from typing import Optional


class BoardError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(BoardError):
    """Invalid application configuration."""


class FetchError(BoardError):
    """A network retrieval or decode failed."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url

    def __str__(self) -> str:
        base = super().__str__()
        return f"{base} ({self.url})" if self.url else base


class MalformedURLError(FetchError):
    """The request URL could not be built or parsed."""


class TransportError(FetchError):
    """Connection-level failure."""


class FetchTimeoutError(TransportError):
    """The request did not complete within the configured timeout."""


class ResponseError(FetchError):
    """Non-2xx status, or a body that could not be read."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(message, url)
        self.status_code = status_code


class SchemaError(FetchError):
    """The payload did not match the expected schedule structure."""


class NoScheduleDataError(BoardError):
    """Every configured day failed to load."""
