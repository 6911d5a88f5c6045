"""
Pricefeed error hierarchy for clear classification in logs and API responses.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class PriceFeedError(Exception):
    """Base class for all pricefeed errors."""

    def __init__(
        self,
        message: str,
        *,
        instrument: Optional[str] = None,
        url: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.instrument = instrument
        self.url = url
        self.details = details or {}

    def as_dict(self) -> Dict[str, Any]:
        """Serializable representation for logs/API."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "instrument": self.instrument,
            "url": self.url,
            "details": self.details,
        }


class FetchError(PriceFeedError):
    """Raised when a candidate URL could not be retrieved."""


class FetchTimeoutError(FetchError):
    """The upstream did not answer within the configured timeout."""


class FetchNetworkError(FetchError):
    """Connection, DNS, TLS or protocol failure."""


class HttpStatusError(FetchError):
    """The upstream answered with a non-2xx status."""

    def __init__(self, message: str, *, status_code: int, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.status_code = status_code
        self.details["status_code"] = status_code


class ContentDecodeError(FetchError):
    """The body was retrieved but could not be decoded (e.g. invalid JSON)."""


class ParseError(PriceFeedError):
    """Raised when retrieved content cannot be parsed by a locator."""


class ConfigError(PriceFeedError):
    """Raised on missing/invalid configuration values."""

    def __init__(
        self,
        message: str,
        *,
        key: Optional[str] = None,
        section: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(message, **kwargs)
        self.key = key
        self.section = section
        if key is not None:
            self.details["key"] = key
        if section is not None:
            self.details["section"] = section
