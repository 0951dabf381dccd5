"""Exceptions raised by the Tripjack gateway."""

from typing import Any, Dict, Optional, Sequence


class TripjackError(Exception):
    """Base class for gateway errors carrying a user-facing message."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigError(TripjackError):
    """Required configuration is missing or malformed."""


class ValidationError(TripjackError):
    """Required input fields are missing. Raised before any upstream call."""
    def __init__(self, fields: Sequence[str]):
        self.fields = tuple(fields)
        noun = "field" if len(self.fields) == 1 else "fields"
        super().__init__(f"Missing required {noun}: {', '.join(self.fields)}")


class UpstreamError(TripjackError):
    """The Tripjack API call failed (transport error, non-2xx or bad body)."""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message, {"status_code": status_code} if status_code else None)
