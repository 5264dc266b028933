"""Exception hierarchy for provider calls.

Only hard failures are exceptions. A successful HTTP exchange whose body
cannot be understood is not an error: adapters degrade it to the
``NO_RESPONSE`` sentinel instead.
"""

from __future__ import annotations

from typing import Optional

from terminator.model_providers.config import Provider


class ProviderError(Exception):
    """Base exception for provider-related errors."""

    def __init__(self, message: str, provider: Optional[Provider] = None):
        super().__init__(message)
        self.message = message
        self.provider = provider


class TransportError(ProviderError):
    """Raised when a request fails on the wire or returns a non-2xx status."""

    def __init__(
        self,
        message: str,
        provider: Optional[Provider] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, provider)
        self.status_code = status_code


class InvalidURLError(ProviderError):
    """Raised when a request URL cannot be composed for a model ID."""


class EmptyMessageError(ProviderError):
    """Raised when there is nothing to send after composing the draft."""
