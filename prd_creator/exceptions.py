"""Error taxonomy shared by services, providers and the tool boundary."""

from typing import Any


class PrdCreatorError(Exception):
    """Base class for every error surfaced to tool callers."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(PrdCreatorError):
    """Malformed or missing input. Returned verbatim to the caller."""


class NotFoundError(PrdCreatorError):
    """Unknown template, rule or log file."""


class ProviderError(PrdCreatorError):
    """A provider is unconfigured, its call failed, or it returned nothing."""

    def __init__(self, message: str, provider_id: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(message, details)
        self.provider_id = provider_id


class StoreError(PrdCreatorError):
    """The underlying store is unreachable or rejected a statement."""


class FatalProviderError(PrdCreatorError):
    """Not even the template provider can be built: the install is broken."""
