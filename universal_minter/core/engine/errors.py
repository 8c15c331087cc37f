from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class MintEngineError(Exception):
    """Base class for every failure raised by the mint engine."""


class DetectionError(MintEngineError):
    """The address has no deployed code or the chain could not be read."""

    def __init__(self, address: str, message: str | None = None):
        self.address = address
        super().__init__(message or f"Could not detect contract at {address}")


class ValidationError(MintEngineError):
    """A mint request failed validation against the detected contract.

    This is an expected, displayable condition: ``errors`` and
    ``missing_params`` carry the same lists as the ``ValidationResult``.
    """

    def __init__(self, errors: Sequence[str], missing_params: Sequence[str] = ()):
        self.errors = tuple(errors)
        self.missing_params = tuple(missing_params)
        parts = list(self.errors) + [f"missing: {p}" for p in self.missing_params]
        super().__init__("; ".join(parts) or "invalid mint request")

    def to_dict(self) -> dict[str, Any]:
        return {"errors": list(self.errors), "missing_params": list(self.missing_params)}


class PriceUnavailable(MintEngineError):
    """The dialect requires an explicit price and none could be read."""


class PriceQueryError(MintEngineError):
    """A price getter exists but reading it failed (timeout / unreachable)."""


class UnknownProvider(MintEngineError, LookupError):
    """No descriptor is registered for the provider."""


class PriceOverflowError(MintEngineError, OverflowError):
    """A wei amount does not fit in uint256."""
