"""
Custom exceptions for asset resolution.
"""

from .interfaces import FailureKind


class AddressParseError(ValueError):
    """URL is not a recognisable object-store address."""
    pass


class FetchFailure(Exception):
    """A candidate (or a whole resolution) could not produce content."""

    def __init__(self, kind: FailureKind, message: str = None):
        super().__init__(message or kind.value)
        self.kind = kind

    @property
    def is_terminal(self) -> bool:
        return self.kind.is_terminal

    @property
    def http_status(self) -> int:
        return self.kind.http_status
