"""Domain-level exceptions.

All failures the product store can report are subclasses of
DomainException so the service layer can translate them into result
descriptors in one place.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Data was rejected by a field rule or by the store.

    Carries every violated rule, not just the first one.
    """

    def __init__(self, messages: list[str] | str) -> None:
        if isinstance(messages, str):
            messages = [messages]
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


class InsufficientStockError(ValidationError):
    """A stock reduction asked for more than is on hand."""

    def __init__(self, message: str = "Stock is not enough") -> None:
        super().__init__(message)


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StorageError(DomainException):
    """The persistence backend failed for a reason unrelated to the data."""
