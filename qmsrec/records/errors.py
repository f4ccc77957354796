"""Exceptions raised by record stores and their persistence layer."""

from typing import List, Optional


class RecordError(Exception):
    """Base class for record store errors."""


class ValidationError(RecordError, ValueError):
    """Form input failed required-field or type checks."""

    def __init__(
        self,
        message: str,
        missing: Optional[List[str]] = None,
        invalid: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.missing = list(missing or [])
        self.invalid = list(invalid or [])


class RecordNotFoundError(RecordError, KeyError):
    """No record with the given id exists in the store."""

    def __init__(self, module_key: str, record_id: str):
        super().__init__(f"Record '{record_id}' not found in '{module_key}'")
        self.module_key = module_key
        self.record_id = record_id

    def __str__(self) -> str:
        return self.args[0]


class PersistenceError(RecordError):
    """Saving a collection to the persistence adapter failed."""
