"""
Check-in domain errors.

Persistence errors carry a ``fatal`` flag: the orchestrator aborts the
request on fatal ones and only logs the rest.
"""

from typing import Optional


class CheckInError(Exception):
    """Base class for check-in pipeline errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingRequiredField(CheckInError):
    """energy or focus missing or not a finite number."""

    def __init__(self, field: str):
        super().__init__("Missing required fields")
        self.field = field


class PersistenceError(CheckInError):
    """A datastore read or write failed."""

    def __init__(self, message: str, fatal: bool = True, collection: Optional[str] = None):
        super().__init__(message)
        self.fatal = fatal
        self.collection = collection


class RangeConstraintViolation(PersistenceError):
    """The store rejected a value outside its configured numeric range."""
