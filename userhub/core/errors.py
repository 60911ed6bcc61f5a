"""
Error taxonomy shared by the validation gate, the store and the API.

Every error carries an :class:`ErrorKind`.  The HTTP layer maps kinds to
status codes through :data:`STATUS_BY_KIND`; today every kind answers 400,
so splitting e.g. ``UNAVAILABLE`` out to 503 is a one-line change there.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"


STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.CONFLICT: 400,
    ErrorKind.UNAVAILABLE: 400,
}


class UserhubError(Exception):
    """Base class for every error the service reports to clients."""

    kind: ErrorKind = ErrorKind.UNAVAILABLE

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def to_dict(self) -> Dict[str, Any]:
        return {"name": type(self).__name__, "message": str(self)}


class ValidationError(UserhubError):
    """One or more field-level violations."""

    kind = ErrorKind.VALIDATION

    def __init__(self, violations: List[Any]):
        super().__init__(f"{len(violations)} invalid field(s)")
        self.violations = list(violations)

    def to_dict(self) -> Dict[str, Any]:
        return {"errors": [v.to_dict() for v in self.violations]}


class PersistenceError(UserhubError):
    """A store operation failed.  ``details`` holds the raw driver payload."""

    kind = ErrorKind.UNAVAILABLE

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = dict(details or {})

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload.update(self.details)
        return payload


class DuplicateKeyError(PersistenceError):
    """A unique index (``username`` or ``email``) rejected the write."""

    kind = ErrorKind.CONFLICT


class InvalidDocumentError(PersistenceError):
    """The driver could not encode the document (e.g. text that is not valid UTF-8)."""

    kind = ErrorKind.VALIDATION


class StoreUnavailableError(PersistenceError):
    """The store is not configured, unreachable, or did not answer in time."""

    kind = ErrorKind.UNAVAILABLE
