"""Error kinds shared by the data access layer and the HTTP boundary."""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """What went wrong, independent of transport."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORAGE_UNAVAILABLE = "storage_unavailable"


class BoxTrackerError(Exception):
    """Base error; carries its kind and the HTTP status it maps to."""

    kind: ErrorKind = ErrorKind.STORAGE_UNAVAILABLE
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(BoxTrackerError):
    kind = ErrorKind.VALIDATION
    status_code = 400


class NotFoundError(BoxTrackerError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404


class StorageError(BoxTrackerError):
    """Connectivity or constraint failure reported by the database."""

    kind = ErrorKind.STORAGE_UNAVAILABLE
    status_code = 500
