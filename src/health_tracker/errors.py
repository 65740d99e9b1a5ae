"""Exception hierarchy for health-tracker."""


class HealthTrackerError(Exception):
    """Base class for all health-tracker errors."""


class StorageError(HealthTrackerError):
    """The record store could not be opened, read or written."""


class DuplicateRecordError(StorageError):
    """A record with the same key already exists."""

    def __init__(self, kind: str, key: str):
        super().__init__(f"{kind} record {key!r} already exists")
        self.kind = kind
        self.key = key


class ValidationError(HealthTrackerError, ValueError):
    """Input was rejected before any data was changed."""


class BackupError(ValidationError):
    """A backup bundle is malformed or from an unsupported version."""
