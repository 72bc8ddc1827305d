"""Errors raised while importing menu spreadsheets.

Everything except :class:`BatchAborted` is scoped to one input row and ends
up as a ``"Row {n}: {message}"`` line in the import result.
"""


class ImportRowError(Exception):
    """Base class for failures attributed to a single row."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingRequiredField(ImportRowError):
    """A mandatory column is blank."""

    def __init__(self, field: str):
        super().__init__(f"Missing required field: {field}")
        self.field = field


class ReferenceNotFound(ImportRowError):
    """A category reference does not match any known category."""

    def __init__(self, value: str):
        super().__init__(f"Category not found: {value}")
        self.value = value


class InvalidFieldValue(ImportRowError):
    """A value is present but rejected by validation (e.g. negative price)."""

    def __init__(self, field: str, detail: str):
        super().__init__(f"Invalid value for {field}: {detail}")
        self.field = field
        self.detail = detail


class StoreOperationFailed(ImportRowError):
    """The store rejected a create or update; its message is passed through."""


class BatchAborted(Exception):
    """An error escaped the per-row boundary and stopped the batch."""

    def __init__(self, reason: str, processed: int):
        super().__init__(reason)
        self.reason = reason
        self.processed = processed


class UnsupportedFileType(ValueError):
    """The uploaded file is neither CSV nor Excel."""
