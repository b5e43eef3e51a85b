# src/notes_api/exceptions.py

"""
Shared custom exceptions for the Notes API service.

Exception Hierarchy:
- NotesApiError (base)
  - ConfigurationError
  - NoteStoreError
  - NoteSerializationError
  - InvalidRequestBodyError
"""

from typing import Any, Dict, Optional


class NotesApiError(Exception):
    """Base exception for all Notes API errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = dict(context) if context else {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
        }


class ConfigurationError(NotesApiError):
    """Raised when there's an error in the application configuration."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, error_code="CONFIGURATION_ERROR", **kwargs)


class NoteStoreError(NotesApiError):
    """Raised when the note store cannot produce a snapshot."""

    def __init__(self, source: str, reason: str, **kwargs):
        message = f"Note store unavailable ({source}): {reason}"
        context = {"source": source, "reason": reason}
        super().__init__(message, error_code="NOTE_STORE_ERROR", context=context, **kwargs)


class NoteSerializationError(NotesApiError):
    """Raised when a note cannot be encoded as JSON."""

    def __init__(self, note_id: str | None, reason: str, **kwargs):
        message = f"Failed to serialize note {note_id!r}: {reason}"
        context = {"note_id": note_id, "reason": reason}
        super().__init__(
            message, error_code="NOTE_SERIALIZATION_FAILED", context=context, **kwargs
        )


class InvalidRequestBodyError(NotesApiError):
    """Raised when an update request carries an unusable body."""

    def __init__(self, reason: str, **kwargs):
        message = f"Invalid request body: {reason}"
        context = dict(kwargs.pop("context", None) or {})
        context["reason"] = reason
        super().__init__(
            message, error_code="INVALID_REQUEST_BODY", context=context, **kwargs
        )


# === Utility Functions ===


def get_error_context(error: Exception) -> Dict[str, Any]:
    """Extract error context for logging."""
    if isinstance(error, NotesApiError):
        return error.to_dict()
    return {
        "error_type": error.__class__.__name__,
        "message": str(error),
    }
