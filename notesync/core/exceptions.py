"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a note, notebook or recovery point cannot be found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class ExternalServiceError(ApplicationError):
    """Raised when a call to the remote note store fails."""

    def __init__(self, message: str = "External service error") -> None:
        super().__init__(message, code="SYS_EXTERNAL_SERVICE_ERROR")


class DatabaseError(ApplicationError):
    """Raised when a local store operation fails."""

    def __init__(self, message: str = "Database error") -> None:
        super().__init__(message, code="SYS_DATABASE_ERROR")


class EditorError(ApplicationError):
    """Raised when the external editor cannot be run or exits with an error."""

    def __init__(self, message: str = "Editor failed") -> None:
        super().__init__(message, code="EDITOR_FAILED")


class DocumentEncodingError(ApplicationError):
    """Raised when an edited document cannot be decoded."""

    def __init__(self, message: str = "Document could not be decoded") -> None:
        super().__init__(message, code="DOC_ENCODING_ERROR")


class RecoveryPointError(ApplicationError):
    """
    Raised when saving a note failed and the recovery point could not be written.

    The message carries both failures so the user knows the edit only
    exists in memory.
    """

    def __init__(self, save_error: Exception, recovery_error: Exception) -> None:
        self.save_error = save_error
        self.recovery_error = recovery_error
        super().__init__(
            f"Error when saving note: {save_error}\n"
            f"Failed to create recovery point: {recovery_error}",
            code="NOTE_RECOVERY_FAILED",
        )
