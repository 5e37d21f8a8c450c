"""
adr-keeper Exceptions

Custom exception types for the record store, with remediation suggestions.
"""

from typing import Optional


class ADRError(Exception):
    """Base exception for all adr-keeper errors."""

    def __init__(
        self,
        message: str,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        """Initialize the error.

        Args:
            message: Human-readable error message
            remediation: Suggested fix for the user
            details: Technical details for debugging
        """
        super().__init__(message)
        self.message = message
        self.remediation = remediation
        self.details = details

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.remediation:
            parts.append(f"To fix: {self.remediation}")
        return "\n".join(parts)


class StoreUnavailable(ADRError):
    """The record directory cannot be listed, created, or written to."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.path = path
        if not remediation and path:
            remediation = f"Check that '{path}' exists and is readable and writable"
        super().__init__(message, remediation, details)


class IndexWriteFailed(StoreUnavailable):
    """The record was persisted but the index could not be rebuilt."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        if not remediation:
            remediation = "Fix the problem and run 'adr-keeper reindex' to regenerate the index"
        super().__init__(message, path, remediation, details)


class MissingTitle(ADRError):
    """A new record was requested without a title."""

    def __init__(
        self,
        message: str,
        number: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.number = number
        if not remediation:
            remediation = "Pass --title when creating a new ADR"
        super().__init__(message, remediation, details)


class RecordUnreadable(ADRError):
    """An existing record could not be read."""

    def __init__(
        self,
        message: str,
        filename: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.filename = filename
        if not remediation and filename:
            remediation = f"Check the permissions and encoding of {filename}"
        super().__init__(message, remediation, details)


class RecordWriteFailed(ADRError):
    """The final record content could not be persisted."""

    def __init__(
        self,
        message: str,
        filename: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.filename = filename
        if not remediation and filename:
            remediation = f"Make sure {filename} is writable (is it read-only?)"
        super().__init__(message, remediation, details)


class ConfigError(ADRError):
    """Configuration-related errors."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.config_key = config_key
        if not remediation and config_key:
            remediation = f"Check the value of '{config_key}' in .adr-keeper.yaml"
        super().__init__(message, remediation, details)


class ValidationError(ADRError):
    """Input validation errors."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        expected_format: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.field = field
        self.expected_format = expected_format
        if not remediation and field and expected_format:
            remediation = f"The {field} should be in format: {expected_format}"
        super().__init__(message, remediation, details)


# Error code mapping for CLI exit codes. IndexWriteFailed must come before
# its parent StoreUnavailable.
ERROR_CODES = {
    IndexWriteFailed: 14,
    StoreUnavailable: 10,
    MissingTitle: 11,
    RecordUnreadable: 12,
    RecordWriteFailed: 13,
    ConfigError: 15,
    ValidationError: 16,
    ADRError: 1,
}


def get_error_code(error: Exception) -> int:
    """Get the exit code for an error type."""
    for error_type, code in ERROR_CODES.items():
        if isinstance(error, error_type):
            return code
    return 1
