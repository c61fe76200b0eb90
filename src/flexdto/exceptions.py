"""Exception hierarchy for flexdto.

Payload problems never raise; these exceptions are reserved for mistakes in
how DTO classes, decorators and options are declared.
"""

from typing import Any, Dict, Optional


class FlexDtoError(Exception):
    """Base exception for all flexdto errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}'"
            f")"
        )


class FieldDefinitionError(FlexDtoError):
    """Raised when a DTO class declares its fields inconsistently."""

    def __init__(
        self,
        message: str,
        error_code: str = "FIELD_DEFINITION_ERROR",
        details: Optional[Dict[str, Any]] = None,
        dto_name: Optional[str] = None,
        field_names: Optional[list] = None,
    ):
        super().__init__(message, error_code, details)
        if dto_name:
            self.details["dto"] = dto_name
        if field_names:
            self.details["fields"] = field_names


class RegistrationError(FlexDtoError):
    """Raised when alias/transform metadata cannot be registered."""

    def __init__(
        self,
        message: str,
        error_code: str = "REGISTRATION_ERROR",
        details: Optional[Dict[str, Any]] = None,
        target: Optional[str] = None,
    ):
        super().__init__(message, error_code, details)
        if target:
            self.details["target"] = target


class OptionsError(FlexDtoError):
    """Raised when mapping options fail validation."""

    def __init__(
        self,
        message: str = "Invalid mapping options",
        error_code: str = "OPTIONS_ERROR",
        details: Optional[Dict[str, Any]] = None,
        field_errors: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message, error_code, details)
        self.field_errors = field_errors or {}
        if self.field_errors:
            self.details["field_errors"] = self.field_errors
