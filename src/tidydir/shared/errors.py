"""tidydir Error Handling Module

This module defines the error handling system for tidydir, providing
structured error classes with context information and user-friendly messages.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Error codes for tidydir.

    This enum serves as the single source of truth for all error codes
    used throughout the application.
    """

    # File System Errors
    DIRECTORY_NOT_FOUND = "DIRECTORY_NOT_FOUND"
    PERMISSION_DENIED = "PERMISSION_DENIED"

    # Operation Journal Errors
    LOG_FILE_NOT_FOUND = "LOG_FILE_NOT_FOUND"
    LOG_FILE_CORRUPTED = "LOG_FILE_CORRUPTED"
    LOG_WRITE_FAILED = "LOG_WRITE_FAILED"

    # Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Configuration Errors
    CONFIG_MISSING = "CONFIG_MISSING"
    CONFIG_INVALID = "CONFIG_INVALID"

    # CLI Errors
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path and Enum to primitive types.

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data to keep the context safe to serialize.

    Attributes:
        file_path: Optional file path associated with the error
        operation: Optional operation name that caused the error
        additional_data: Optional dict with primitive values only
    """

    file_path: str | None = None
    operation: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self) -> dict[str, Any]:
        """Export context as a dict with a guaranteed additional_data key."""
        data: dict[str, Any] = {}
        if self.file_path is not None:
            data["file_path"] = self.file_path
        if self.operation is not None:
            data["operation"] = self.operation
        data["additional_data"] = self.additional_data or {}
        return data


class TidyDirError(Exception):
    """Base exception class for all tidydir errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize TidyDirError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error
        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging and JSON output."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(TidyDirError):
    """Domain-specific errors.

    Raised when organizing rules are violated, e.g. an invalid category name.
    """


class InfrastructureError(TidyDirError):
    """Infrastructure-related errors.

    These errors occur when interacting with the file system.
    """


class DirectoryNotFoundError(InfrastructureError):
    """Raised when the directory to organize does not exist or is not a directory."""

    def __init__(
        self,
        directory: Path | str,
        operation: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.directory = Path(directory)
        super().__init__(
            ErrorCode.DIRECTORY_NOT_FOUND,
            f"Directory not found: {directory}",
            ErrorContext(file_path=str(directory), operation=operation),
            original_error,
        )


class ApplicationError(TidyDirError):
    """Application-level errors.

    Invalid command line arguments, application state errors.
    """


class ConfigError(ApplicationError):
    """Configuration loading or validation errors."""


class CliError(ApplicationError):
    """CLI-specific errors carrying a process exit code."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        *,
        exit_code: int = 2,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.exit_code = exit_code
        super().__init__(code, message, context, original_error)


# Convenience functions for common error scenarios
def create_validation_error(
    message: str,
    field: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> DomainError:
    """Create a validation error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"field": field} if field else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return DomainError(
        ErrorCode.VALIDATION_ERROR,
        message,
        context,
        original_error,
    )


def create_config_error(
    message: str,
    file_path: str | None = None,
    original_error: Exception | None = None,
) -> ConfigError:
    """Create a configuration error with context."""
    code = ErrorCode.CONFIG_INVALID if original_error else ErrorCode.CONFIG_MISSING
    return ConfigError(
        code,
        message,
        ErrorContext(file_path=file_path, operation="load_settings"),
        original_error,
    )


def create_cli_error(
    message: str,
    command: str,
    *,
    code: ErrorCode = ErrorCode.CLI_UNEXPECTED_ERROR,
    exit_code: int = 2,
    original_error: Exception | None = None,
) -> CliError:
    """Create a CLI error for the given command."""
    return CliError(
        code,
        message,
        exit_code=exit_code,
        context=ErrorContext(operation=command),
        original_error=original_error,
    )
