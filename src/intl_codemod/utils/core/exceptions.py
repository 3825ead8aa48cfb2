"""
Basic exception classes for intl-codemod.

This module contains fundamental exception classes that are used throughout
the codebase without creating import cycles.
"""

from __future__ import annotations

from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors for appropriate handling strategies."""

    PARSE = "parse"
    FILE_TYPE = "file_type"
    CONFIGURATION = "configuration"
    TRANSFORM = "transform"
    RESOURCE = "resource"
    UNKNOWN = "unknown"


class IntlCodemodError(Exception):
    """Base exception class for intl-codemod specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: object | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.context: object | None = context
        self.recoverable: bool = recoverable


class SourceParseError(IntlCodemodError):
    """The source file could not be parsed into a clean syntax tree."""

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.PARSE,
            severity=ErrorSeverity.HIGH,
            context=context,
            recoverable=False,
        )
        self.line: int | None = line
        self.column: int | None = column


class UnsupportedFileTypeError(IntlCodemodError):
    """No parser is registered for the file suffix."""

    def __init__(self, suffix: str, context: object | None = None) -> None:
        super().__init__(
            f"Unsupported file type: {suffix!r}",
            category=ErrorCategory.FILE_TYPE,
            severity=ErrorSeverity.LOW,
            context=context,
            recoverable=True,
        )
        self.suffix: str = suffix


class ConfigurationError(IntlCodemodError):
    """Configuration-related errors."""

    def __init__(
        self,
        message: str,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            recoverable=False,
            context=context,
        )


class TransformError(IntlCodemodError):
    """The edits computed for a file could not be applied."""

    def __init__(self, message: str, context: object | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.TRANSFORM,
            severity=ErrorSeverity.HIGH,
            context=context,
            recoverable=True,
        )
