# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Error types and error codes for the codemagi utilities.
Provides structured error handling across all packages.
"""

from enum import Enum
from typing import Dict, Any, Optional


class ErrorCode(str, Enum):
    """Standard error codes used across codemagi."""
    INVALID_INPUT = "invalid_input"
    PARSE_FAILED = "parse_failed"
    VALIDATION_FAILED = "validation_failed"
    FILE_ERROR = "file_error"
    KEYSTORE_ERROR = "keystore_error"
    KEY_GENERATION_ERROR = "key_generation_error"
    DELIVERY_FAILED = "delivery_failed"
    RESOLUTION_FAILED = "resolution_failed"
    CONFIGURATION_ERROR = "configuration_error"
    INTERNAL_ERROR = "internal_error"

    def __str__(self) -> str:
        return self.value


# Error code constants for easy import
INVALID_INPUT = ErrorCode.INVALID_INPUT
PARSE_FAILED = ErrorCode.PARSE_FAILED
VALIDATION_FAILED = ErrorCode.VALIDATION_FAILED
FILE_ERROR = ErrorCode.FILE_ERROR
KEYSTORE_ERROR = ErrorCode.KEYSTORE_ERROR
KEY_GENERATION_ERROR = ErrorCode.KEY_GENERATION_ERROR
DELIVERY_FAILED = ErrorCode.DELIVERY_FAILED
RESOLUTION_FAILED = ErrorCode.RESOLUTION_FAILED
CONFIGURATION_ERROR = ErrorCode.CONFIGURATION_ERROR
INTERNAL_ERROR = ErrorCode.INTERNAL_ERROR


class CodemagiError(Exception):
    """Base exception for all codemagi errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            'error': self.error_code.value,
            'message': self.message,
            'details': self.details
        }

        if self.cause:
            result['cause'] = str(self.cause)

        return result

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"


class ValidationError(CodemagiError):
    """Raised when validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, VALIDATION_FAILED, details)
        self.field = field
        self.value = value

        if field:
            self.details['field'] = field
        if value is not None:
            self.details['value'] = str(value)


class ParseError(CodemagiError):
    """Raised when a text value cannot be parsed into the requested type."""

    def __init__(
        self,
        message: str,
        text: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, PARSE_FAILED, details, cause)
        self.text = text

        if text is not None:
            self.details['text'] = text


class NumberFormatError(ParseError):
    """Raised when a string is not a number."""


class DateParseError(ParseError):
    """Raised when a string does not match the expected date format."""

    def __init__(
        self,
        message: str,
        text: Optional[str] = None,
        date_format: Optional[str] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, text, cause=cause)
        self.date_format = date_format

        if date_format:
            self.details['format'] = date_format


class VersionFormatError(ParseError):
    """Raised when a version segment has no digits."""

    def __init__(self, message: str, text: Optional[str] = None,
                 segment: Optional[str] = None):
        super().__init__(message, text)
        self.segment = segment

        if segment is not None:
            self.details['segment'] = segment


class FileOperationError(CodemagiError):
    """Raised when a file system operation fails."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, FILE_ERROR, cause=cause)
        self.path = path

        if path:
            self.details['path'] = str(path)


class KeyStoreError(CodemagiError):
    """Raised when key material cannot be loaded or a keystore cannot be written."""

    def __init__(self, message: str, path: Optional[str] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, KEYSTORE_ERROR, cause=cause)
        self.path = path

        if path:
            self.details['path'] = str(path)


class KeyGenerationError(CodemagiError):
    """Raised for unsupported key sizes or malformed key files."""

    def __init__(self, message: str, algorithm: Optional[str] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, KEY_GENERATION_ERROR, cause=cause)
        self.algorithm = algorithm

        if algorithm:
            self.details['algorithm'] = algorithm


class EmailDeliveryError(CodemagiError):
    """Raised when a message cannot be built or handed to the SMTP server."""

    def __init__(self, message: str, smtp_host: Optional[str] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, DELIVERY_FAILED, cause=cause)
        self.smtp_host = smtp_host

        if smtp_host:
            self.details['smtp_host'] = smtp_host


class ResolutionError(CodemagiError):
    """Raised when a host name does not resolve within the allowed attempts."""

    def __init__(self, message: str, domain: Optional[str] = None,
                 attempts: Optional[int] = None):
        super().__init__(message, RESOLUTION_FAILED)
        self.domain = domain
        self.attempts = attempts

        if domain:
            self.details['domain'] = domain
        if attempts is not None:
            self.details['attempts'] = attempts


class ConfigurationError(CodemagiError):
    """Raised when there's a configuration error."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, CONFIGURATION_ERROR, details, cause)
        self.config_key = config_key
        self.config_value = config_value

        if config_key:
            self.details['config_key'] = config_key
        if config_value is not None:
            self.details['config_value'] = str(config_value)
