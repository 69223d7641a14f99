# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Package types provides the shared error types for the codemagi utilities.

Every helper that can fail raises a subclass of CodemagiError so callers can
tell "parse failed" apart from "input was legitimately empty".
"""

from .errors import (
    ErrorCode,
    CodemagiError,
    ValidationError,
    ParseError,
    NumberFormatError,
    DateParseError,
    VersionFormatError,
    FileOperationError,
    KeyStoreError,
    KeyGenerationError,
    EmailDeliveryError,
    ResolutionError,
    ConfigurationError,
)

__all__ = [
    'ErrorCode',
    'CodemagiError',
    'ValidationError',
    'ParseError',
    'NumberFormatError',
    'DateParseError',
    'VersionFormatError',
    'FileOperationError',
    'KeyStoreError',
    'KeyGenerationError',
    'EmailDeliveryError',
    'ResolutionError',
    'ConfigurationError',
]
