# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Common package providing decorators shared across the codemagi utilities.

This package includes:
- Execution timing for long-running helpers (data loading)
- Exception logging with an opt-in default return value
- Deprecation warnings for legacy helper names
"""

from .decorators import (
    log_execution_time, catch_and_log_exceptions, deprecated
)

__all__ = [
    'log_execution_time', 'catch_and_log_exceptions', 'deprecated'
]
