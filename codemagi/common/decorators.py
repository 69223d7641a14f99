# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Common decorators for the codemagi utilities.
"""

import functools
import logging
import time
import warnings
from typing import Any, Callable, Optional, Tuple, Type, TypeVar

F = TypeVar('F', bound=Callable[..., Any])

logger = logging.getLogger(__name__)


def log_execution_time(logger_instance: Optional[logging.Logger] = None,
                       level: int = logging.DEBUG):
    """
    Decorator to log function execution time.

    Args:
        logger_instance: Optional logger instance to use
        level: Log level for the timing record
    """
    def decorator(func: F) -> F:
        log = logger_instance or logger

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                execution_time = time.perf_counter() - start_time
                log.error("%s failed after %.3fs: %s", func.__name__, execution_time, e)
                raise
            execution_time = time.perf_counter() - start_time
            log.log(level, "%s executed in %.3fs", func.__name__, execution_time)
            return result

        return wrapper

    return decorator


def catch_and_log_exceptions(
    default_return: Any = None,
    logger_instance: Optional[logging.Logger] = None,
    reraise: bool = True,
    exceptions: Tuple[Type[BaseException], ...] = (Exception,)
):
    """
    Decorator to catch and log exceptions.

    Args:
        default_return: Default value to return on exception
        logger_instance: Optional logger instance to use
        reraise: Whether to reraise the exception after logging
        exceptions: Exception types to intercept
    """
    def decorator(func: F) -> F:
        log = logger_instance or logger

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except exceptions as e:
                log.exception("Exception in %s: %s", func.__name__, e)
                if reraise:
                    raise
                return default_return

        return wrapper

    return decorator


def deprecated(reason: str = "This function is deprecated"):
    """
    Decorator to mark functions as deprecated.

    Args:
        reason: Reason for deprecation
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            warnings.warn(
                f"{func.__name__} is deprecated. {reason}",
                DeprecationWarning,
                stacklevel=2
            )
            return func(*args, **kwargs)
        return wrapper
    return decorator
