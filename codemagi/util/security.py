# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Caller checks against the current call stack.
"""

import inspect
import logging
from typing import Optional

logger = logging.getLogger(__name__)


def is_allowed_caller(qualified_name: Optional[str]) -> bool:
    """
    True when some frame on the call stack belongs to ``qualified_name``.

    The name is either a module ("billing.jobs") or a module-level function
    or method name qualified by its module ("billing.jobs.run" or
    "billing.jobs.Runner.run"). A rejected check is logged as a warning.
    """
    if not qualified_name or not qualified_name.strip():
        return False

    frame = inspect.currentframe()
    try:
        frame = frame.f_back if frame is not None else None
        while frame is not None:
            module = frame.f_globals.get("__name__", "")
            code = frame.f_code
            function = getattr(code, "co_qualname", code.co_name)
            if qualified_name in (module, f"{module}.{function}", f"{module}.{code.co_name}"):
                return True
            frame = frame.f_back
    finally:
        del frame

    logger.warning("Attempt to call method from a non-approved caller; expected %s", qualified_name)
    return False
