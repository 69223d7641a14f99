# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Network helpers.
"""

import logging
import socket
import time
from typing import Optional

from ..types.errors import ResolutionError

logger = logging.getLogger(__name__)


def resolve_domain(domain: str, tries: Optional[int] = None, delay: Optional[float] = None) -> str:
    """
    Resolve a host name to an address string, retrying lookups that fail.

    Makes up to ``tries`` attempts with a fixed ``delay`` (seconds) between
    failed attempts. Raises ResolutionError once the last attempt fails.
    Omitted settings come from CODEMAGI_RESOLVE_TRIES and
    CODEMAGI_RESOLVE_DELAY (3 tries, 1 second apart by default).
    """
    if tries is None or delay is None:
        # core.config imports this package
        from ..core.config import Config

        config = Config.from_env()
        tries = config.resolve_tries if tries is None else tries
        delay = config.resolve_delay if delay is None else delay

    if not domain:
        raise ResolutionError("Domain name is empty", domain=domain, attempts=0)

    for attempt in range(1, tries + 1):
        try:
            address = socket.gethostbyname(domain)
            if attempt > 1:
                logger.info("Resolved %s on attempt %d", domain, attempt)
            return address
        except (socket.gaierror, UnicodeError) as e:
            if attempt == tries:
                logger.error("Could not resolve %s after %d attempts: %s", domain, attempt, e)
                break
            logger.warning("Lookup of %s failed on attempt %d: %s. Retrying in %.2fs",
                           domain, attempt, e, delay)
            time.sleep(delay)

    raise ResolutionError(f"Could not resolve {domain}", domain=domain, attempts=max(tries, 0))
