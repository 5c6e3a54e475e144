from __future__ import annotations

import logging
import platform
import time
from typing import Callable

from ..errors import CommandError
from .command import Executor

logger = logging.getLogger(__name__)


def ping(host: str, *, runner: Executor) -> bool:
    """Single ICMP echo; True if the host answered."""

    if platform.system().lower() == "windows":
        argv = ["ping", "-n", "1", "-w", "2000", host]
    else:
        argv = ["ping", "-c", "1", "-W", "2", host]
    try:
        return runner.run_argv(argv, check=False).ok
    except CommandError as e:
        logger.debug("ping %s could not run: %s", host, e)
        return False


def wait_reachable(
    host: str,
    max_attempts: int,
    interval_seconds: float,
    *,
    probe: Callable[[str], bool],
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Probe ``host`` until it answers or ``max_attempts`` probes have failed."""

    for attempt in range(1, max_attempts + 1):
        if probe(host):
            logger.info("%s reachable (attempt %d/%d)", host, attempt, max_attempts)
            return True
        logger.debug("%s unreachable (attempt %d/%d)", host, attempt, max_attempts)
        if attempt < max_attempts:
            sleep(interval_seconds)

    logger.error("%s still unreachable after %d attempts", host, max_attempts)
    return False
