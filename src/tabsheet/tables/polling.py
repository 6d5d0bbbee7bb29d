"""Bounded polling for a table source that may not be rendered yet.

The poller owns all retry state: an InstallState plus an attempt counter,
returned to the caller in a PollResult.  The extraction pipeline itself is
never retried here; only the loading of the source is.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from tabsheet.tables.schema import RawTable

logger = logging.getLogger(__name__)


class InstallState(Enum):
    NOT_INSTALLED = "not_installed"
    INSTALLED = "installed"


@dataclass(frozen=True)
class PollResult:
    """Outcome of a polling run."""

    state: InstallState
    attempts: int
    source: RawTable | None = None


def poll_until_ready(
    load: Callable[[], RawTable | None],
    max_attempts: int,
    interval: float,
    sleep: Callable[[float], None] = time.sleep,
) -> PollResult:
    """Call *load* until it returns a ready source or *max_attempts* calls have been made.

    A source is ready once its header group holds a cell.  ``load`` may
    return None while the source does not exist yet; exceptions it raises
    propagate.  No sleep happens after the final attempt.
    """
    attempts = 0
    while attempts < max_attempts:
        attempts += 1
        source = load()
        if source is not None and source.is_ready():
            logger.info("Table source ready after %d attempt(s)", attempts)
            return PollResult(InstallState.INSTALLED, attempts, source)

        logger.debug("Table source not ready (attempt %d/%d)", attempts, max_attempts)
        if attempts < max_attempts:
            sleep(interval)

    logger.warning("Table source still not ready after %d attempt(s)", attempts)
    return PollResult(InstallState.NOT_INSTALLED, attempts)
