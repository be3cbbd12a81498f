"""Attempt-counted polling.

Repeatedly probes for a value with a fixed sleep between attempts. The bound
is a number of attempts, not a wall-clock deadline: with a slow probe the
loop runs longer than ``max_attempts * interval`` seconds.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class PollingState:
    """Mutable counter driving a polling loop.

    Attributes:
        max_attempts: Number of empty probes allowed before giving up.
        poll_interval: Seconds slept after each empty probe.
        elapsed_attempts: Empty probes seen so far.
    """

    max_attempts: int
    poll_interval: float = 1.0
    elapsed_attempts: int = 0

    @property
    def exhausted(self) -> bool:
        return self.elapsed_attempts >= self.max_attempts


def poll_attempts(
    probe: Callable[[], T],
    state: PollingState,
    sleep: Callable[[float], None] = time.sleep,
    name: str = "operation",
) -> T | None:
    """Call ``probe`` until it returns a truthy value or attempts run out.

    Exceptions raised by ``probe`` propagate immediately.

    Args:
        probe: Callable returning a falsy value while the result is not ready.
        state: Polling state, updated in place.
        sleep: Sleep function (injectable for tests).
        name: Name of the operation for logging.

    Returns:
        The first truthy value, or None once ``state`` is exhausted.
    """
    while not state.exhausted:
        result = probe()
        if result:
            return result
        state.elapsed_attempts += 1
        sleep(state.poll_interval)

    logger.debug("Gave up on %s after %d attempts", name, state.elapsed_attempts)
    return None
