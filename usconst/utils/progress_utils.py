"""
Progress bars for the build and export steps.

Bars are drawn with tqdm on stderr, so command output on stdout stays
clean. When stderr is not a terminal the bars are disabled, and a finished
counter leaves a single debug log line instead.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import sys
import time
from contextlib import contextmanager
from typing import Iterator, List, Optional

import tqdm

from usconst.logging_config import get_logger

logger = get_logger(__name__)


class ProgressCounter:
    """One tqdm bar with a running count."""

    def __init__(self, total: Optional[int], desc: str, unit: str, enabled: bool):
        self.desc = desc
        self.unit = unit
        self.count = 0
        self._started = time.time()
        self._closed = False
        self._bar = tqdm.tqdm(
            total=total,
            desc=desc,
            unit=unit,
            file=sys.stderr,
            dynamic_ncols=True,
            disable=not enabled,
        )

    def update(self, increment: int = 1):
        self.count += increment
        self._bar.update(increment)

    def set_description(self, desc: str):
        self.desc = desc
        self._bar.set_description(desc)

    def close(self):
        if self._closed:
            return
        self._closed = True
        self._bar.close()
        logger.debug(f"{self.desc}: {self.count} {self.unit} in {time.time() - self._started:.2f}s")


class ProgressManager:
    """Creates counters and closes them together."""

    def __init__(self, enabled: Optional[bool] = None):
        self.enabled = sys.stderr.isatty() if enabled is None else enabled
        self._counters: List[ProgressCounter] = []

    def create_counter(self, total: Optional[int] = None, desc: str = "", unit: str = "items") -> ProgressCounter:
        counter = ProgressCounter(total, desc, unit, self.enabled)
        self._counters.append(counter)
        return counter

    def close(self):
        for counter in self._counters:
            counter.close()
        self._counters.clear()


@contextmanager
def progress_manager(enabled: Optional[bool] = None) -> Iterator[ProgressManager]:
    """
    Yield a ProgressManager whose counters are closed on exit.

    Args:
        enabled: Force bars on or off; None draws them only on a terminal
    """
    manager = ProgressManager(enabled=enabled)
    try:
        yield manager
    finally:
        manager.close()
