from __future__ import annotations

import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)


class FixedDelayThrottle:
    """Sleeps a fixed time after each processed result and after each keyword batch."""

    def __init__(
        self,
        result_delay_seconds: float = 2.0,
        keyword_delay_seconds: float = 5.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.result_delay_seconds = result_delay_seconds
        self.keyword_delay_seconds = keyword_delay_seconds
        self._sleep = sleep

    def _wait(self, seconds: float) -> None:
        if seconds > 0:
            logger.debug(f"Throttle wait: {seconds:.1f}s")
            self._sleep(seconds)

    def after_result(self) -> None:
        self._wait(self.result_delay_seconds)

    def after_keyword(self) -> None:
        self._wait(self.keyword_delay_seconds)


class NoopThrottle:
    def after_result(self) -> None:
        return None

    def after_keyword(self) -> None:
        return None
