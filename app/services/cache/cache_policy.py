from __future__ import annotations

import time
from typing import Callable, Optional


class CachePolicy:
    """Encapsulate TTL freshness checks against Unix-second timestamps."""

    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.time) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def now(self) -> int:
        return int(self._clock())

    def is_fresh(self, timestamp: int) -> bool:
        # An entry exactly ttl_seconds old is still valid
        return self.now() - timestamp <= self.ttl_seconds

    @staticmethod
    def parse_timestamp(raw: Optional[str]) -> Optional[int]:
        if raw is None:
            return None
        try:
            return int(str(raw).strip())
        except ValueError:
            return None
