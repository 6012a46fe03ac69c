from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

# Process-local cache of positive "already registered" answers.
# Entries expire after their TTL; a miss never proves absence in the store.
#
# NOTE: intentionally simple (no size bound); keys are few and short-lived.


class ExpiringCache:
    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or time.monotonic
        self._lock = threading.Lock()
        self._mem: Dict[str, Tuple[Any, float]] = {}

    def get(self, key: str) -> Optional[Any]:
        now = self._clock()
        with self._lock:
            hit = self._mem.get(key)
            if hit is None:
                return None
            value, expires_at = hit
            if now >= expires_at:
                del self._mem[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl_s: float) -> None:
        with self._lock:
            self._mem[key] = (value, self._clock() + float(ttl_s))

    def clear(self) -> None:
        with self._lock:
            self._mem.clear()

    def __len__(self) -> int:
        now = self._clock()
        with self._lock:
            return sum(1 for _, exp in self._mem.values() if now < exp)


# One cache per process, shared by every synchronizer that isn't handed its own.
_PROCESS_CACHE = ExpiringCache()


def process_cache() -> ExpiringCache:
    return _PROCESS_CACHE
