import time
from typing import Callable, Dict, Tuple


class FixedWindowRateLimiter:
    """Count hits per key inside fixed windows of ``window_seconds``.

    A window opens on the first hit for a key and resets once it has elapsed.
    Expired windows are swept at most once per window length, so the table
    only holds keys seen during roughly the last two windows.
    """

    def __init__(self, max_hits: int, window_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.max_hits = max_hits
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._last_sweep = clock()

    def __len__(self) -> int:
        return len(self._windows)

    def _sweep(self, now: float) -> None:
        if now - self._last_sweep < self.window_seconds:
            return
        expired = [key for key, (started, _) in self._windows.items() if now - started >= self.window_seconds]
        for key in expired:
            del self._windows[key]
        self._last_sweep = now

    def hit(self, key: str) -> bool:
        """Record one hit; return False once the key is over its allowance."""
        now = self._clock()
        self._sweep(now)
        started, count = self._windows.get(key, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0
        count += 1
        self._windows[key] = (started, count)
        return count <= self.max_hits

    def remaining(self, key: str) -> int:
        now = self._clock()
        started, count = self._windows.get(key, (now, 0))
        if now - started >= self.window_seconds:
            return self.max_hits
        return max(0, self.max_hits - count)
