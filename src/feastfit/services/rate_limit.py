"""Per-client sliding-window rate limiting for upstream calls."""

import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass

_logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60.0
MAX_REQUESTS = 10
MAX_CLIENTS = 10_000


@dataclass
class RateWindow:
    """Request count for one client within the current window."""

    count: int
    window_start: float


class RateLimiter:
    """Counts requests per client and denies those beyond the window limit.

    Windows are kept in least-recently-seen order. Windows older than the
    window length are swept on each call, and the map never holds more than
    ``max_clients`` entries.
    """

    def __init__(
        self,
        window_seconds: float = WINDOW_SECONDS,
        max_requests: int = MAX_REQUESTS,
        max_clients: int = MAX_CLIENTS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self.max_clients = max(max_clients, 1)
        self._clock = clock
        self._windows: OrderedDict[str, RateWindow] = OrderedDict()
        self._lock = threading.Lock()

    def admit(self, client_id: str) -> bool:
        """Record a request and return True when it is allowed."""
        with self._lock:
            now = self._clock()
            self._sweep(now)
            window = self._windows.get(client_id)
            if window is None:
                window = RateWindow(count=0, window_start=now)
                self._windows[client_id] = window
            if now - window.window_start > self.window_seconds:
                window.count = 0
                window.window_start = now
            window.count += 1
            self._windows.move_to_end(client_id)
            while len(self._windows) > self.max_clients:
                self._windows.popitem(last=False)
            count = window.count
            allowed = count <= self.max_requests
        if not allowed:
            _logger.warning(
                "Rate limit exceeded: client=%s count=%s", client_id, count
            )
        return allowed

    def window_for(self, client_id: str) -> RateWindow | None:
        """Return a copy of the client's current window, if tracked."""
        with self._lock:
            window = self._windows.get(client_id)
            if window is None:
                return None
            return RateWindow(count=window.count, window_start=window.window_start)

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)

    def _sweep(self, now: float) -> None:
        # Oldest-seen first, so stop at the first window still in use.
        while self._windows:
            client_id, window = next(iter(self._windows.items()))
            if now - window.window_start <= self.window_seconds:
                break
            del self._windows[client_id]
