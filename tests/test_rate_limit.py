"""Tests for the per-client rate limiter."""

import threading

from feastfit.services.rate_limit import RateLimiter
from tests.conftest import FakeClock


def test_eleventh_request_in_window_is_denied() -> None:
    clock = FakeClock()
    limiter = RateLimiter(clock=clock)

    allowed = [limiter.admit("10.0.0.1") for _ in range(10)]
    clock.advance(30)

    assert all(allowed)
    assert limiter.admit("10.0.0.1") is False


def test_window_boundary_is_exclusive() -> None:
    clock = FakeClock()
    limiter = RateLimiter(clock=clock)
    for _ in range(10):
        limiter.admit("client")

    clock.advance(60)

    assert limiter.admit("client") is False


def test_request_after_window_resets_count() -> None:
    clock = FakeClock(start=100.0)
    limiter = RateLimiter(clock=clock)
    for _ in range(11):
        limiter.admit("client")

    clock.advance(61)

    assert limiter.admit("client") is True
    window = limiter.window_for("client")
    assert window is not None
    assert window.count == 1
    assert window.window_start == 161.0


def test_clients_are_counted_independently() -> None:
    limiter = RateLimiter(max_requests=1, clock=FakeClock())

    assert limiter.admit("a") is True
    assert limiter.admit("b") is True
    assert limiter.admit("a") is False


def test_stale_windows_are_swept() -> None:
    clock = FakeClock()
    limiter = RateLimiter(clock=clock)
    limiter.admit("a")
    clock.advance(30)
    limiter.admit("b")
    clock.advance(31)

    limiter.admit("c")

    assert limiter.window_for("a") is None
    assert limiter.window_for("b") is not None
    assert len(limiter) == 2


def test_client_map_is_bounded() -> None:
    limiter = RateLimiter(max_clients=2, clock=FakeClock())

    for client_id in ("a", "b", "a", "c"):
        limiter.admit(client_id)

    assert len(limiter) == 2
    assert limiter.window_for("b") is None
    assert limiter.window_for("a") is not None


def test_concurrent_requests_admit_exactly_max_requests() -> None:
    limiter = RateLimiter(clock=FakeClock())
    results: list[bool] = []
    results_lock = threading.Lock()
    start = threading.Barrier(8)

    def worker() -> None:
        start.wait()
        for _ in range(50):
            allowed = limiter.admit("c")
            with results_lock:
                results.append(allowed)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 400
    assert results.count(True) == limiter.max_requests
    window = limiter.window_for("c")
    assert window is not None
    assert window.count == 400
