"""Tests for the shared probe rate limiter."""

import threading

from handlecheck.rate_limiter import RateLimiter


class _FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_try_acquire_does_not_consume():
    limiter = RateLimiter(max_requests=2, window_seconds=60, clock=_FakeClock())
    for _ in range(5):
        assert limiter.try_acquire()
    assert limiter.available_slots() == 2


def test_record_success_fills_window():
    limiter = RateLimiter(max_requests=3, window_seconds=60, clock=_FakeClock())
    for _ in range(3):
        assert limiter.try_acquire()
        limiter.record_success()
    assert not limiter.try_acquire()
    assert limiter.available_slots() == 0
    assert limiter.in_window() == 3


def test_window_slides():
    clock = _FakeClock()
    limiter = RateLimiter(max_requests=2, window_seconds=60, clock=clock)
    limiter.record_success()
    clock.now += 30
    limiter.record_success()
    assert not limiter.try_acquire()

    clock.now += 30  # first request is now exactly one window old
    assert limiter.try_acquire()
    assert limiter.available_slots() == 1

    clock.now += 30
    assert limiter.available_slots() == 2


def test_acquire_checks_and_records():
    limiter = RateLimiter(max_requests=2, window_seconds=60, clock=_FakeClock())
    assert limiter.acquire()
    assert limiter.acquire()
    assert not limiter.acquire()
    assert limiter.in_window() == 2


def test_reset():
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=_FakeClock())
    limiter.record_success()
    limiter.reset()
    assert limiter.available_slots() == 1


def test_concurrent_acquire_never_exceeds_cap():
    limiter = RateLimiter(max_requests=10, window_seconds=60, clock=_FakeClock())
    granted: list[bool] = []
    lock = threading.Lock()
    barrier = threading.Barrier(25)

    def worker():
        barrier.wait()
        ok = limiter.acquire()
        with lock:
            granted.append(ok)

    threads = [threading.Thread(target=worker) for _ in range(25)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert granted.count(True) == 10
    assert limiter.in_window() == 10
