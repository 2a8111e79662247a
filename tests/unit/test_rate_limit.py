"""Unit tests for the per-client request budgets."""

import pytest

from leadership_benchmark.api.rate_limit import ClientRateLimiter


class _Clock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def clock() -> _Clock:
    """A clock starting at a fixed instant."""
    return _Clock()


class TestAllow:
    """Verify spending and refilling budgets."""

    def test_burst_then_reject(self, clock: _Clock) -> None:
        """The burst is spent, then requests are rejected."""
        limiter = ClientRateLimiter(rate_per_minute=60, burst=3, clock=clock)

        assert [limiter.allow("10.0.0.1") for _ in range(4)] == [True, True, True, False]

    def test_budgets_are_per_client(self, clock: _Clock) -> None:
        """One client's exhaustion does not affect another."""
        limiter = ClientRateLimiter(rate_per_minute=60, burst=1, clock=clock)

        assert limiter.allow("10.0.0.1")
        assert not limiter.allow("10.0.0.1")
        assert limiter.allow("10.0.0.2")

    def test_budget_refills_over_time(self, clock: _Clock) -> None:
        """At 60 per minute one request is regained each second."""
        limiter = ClientRateLimiter(rate_per_minute=60, burst=1, clock=clock)
        limiter.allow("10.0.0.1")

        clock.now += 0.5
        assert not limiter.allow("10.0.0.1")
        clock.now += 1.0
        assert limiter.allow("10.0.0.1")


class TestSweep:
    """Verify idle clients are forgotten."""

    def test_refilled_budgets_are_dropped(self, clock: _Clock) -> None:
        """Only clients still below capacity are kept."""
        limiter = ClientRateLimiter(rate_per_minute=60, burst=5, clock=clock)
        limiter.allow("idle")
        clock.now += 10.0
        for _ in range(5):
            limiter.allow("busy")

        assert limiter.sweep() == 1
        assert limiter.tracked_clients == 1

    def test_many_clients_do_not_accumulate(self, clock: _Clock) -> None:
        """Distinct one-off clients are released by the periodic sweep."""
        limiter = ClientRateLimiter(rate_per_minute=60, clock=clock)
        for index in range(10_000):
            limiter.allow(f"10.{index // 65536}.{index // 256 % 256}.{index % 256}")
        assert limiter.tracked_clients == 10_000

        clock.now += 120.0
        limiter.allow("10.9.9.9")

        assert limiter.tracked_clients == 1

    def test_dropped_client_starts_with_full_budget(self, clock: _Clock) -> None:
        """Forgetting a refilled client does not change what it may spend."""
        limiter = ClientRateLimiter(rate_per_minute=60, burst=2, clock=clock)
        limiter.allow("10.0.0.1")
        clock.now += 5.0
        limiter.sweep()

        assert [limiter.allow("10.0.0.1") for _ in range(3)] == [True, True, False]
