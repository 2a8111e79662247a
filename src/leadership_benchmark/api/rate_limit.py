"""Per-client request budgets for the public endpoints.

Each client IP draws from a bucket that holds up to ``burst`` requests and
refills at ``rate_per_minute``. A client whose bucket has refilled to full is
indistinguishable from a new one, so such buckets are dropped during periodic
sweeps and memory stays bounded by the number of recently active clients.
Budgets are per process.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass

from fastapi import HTTPException, Request, status

from leadership_benchmark.observability import get_logger
from leadership_benchmark.settings import get_settings

logger = get_logger(__name__)

_SWEEP_INTERVAL_SECONDS: float = 60.0


@dataclass
class _Budget:
    tokens: float
    updated_at: float


class ClientRateLimiter:
    """Refilling request budget keyed by client.

    Args:
        rate_per_minute: Sustained requests per minute per client.
        burst: Bucket capacity; defaults to ``rate_per_minute``.
        clock: Monotonic time source in seconds.
    """

    def __init__(
        self,
        rate_per_minute: int,
        burst: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._refill_per_second = rate_per_minute / 60.0
        self._capacity = float(burst if burst is not None else rate_per_minute)
        self._clock = clock
        self._budgets: dict[str, _Budget] = {}
        self._last_sweep = clock()

    @property
    def tracked_clients(self) -> int:
        """Number of clients currently holding a partial budget."""
        return len(self._budgets)

    def allow(self, client: str) -> bool:
        """Spend one request from ``client``'s budget.

        Returns:
            False when the budget is exhausted.
        """
        now = self._clock()
        if now - self._last_sweep >= _SWEEP_INTERVAL_SECONDS:
            self.sweep(now)

        budget = self._budgets.get(client)
        tokens = self._capacity if budget is None else self._refilled(budget, now)
        if tokens < 1.0:
            self._budgets[client] = _Budget(tokens, now)
            return False
        self._budgets[client] = _Budget(tokens - 1.0, now)
        return True

    def sweep(self, now: float | None = None) -> int:
        """Forget clients whose budget has refilled to capacity.

        Returns:
            Number of clients dropped.
        """
        now = self._clock() if now is None else now
        full = [
            client
            for client, budget in self._budgets.items()
            if self._refilled(budget, now) >= self._capacity
        ]
        for client in full:
            del self._budgets[client]
        self._last_sweep = now
        if full:
            logger.debug("Rate limit budgets released", released=len(full), tracked=len(self._budgets))
        return len(full)

    def _refilled(self, budget: _Budget, now: float) -> float:
        elapsed = max(0.0, now - budget.updated_at)
        return min(self._capacity, budget.tokens + elapsed * self._refill_per_second)


class RateLimit:
    """FastAPI dependency rejecting requests over the client's budget with 429.

    Args:
        limiter: Budget store shared by the routes of one group.
        group: Route group name used in log events.
    """

    def __init__(self, limiter: ClientRateLimiter, group: str) -> None:
        self.limiter = limiter
        self.group = group

    def __call__(self, request: Request) -> None:
        client = (request.client.host if request.client else "") or "unknown"
        if not self.limiter.allow(client):
            logger.warning("Rate limit exceeded", group=self.group, client=client)
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Rate limit exceeded. Please slow down and try again.",
            )


_settings = get_settings()

scoring_rate_limit = RateLimit(ClientRateLimiter(_settings.rate_limit_scoring_per_minute), "scoring")
insights_rate_limit = RateLimit(ClientRateLimiter(_settings.rate_limit_insights_per_minute), "insights")
notifications_rate_limit = RateLimit(
    ClientRateLimiter(_settings.rate_limit_notifications_per_minute), "notifications"
)
partners_rate_limit = RateLimit(ClientRateLimiter(_settings.rate_limit_partners_per_minute), "partners")
