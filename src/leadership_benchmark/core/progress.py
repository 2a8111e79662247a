"""Cosmetic progress schedules shown while a generation request is in flight.

The percentage advances on a fixed tick schedule that is decoupled from the
real request: large steps early, smaller steps as it approaches the ceiling,
and it only reaches 100 when the caller reports that the request resolved.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from typing import TypeVar

T = TypeVar("T")

PHASE_ANALYZING: str = "analyzing"
PHASE_GENERATING: str = "generating"
PHASE_FINALIZING: str = "finalizing"

COMPLETE_PERCENTAGE: int = 100


@dataclass(frozen=True)
class ProgressSchedule:
    """Tick schedule for one progress animation.

    Attributes:
        start: Initial percentage.
        interval_seconds: Time between ticks.
        increments: (upper bound, step) pairs; the first bound the current
            value is below selects the step. At or above the last bound the
            value holds.
        generating_at: Percentage at which the phase becomes 'generating'.
        finalizing_at: Percentage at which the phase becomes 'finalizing'.
    """

    start: int
    interval_seconds: float
    increments: tuple[tuple[int, int], ...]
    generating_at: int
    finalizing_at: int


INSIGHT_GENERATION_SCHEDULE = ProgressSchedule(
    start=15,
    interval_seconds=1.2,
    increments=((40, 8), (70, 5), (90, 3)),
    generating_at=45,
    finalizing_at=80,
)

PROMPT_LIBRARY_SCHEDULE = ProgressSchedule(
    start=10,
    interval_seconds=0.8,
    increments=((35, 5), (65, 3), (85, 2)),
    generating_at=40,
    finalizing_at=70,
)


@dataclass(frozen=True)
class ProgressState:
    """Current percentage and phase label."""

    percentage: int
    phase: str


def initial_state(schedule: ProgressSchedule) -> ProgressState:
    """Return the state shown as soon as the request starts."""
    return ProgressState(percentage=schedule.start, phase=phase_for(schedule, schedule.start))


def phase_for(schedule: ProgressSchedule, percentage: int) -> str:
    """Phase label for a percentage."""
    if percentage >= schedule.finalizing_at:
        return PHASE_FINALIZING
    if percentage >= schedule.generating_at:
        return PHASE_GENERATING
    return PHASE_ANALYZING


def tick(schedule: ProgressSchedule, state: ProgressState) -> ProgressState:
    """Advance one tick. Never reaches 100 on its own.

    Args:
        schedule: The animation schedule.
        state: Current progress.

    Returns:
        The next progress state.
    """
    for bound, step in schedule.increments:
        if state.percentage < bound:
            percentage = state.percentage + step
            return ProgressState(percentage=percentage, phase=phase_for(schedule, percentage))
    return state


def complete(state: ProgressState) -> ProgressState:
    """Jump to 100 once the real request has resolved."""
    return replace(state, percentage=COMPLETE_PERCENTAGE, phase=PHASE_FINALIZING)


async def run_with_progress(
    schedule: ProgressSchedule,
    operation: Awaitable[T],
    on_progress: Callable[[ProgressState], None],
) -> T:
    """Await ``operation`` while reporting cosmetic progress.

    Progress ticks every ``schedule.interval_seconds`` until the operation
    resolves, then reports 100. The ticker is cancelled whether the operation
    succeeds or raises.

    Args:
        schedule: The animation schedule.
        operation: The real request.
        on_progress: Receives every progress state.

    Returns:
        The operation's result.
    """
    state = initial_state(schedule)
    on_progress(state)

    async def _ticker() -> None:
        nonlocal state
        while True:
            await asyncio.sleep(schedule.interval_seconds)
            state = tick(schedule, state)
            on_progress(state)

    ticker = asyncio.create_task(_ticker())
    try:
        result = await operation
    finally:
        ticker.cancel()
        try:
            await ticker
        except asyncio.CancelledError:
            pass
    on_progress(complete(state))
    return result
