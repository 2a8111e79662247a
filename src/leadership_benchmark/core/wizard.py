"""Generic multi-step wizard state machine.

A wizard is an immutable ``WizardState`` (current step, step count, answer
payload) plus a step validity predicate. Transitions are pure functions
``(state, event) -> Transition``; the ``Transition.signal`` tells the caller
whether the wizard advanced, stayed put, completed, or asked to exit.

``WizardController`` wraps the pure transitions for interactive use. It holds
the current state, fires the completion/exit callbacks, and owns at most one
pending auto-advance task. The task is cancelled on any navigation so a
stale timer can never move a later, unrelated step.
"""

import asyncio
import enum
from collections.abc import Callable, Collection
from dataclasses import dataclass, replace
from typing import Generic, TypeVar

from leadership_benchmark.observability import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_AUTO_ADVANCE_DELAY_SECONDS: float = 0.8


class WizardEvent(str, enum.Enum):
    """Navigation events accepted by ``transition``."""

    NEXT = "next"
    BACK = "back"


class WizardSignal(str, enum.Enum):
    """Outcome of applying a navigation event."""

    ADVANCED = "advanced"
    RETREATED = "retreated"
    BLOCKED = "blocked"
    COMPLETED = "completed"
    EXITED = "exited"


@dataclass(frozen=True)
class WizardState(Generic[T]):
    """Immutable snapshot of a wizard.

    Attributes:
        step: Current 1-based step index.
        total_steps: Number of steps in the flow.
        data: Flow-specific answer payload.
    """

    step: int
    total_steps: int
    data: T

    @property
    def is_first_step(self) -> bool:
        """True when on step 1."""
        return self.step == 1

    @property
    def is_last_step(self) -> bool:
        """True when on the final step."""
        return self.step == self.total_steps

    @property
    def progress_percentage(self) -> float:
        """Percentage of steps reached, including the current one."""
        return round(self.step / self.total_steps * 100, 2)


@dataclass(frozen=True)
class Transition(Generic[T]):
    """Result of a navigation event: the new state and what happened."""

    state: WizardState[T]
    signal: WizardSignal


StepValidator = Callable[[int, T], bool]


def go_next(state: WizardState[T], is_valid: StepValidator[T]) -> Transition[T]:
    """Advance one step when the current step is valid.

    On the final step a valid ``next`` completes the wizard instead of moving
    past ``total_steps``.

    Args:
        state: Current wizard state.
        is_valid: Validity predicate taking (step, data).

    Returns:
        Transition with ADVANCED, COMPLETED, or BLOCKED (state unchanged).
    """
    if not is_valid(state.step, state.data):
        return Transition(state, WizardSignal.BLOCKED)
    if state.is_last_step:
        return Transition(state, WizardSignal.COMPLETED)
    return Transition(replace(state, step=state.step + 1), WizardSignal.ADVANCED)


def go_back(state: WizardState[T]) -> Transition[T]:
    """Retreat one step, or signal exit from step 1.

    Args:
        state: Current wizard state.

    Returns:
        Transition with RETREATED, or EXITED when already on step 1.
    """
    if state.is_first_step:
        return Transition(state, WizardSignal.EXITED)
    return Transition(replace(state, step=state.step - 1), WizardSignal.RETREATED)


def transition(
    state: WizardState[T],
    event: WizardEvent,
    is_valid: StepValidator[T],
) -> Transition[T]:
    """Apply a navigation event to a wizard state.

    Args:
        state: Current wizard state.
        event: NEXT or BACK.
        is_valid: Validity predicate taking (step, data).

    Returns:
        The resulting Transition.
    """
    if event is WizardEvent.NEXT:
        return go_next(state, is_valid)
    return go_back(state)


class AutoAdvance:
    """A single cancelable delayed callback bound to an asyncio loop.

    Scheduling a new callback cancels the previous one, so at most one
    transition is ever pending.

    Args:
        delay_seconds: Delay before the callback runs.
    """

    def __init__(self, delay_seconds: float = DEFAULT_AUTO_ADVANCE_DELAY_SECONDS) -> None:
        self._delay_seconds = delay_seconds
        self._task: asyncio.Task[None] | None = None

    @property
    def pending(self) -> bool:
        """True while a scheduled callback has not yet run or been cancelled."""
        return self._task is not None and not self._task.done()

    def schedule(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` after the delay, replacing any pending callback.

        Must be called from within a running event loop.

        Args:
            callback: Zero-argument function to invoke.
        """
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run(callback))

    def cancel(self) -> None:
        """Cancel the pending callback, if any."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self) -> None:
        """Wait for the pending callback to finish (no-op when none is pending)."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def _run(self, callback: Callable[[], None]) -> None:
        await asyncio.sleep(self._delay_seconds)
        callback()


class WizardController(Generic[T]):
    """Stateful driver around the pure wizard transitions.

    Args:
        initial: Starting state.
        is_valid: Step validity predicate.
        on_complete: Called with the final data when ``next`` completes.
        on_exit: Called when ``back`` is pressed on step 1.
        auto_advance_steps: Steps on which ``select`` schedules ``next``.
        auto_advance_delay_seconds: Delay for the auto-advance.
    """

    def __init__(
        self,
        initial: WizardState[T],
        is_valid: StepValidator[T],
        on_complete: Callable[[T], None] | None = None,
        on_exit: Callable[[], None] | None = None,
        auto_advance_steps: Collection[int] = (),
        auto_advance_delay_seconds: float = DEFAULT_AUTO_ADVANCE_DELAY_SECONDS,
    ) -> None:
        self._state = initial
        self._is_valid = is_valid
        self._on_complete = on_complete
        self._on_exit = on_exit
        self._auto_advance_steps = frozenset(auto_advance_steps)
        self._auto_advance = AutoAdvance(auto_advance_delay_seconds)

    @property
    def state(self) -> WizardState[T]:
        """Current wizard state."""
        return self._state

    @property
    def can_proceed(self) -> bool:
        """True when the current step's validity predicate holds."""
        return self._is_valid(self._state.step, self._state.data)

    @property
    def auto_advance(self) -> AutoAdvance:
        """The pending auto-advance handle."""
        return self._auto_advance

    def update(self, data: T) -> None:
        """Replace the answer payload without navigating."""
        self._state = replace(self._state, data=data)

    def select(self, data: T) -> None:
        """Record a selection and schedule auto-advance on eligible steps.

        Args:
            data: Updated answer payload.
        """
        self.update(data)
        if self._state.step in self._auto_advance_steps:
            scheduled_step = self._state.step
            self._auto_advance.schedule(lambda: self._auto_next(scheduled_step))

    def next(self) -> WizardSignal:
        """Navigate forward. Cancels any pending auto-advance."""
        self._auto_advance.cancel()
        return self._apply(go_next(self._state, self._is_valid))

    def back(self) -> WizardSignal:
        """Navigate backward. Cancels any pending auto-advance."""
        self._auto_advance.cancel()
        return self._apply(go_back(self._state))

    def close(self) -> None:
        """Release the controller; cancels any pending auto-advance."""
        self._auto_advance.cancel()

    def _auto_next(self, scheduled_step: int) -> None:
        if self._state.step != scheduled_step:
            logger.debug(
                "Stale auto-advance ignored",
                scheduled_step=scheduled_step,
                current_step=self._state.step,
            )
            return
        self._apply(go_next(self._state, self._is_valid))

    def _apply(self, result: Transition[T]) -> WizardSignal:
        self._state = result.state
        if result.signal is WizardSignal.COMPLETED and self._on_complete is not None:
            self._on_complete(result.state.data)
        elif result.signal is WizardSignal.EXITED and self._on_exit is not None:
            self._on_exit()
        return result.signal
