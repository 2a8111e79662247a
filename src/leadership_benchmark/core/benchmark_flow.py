"""Question flow for the six-statement leadership benchmark.

The flow is a ``WizardState`` whose steps are the six statements and whose
payload is the tuple of recorded answers. A step is valid once its statement
has an answer, so ``next`` only moves past answered statements. Answering a
statement replaces any earlier answer to it and advances; answering the last
statement completes the flow. ``back`` from a completed flow reopens the last
statement, and ``back`` from the first statement signals an exit.
"""

from collections.abc import Callable
from dataclasses import dataclass, field, replace

from leadership_benchmark.core.questions import (
    BENCHMARK_QUESTIONS,
    BenchmarkQuestion,
)
from leadership_benchmark.core.scoring import round_half_up
from leadership_benchmark.core.wizard import (
    WizardController,
    WizardSignal,
    WizardState,
    go_back,
    go_next,
)

MINUTES_PER_QUESTION: float = 0.33


@dataclass(frozen=True)
class BenchmarkAnswer:
    """A recorded answer to one benchmark statement."""

    question_id: str
    value: str
    phase: str


Answers = tuple[BenchmarkAnswer, ...]


def _start() -> WizardState[Answers]:
    return WizardState(step=1, total_steps=len(BENCHMARK_QUESTIONS), data=())


def is_statement_answered(step: int, answers: Answers) -> bool:
    """Validity predicate: the statement shown on ``step`` has an answer."""
    question_id = BENCHMARK_QUESTIONS[step - 1].question_id
    return any(answer.question_id == question_id for answer in answers)


@dataclass(frozen=True)
class BenchmarkFlowState:
    """Immutable state of the benchmark question flow.

    Attributes:
        wizard: Step position and recorded answers.
        is_complete: True once the final statement has been answered.
    """

    wizard: WizardState[Answers] = field(default_factory=_start)
    is_complete: bool = False

    @property
    def current_index(self) -> int:
        """0-based index of the statement being shown."""
        return self.wizard.step - 1

    @property
    def answers(self) -> Answers:
        """Recorded answers in answer order."""
        return self.wizard.data

    @property
    def current_question(self) -> BenchmarkQuestion | None:
        """The statement being shown, or None once complete."""
        if self.is_complete:
            return None
        return BENCHMARK_QUESTIONS[self.current_index]

    def answers_by_question(self) -> dict[str, str]:
        """Answer values keyed by question id, as consumed by scoring."""
        return {answer.question_id: answer.value for answer in self.answers}


@dataclass(frozen=True)
class BenchmarkProgress:
    """Progress figures shown while the benchmark is being answered."""

    completed_answers: int
    total_questions: int
    progress_percentage: float
    estimated_minutes_remaining: int
    phase: str = field(default="")


def _record(answers: Answers, question: BenchmarkQuestion, value: str) -> Answers:
    kept = tuple(a for a in answers if a.question_id != question.question_id)
    return (*kept, BenchmarkAnswer(question_id=question.question_id, value=value, phase=question.phase))


def answer_question(state: BenchmarkFlowState, question_id: str, value: str) -> BenchmarkFlowState:
    """Record an answer to the statement being shown and advance.

    Args:
        state: Current flow state.
        question_id: Statement being answered.
        value: Answer string such as "4 - Agree".

    Returns:
        The new state. Answering after completion is ignored.

    Raises:
        ValueError: If ``question_id`` is not the statement being shown.
    """
    question = state.current_question
    if question is None:
        return state
    if question.question_id != question_id:
        raise ValueError(f"Expected an answer to {question.question_id}, got {question_id}")

    wizard = replace(state.wizard, data=_record(state.answers, question, value))
    result = go_next(wizard, is_statement_answered)
    if result.signal is WizardSignal.COMPLETED:
        return replace(state, wizard=result.state, is_complete=True)
    return replace(state, wizard=result.state)


def previous_question(
    state: BenchmarkFlowState,
    on_exit: Callable[[], None] | None = None,
) -> BenchmarkFlowState:
    """Step back one statement.

    A completed flow is reopened on its last statement. On the first
    statement the state is unchanged and ``on_exit`` is called.

    Args:
        state: Current flow state.
        on_exit: Called when backing out of the first statement.

    Returns:
        The new state; answers are never discarded.
    """
    if state.is_complete:
        return replace(state, is_complete=False)

    result = go_back(state.wizard)
    if result.signal is WizardSignal.EXITED:
        if on_exit is not None:
            on_exit()
        return state
    return replace(state, wizard=result.state)


def new_benchmark_wizard(
    on_complete: Callable[[Answers], None] | None = None,
    on_exit: Callable[[], None] | None = None,
) -> WizardController[Answers]:
    """Build a controller for a fresh benchmark run.

    Args:
        on_complete: Receives the recorded answers after the sixth statement.
        on_exit: Called when the user backs out of the first statement.

    Returns:
        A WizardController positioned on the first statement.
    """
    return WizardController(
        initial=_start(),
        is_valid=is_statement_answered,
        on_complete=on_complete,
        on_exit=on_exit,
    )


def record_answer(answers: Answers, step: int, value: str) -> Answers:
    """Return ``answers`` with the statement on ``step`` answered ``value``."""
    return _record(answers, BENCHMARK_QUESTIONS[step - 1], value)


def progress(state: BenchmarkFlowState) -> BenchmarkProgress:
    """Compute progress figures for the current state.

    Args:
        state: Current flow state.

    Returns:
        BenchmarkProgress with completed count, percentage, and minutes left.
    """
    total = len(BENCHMARK_QUESTIONS)
    completed = len(state.answers)
    question = state.current_question
    return BenchmarkProgress(
        completed_answers=completed,
        total_questions=total,
        progress_percentage=round(completed / total * 100, 2),
        estimated_minutes_remaining=round_half_up((total - completed) * MINUTES_PER_QUESTION),
        phase=question.phase if question else "",
    )
