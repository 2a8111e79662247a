"""The 10-step deep profile questionnaire.

Step validity:
    1  thinking process selected            (auto-advance)
    2  at least one communication style
    3  work breakdown sums to 95-105
    4  at least one information need
    5  transformation goal selected         (auto-advance)
    6  time-waste slider (always valid)
    7  time-waste examples longer than 10 characters
    8  exactly three delegate tasks
    9  biggest challenge selected           (auto-advance)
    10 at least one stakeholder

The work breakdown is a percentage allocation across five activities. Moving
one slider redistributes the remainder across the other four in proportion to
their previous values; rounding can leave the total at 99 or 101, which the
95-105 tolerance band absorbs.
"""

from collections.abc import Callable
from dataclasses import dataclass, field, replace

from leadership_benchmark.core.questions import (
    REQUIRED_DELEGATE_TASKS,
    WORK_BREAKDOWN_FIELDS,
)
from leadership_benchmark.core.scoring import round_half_up
from leadership_benchmark.core.wizard import (
    DEFAULT_AUTO_ADVANCE_DELAY_SECONDS,
    WizardController,
    WizardState,
)

DEEP_PROFILE_STEPS: int = 10
AUTO_ADVANCE_STEPS: frozenset[int] = frozenset({1, 5, 9})

ALLOCATION_TOTAL: int = 100
ALLOCATION_MIN_TOTAL: int = 95
ALLOCATION_MAX_TOTAL: int = 105
MIN_EXAMPLES_LENGTH: int = 10
DEFAULT_TIME_WASTE: int = 30
TIME_WASTE_STEP: int = 5


def _default_work_breakdown() -> dict[str, int]:
    return {name: 20 for name in WORK_BREAKDOWN_FIELDS}


@dataclass(frozen=True)
class DeepProfile:
    """Answers collected by the deep profile questionnaire.

    Attributes:
        thinking_process: How the executive works through problems.
        communication_style: Selected communication styles.
        work_breakdown: Percentage of time per activity; should total 100.
        information_needs: Information the executive relies on.
        transformation_goal: What the executive most wants from AI.
        time_waste: Percent of time spent on low-value work (0-100, step 5).
        time_waste_examples: Free-text examples of wasted time.
        delegate_tasks: Exactly three tasks the executive would hand to AI.
        biggest_challenge: Biggest communication challenge.
        stakeholders: Audiences the executive communicates with.
    """

    thinking_process: str = ""
    communication_style: tuple[str, ...] = ()
    work_breakdown: dict[str, int] = field(default_factory=_default_work_breakdown)
    information_needs: tuple[str, ...] = ()
    transformation_goal: str = ""
    time_waste: int = DEFAULT_TIME_WASTE
    time_waste_examples: str = ""
    delegate_tasks: tuple[str, ...] = ()
    biggest_challenge: str = ""
    stakeholders: tuple[str, ...] = ()

    @property
    def allocation_total(self) -> int:
        """Sum of the work breakdown percentages."""
        return sum(self.work_breakdown.values())


_STEP_RULES: dict[int, Callable[[DeepProfile], bool]] = {
    1: lambda p: bool(p.thinking_process),
    2: lambda p: len(p.communication_style) > 0,
    3: lambda p: ALLOCATION_MIN_TOTAL <= p.allocation_total <= ALLOCATION_MAX_TOTAL,
    4: lambda p: len(p.information_needs) > 0,
    5: lambda p: bool(p.transformation_goal),
    6: lambda p: True,
    7: lambda p: len(p.time_waste_examples.strip()) > MIN_EXAMPLES_LENGTH,
    8: lambda p: len(p.delegate_tasks) == REQUIRED_DELEGATE_TASKS,
    9: lambda p: bool(p.biggest_challenge),
    10: lambda p: len(p.stakeholders) > 0,
}


def is_step_valid(step: int, profile: DeepProfile) -> bool:
    """Return whether the given step's answers allow proceeding.

    Args:
        step: 1-based step index.
        profile: Current answers.

    Returns:
        True when the step's validity rule holds. Unknown steps are invalid.
    """
    rule = _STEP_RULES.get(step)
    return rule is not None and rule(profile)


def is_complete(profile: DeepProfile) -> bool:
    """True when every step's validity rule holds."""
    return all(rule(profile) for rule in _STEP_RULES.values())


def rebalance(
    breakdown: dict[str, int],
    changed_field: str,
    value: int,
) -> dict[str, int]:
    """Set one allocation and redistribute the remainder proportionally.

    The remaining ``100 - value`` is split across the other fields in
    proportion to their previous values, each rounded half-up. When the other
    fields previously summed to zero the remainder is split equally.

    Args:
        breakdown: Current allocation by field.
        changed_field: Field the user moved.
        value: New value for that field, clamped to 0-100.

    Returns:
        A new allocation mapping. The input is not mutated.

    Raises:
        KeyError: If ``changed_field`` is not part of the allocation.
    """
    if changed_field not in breakdown:
        raise KeyError(f"Unknown allocation field {changed_field!r}")

    value = max(0, min(ALLOCATION_TOTAL, value))
    remaining = ALLOCATION_TOTAL - value
    others = [name for name in breakdown if name != changed_field]
    others_total = sum(breakdown[name] for name in others)

    updated = {changed_field: value}
    for name in others:
        if others_total > 0:
            updated[name] = round_half_up(breakdown[name] / others_total * remaining)
        else:
            updated[name] = round_half_up(remaining / len(others))

    return {name: updated[name] for name in breakdown}


def set_allocation(profile: DeepProfile, changed_field: str, value: int) -> DeepProfile:
    """Return a profile with the work breakdown rebalanced around one field."""
    return replace(profile, work_breakdown=rebalance(profile.work_breakdown, changed_field, value))


def toggle_delegate_task(profile: DeepProfile, task: str) -> DeepProfile:
    """Select or deselect a delegate task.

    Selecting a fourth task is rejected and the profile is returned unchanged.

    Args:
        profile: Current answers.
        task: Task label to toggle.

    Returns:
        The updated profile.
    """
    if task in profile.delegate_tasks:
        return replace(
            profile,
            delegate_tasks=tuple(t for t in profile.delegate_tasks if t != task),
        )
    if len(profile.delegate_tasks) >= REQUIRED_DELEGATE_TASKS:
        return profile
    return replace(profile, delegate_tasks=(*profile.delegate_tasks, task))


def toggle_choice(selected: tuple[str, ...], option: str) -> tuple[str, ...]:
    """Toggle an option in an unrestricted multi-select."""
    if option in selected:
        return tuple(item for item in selected if item != option)
    return (*selected, option)


def new_deep_profile_wizard(
    on_complete: Callable[[DeepProfile], None] | None = None,
    on_exit: Callable[[], None] | None = None,
    auto_advance_delay_seconds: float = DEFAULT_AUTO_ADVANCE_DELAY_SECONDS,
) -> WizardController[DeepProfile]:
    """Build a controller for a fresh deep profile questionnaire.

    Args:
        on_complete: Receives the finished profile after step 10.
        on_exit: Called when the user backs out of step 1.
        auto_advance_delay_seconds: Delay for steps 1, 5 and 9.

    Returns:
        A WizardController positioned on step 1 with an empty profile.
    """
    return WizardController(
        initial=WizardState(step=1, total_steps=DEEP_PROFILE_STEPS, data=DeepProfile()),
        is_valid=is_step_valid,
        on_complete=on_complete,
        on_exit=on_exit,
        auto_advance_steps=AUTO_ADVANCE_STEPS,
        auto_advance_delay_seconds=auto_advance_delay_seconds,
    )
