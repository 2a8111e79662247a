"""Partner assessment flow: intake, portfolio scoring, then the plan results.

The flow is a three-step ``WizardState``. The intake step is valid when the
intake form validates; the scoring step is valid when there is at least one
row and every row is complete. ``back`` from the intake step signals an exit
to the landing page.
"""

import enum
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from leadership_benchmark.core import portfolio
from leadership_benchmark.core.intake import PartnerIntake, parse_pipeline_names, validate_intake
from leadership_benchmark.core.portfolio import PortfolioItem
from leadership_benchmark.core.scoring import round_half_up
from leadership_benchmark.core.wizard import WizardController, WizardState


class PartnerStep(int, enum.Enum):
    """Steps of the partner flow (1-based)."""

    INTAKE = 1
    SCORING = 2
    RESULTS = 3


@dataclass(frozen=True)
class PartnerFlowData:
    """Answers collected across the partner flow."""

    intake: PartnerIntake = field(default_factory=PartnerIntake)
    items: tuple[PortfolioItem, ...] = ()


def is_partner_step_valid(step: int, data: PartnerFlowData) -> bool:
    """Validity predicate for the partner flow steps."""
    if step == PartnerStep.INTAKE:
        return validate_intake(data.intake).is_valid
    if step == PartnerStep.SCORING:
        return bool(data.items) and all(portfolio.is_complete(item) for item in data.items)
    return True


def with_intake(data: PartnerFlowData, intake: PartnerIntake) -> PartnerFlowData:
    """Set the intake and seed one scoring row per named company.

    Rows already entered for a company that is still named keep their
    answers; rows for companies no longer named are dropped.
    """
    existing = {item.name: item for item in data.items}
    items = tuple(
        existing.get(name, PortfolioItem(name=name))
        for name in parse_pipeline_names(intake.pipeline_names)
    )
    return replace(data, intake=intake, items=items)


def update_item(data: PartnerFlowData, index: int, **answers: str) -> PartnerFlowData:
    """Return ``data`` with one scoring row's answers updated.

    Raises:
        IndexError: If ``index`` is not a row of the flow.
    """
    items = list(data.items)
    items[index] = replace(items[index], **answers)
    return replace(data, items=tuple(items))


def scoring_progress(items: tuple[PortfolioItem, ...]) -> int:
    """Percentage of the categorical inputs filled in across all rows."""
    if not items:
        return 0
    total = len(items) * len(portfolio.CATEGORICAL_FIELDS)
    filled = sum(
        1
        for item in items
        for name in portfolio.CATEGORICAL_FIELDS
        if getattr(item, name).strip()
    )
    return round_half_up(filled / total * 100)


def new_partner_wizard(
    on_complete: Callable[[PartnerFlowData], None] | None = None,
    on_exit: Callable[[], None] | None = None,
) -> WizardController[PartnerFlowData]:
    """Build a controller for a fresh partner assessment.

    Args:
        on_complete: Receives the intake and rows when leaving the results step.
        on_exit: Called when the user backs out of the intake step.

    Returns:
        A WizardController positioned on the intake step.
    """
    return WizardController(
        initial=WizardState(
            step=PartnerStep.INTAKE.value,
            total_steps=len(PartnerStep),
            data=PartnerFlowData(),
        ),
        is_valid=is_partner_step_valid,
        on_complete=on_complete,
        on_exit=on_exit,
    )
