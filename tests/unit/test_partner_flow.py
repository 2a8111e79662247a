"""Unit tests for the partner intake -> scoring -> results flow."""

from dataclasses import replace

import pytest

from leadership_benchmark.core.intake import PartnerIntake
from leadership_benchmark.core.partner_flow import (
    PartnerFlowData,
    PartnerStep,
    is_partner_step_valid,
    new_partner_wizard,
    scoring_progress,
    update_item,
    with_intake,
)
from leadership_benchmark.core.portfolio import PortfolioItem
from leadership_benchmark.core.wizard import WizardSignal

_ANSWERS: dict[str, str] = {
    "sector": "Technology",
    "hype_vs_discipline": "Hype Dominant",
    "mental_scaffolding": "Basic - Ad Hoc",
    "decision_quality": "Mixed - Inconsistent",
    "vendor_resistance": "Moderate - Some Pushback",
    "pressure_intensity": "Moderate - Steady",
    "sponsor_thinking": "Capable - Clear Thinking",
    "upgrade_willingness": "Open - Curious",
}


@pytest.fixture()
def intake() -> PartnerIntake:
    """An intake that passes validation."""
    return PartnerIntake(
        firm_name="Harbor Ventures",
        partner_type="Venture Capital",
        objectives=("Reduce AI waste",),
        pipeline_count=2,
        pipeline_names="Hypertrain, Steadyworks",
        urgency_window="0-30 days",
        consent=True,
    )


def _complete(data: PartnerFlowData) -> PartnerFlowData:
    for index in range(len(data.items)):
        data = update_item(data, index, **_ANSWERS)
    return data


class TestStepValidity:
    """Verify the per-step gates."""

    def test_intake_step_requires_valid_intake(self, intake: PartnerIntake) -> None:
        """An empty intake blocks; a valid one passes."""
        assert not is_partner_step_valid(PartnerStep.INTAKE, PartnerFlowData())
        assert is_partner_step_valid(PartnerStep.INTAKE, with_intake(PartnerFlowData(), intake))

    def test_scoring_step_requires_every_row_complete(self, intake: PartnerIntake) -> None:
        """One unfinished row blocks the scoring step."""
        data = with_intake(PartnerFlowData(), intake)
        data = update_item(data, 0, **_ANSWERS)

        assert not is_partner_step_valid(PartnerStep.SCORING, data)
        assert is_partner_step_valid(PartnerStep.SCORING, _complete(data))

    def test_scoring_step_requires_rows(self) -> None:
        """No rows means nothing to score."""
        assert not is_partner_step_valid(PartnerStep.SCORING, PartnerFlowData())


class TestIntakeSeeding:
    """Verify scoring rows follow the named companies."""

    def test_rows_are_seeded_from_pipeline_names(self, intake: PartnerIntake) -> None:
        """One empty row per named company, in order."""
        data = with_intake(PartnerFlowData(), intake)
        assert data.items == (PortfolioItem(name="Hypertrain"), PortfolioItem(name="Steadyworks"))

    def test_existing_answers_survive_intake_edit(self, intake: PartnerIntake) -> None:
        """Renaming the pipeline keeps rows for companies still named."""
        data = _complete(with_intake(PartnerFlowData(), intake))
        edited = replace(intake, pipeline_names="Steadyworks, Novalane")

        data = with_intake(data, edited)

        assert [item.name for item in data.items] == ["Steadyworks", "Novalane"]
        assert data.items[0].sector == "Technology"
        assert data.items[1] == PortfolioItem(name="Novalane")


class TestScoringProgress:
    """Verify the fill percentage across rows."""

    def test_empty_rows(self) -> None:
        """No rows is zero percent."""
        assert scoring_progress(()) == 0

    def test_partially_filled(self) -> None:
        """Nine of sixteen inputs rounds to 56%."""
        rows = (PortfolioItem(name="A", **_ANSWERS), PortfolioItem(name="B", sector="Retail"))
        assert scoring_progress(rows) == 56


class TestPartnerWizard:
    """Verify the controller built over the three partner steps."""

    def test_back_from_intake_exits(self) -> None:
        """Backing out of the intake returns to the landing page."""
        exits: list[bool] = []
        wizard = new_partner_wizard(on_exit=lambda: exits.append(True))

        assert wizard.back() is WizardSignal.EXITED
        assert exits == [True]

    def test_invalid_intake_blocks(self) -> None:
        """The scoring step is unreachable with an invalid intake."""
        wizard = new_partner_wizard()

        assert wizard.next() is WizardSignal.BLOCKED
        assert wizard.state.step == PartnerStep.INTAKE

    def test_full_walkthrough(self, intake: PartnerIntake) -> None:
        """Intake, scoring and results complete with the collected data."""
        completed: list[PartnerFlowData] = []
        wizard = new_partner_wizard(on_complete=completed.append)

        wizard.update(with_intake(wizard.state.data, intake))
        assert wizard.next() is WizardSignal.ADVANCED
        assert wizard.next() is WizardSignal.BLOCKED

        wizard.update(_complete(wizard.state.data))
        assert wizard.next() is WizardSignal.ADVANCED
        assert wizard.state.step == PartnerStep.RESULTS

        assert wizard.back() is WizardSignal.RETREATED
        assert wizard.state.step == PartnerStep.SCORING
        wizard.next()

        assert wizard.next() is WizardSignal.COMPLETED
        assert len(completed) == 1
        assert len(completed[0].items) == 2
