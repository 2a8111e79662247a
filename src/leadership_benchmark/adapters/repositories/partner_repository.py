"""Repositories for the partner portfolio data layer.

Implements persistence for PartnerIntakeRecord, PartnerPortfolioItemRecord
and PartnerPlanRecord using SQLAlchemy 2.0 async ORM.
"""

import uuid
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from leadership_benchmark.core.models.partner import (
    PartnerIntakeRecord,
    PartnerPlanRecord,
    PartnerPortfolioItemRecord,
)
from leadership_benchmark.core.portfolio import CATEGORICAL_FIELDS
from leadership_benchmark.observability import get_logger

logger = get_logger(__name__)


class PartnerIntakeRepository:
    """Repository for PartnerIntakeRecord persistence."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialise with an async database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def create(
        self,
        firm_name: str,
        partner_type: str | None,
        objectives: list[str],
        pipeline_count: int,
        pipeline_names: str,
        urgency_window: str,
        consent: bool,
        contact_name: str | None,
        contact_email: str | None,
    ) -> PartnerIntakeRecord:
        """Persist an intake form.

        Returns:
            The persisted PartnerIntakeRecord.
        """
        record = PartnerIntakeRecord(
            firm_name=firm_name,
            partner_type=partner_type,
            objectives_json=objectives,
            pipeline_count=pipeline_count,
            pipeline_names=pipeline_names,
            urgency_window=urgency_window,
            consent=consent,
            contact_name=contact_name,
            contact_email=contact_email,
        )
        self._session.add(record)
        await self._session.flush()
        await self._session.refresh(record)

        logger.debug("Partner intake persisted", intake_id=str(record.id))
        return record

    async def get_by_id(self, intake_id: uuid.UUID) -> PartnerIntakeRecord | None:
        """Retrieve an intake by primary key.

        Args:
            intake_id: Intake UUID.

        Returns:
            The record, or None if it does not exist.
        """
        result = await self._session.execute(
            select(PartnerIntakeRecord).where(PartnerIntakeRecord.id == intake_id)
        )
        return result.scalar_one_or_none()


class PortfolioItemRepository:
    """Repository for PartnerPortfolioItemRecord persistence."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialise with an async database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def replace_for_intake(
        self,
        intake_id: uuid.UUID,
        items: list[dict[str, Any]],
    ) -> list[PartnerPortfolioItemRecord]:
        """Replace all items of an intake.

        Args:
            intake_id: Owning intake.
            items: Scored rows as produced by ``scored_item_to_dict``.

        Returns:
            The persisted records in entry order.
        """
        await self._session.execute(
            delete(PartnerPortfolioItemRecord).where(
                PartnerPortfolioItemRecord.intake_id == intake_id
            )
        )

        records = [
            PartnerPortfolioItemRecord(
                intake_id=intake_id,
                position=position,
                name=item["name"],
                stage=item.get("stage") or None,
                cognitive_risk_score=item["cognitive_risk_score"],
                capital_at_risk=item["capital_at_risk"],
                cognitive_readiness=item["cognitive_readiness"],
                fit_score=item["fit_score"],
                recommendation=item["recommendation"],
                risk_flags_json=item.get("risk_flags", []),
                **{name: item.get(name) or None for name in CATEGORICAL_FIELDS},
            )
            for position, item in enumerate(items)
        ]
        self._session.add_all(records)
        await self._session.flush()

        logger.debug(
            "Portfolio items persisted",
            intake_id=str(intake_id),
            count=len(records),
        )
        return records

    async def list_by_intake(self, intake_id: uuid.UUID) -> list[PartnerPortfolioItemRecord]:
        """Retrieve the items of an intake in entry order.

        Args:
            intake_id: Owning intake.

        Returns:
            List of records ordered by position.
        """
        result = await self._session.execute(
            select(PartnerPortfolioItemRecord)
            .where(PartnerPortfolioItemRecord.intake_id == intake_id)
            .order_by(PartnerPortfolioItemRecord.position)
        )
        return list(result.scalars().all())


class PartnerPlanRepository:
    """Repository for PartnerPlanRecord persistence."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialise with an async database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def create(self, intake_id: uuid.UUID, plan: dict[str, Any]) -> PartnerPlanRecord:
        """Persist a computed plan.

        Args:
            intake_id: Intake the plan was computed from.
            plan: Column values for the plan.

        Returns:
            The persisted PartnerPlanRecord.
        """
        record = PartnerPlanRecord(intake_id=intake_id, **plan)
        self._session.add(record)
        await self._session.flush()
        await self._session.refresh(record)

        logger.debug("Partner plan persisted", plan_id=str(record.id))
        return record

    async def get_by_id(self, plan_id: uuid.UUID) -> PartnerPlanRecord | None:
        """Retrieve a plan by primary key."""
        result = await self._session.execute(
            select(PartnerPlanRecord).where(PartnerPlanRecord.id == plan_id)
        )
        return result.scalar_one_or_none()

    async def get_by_share_slug(self, share_slug: str) -> PartnerPlanRecord | None:
        """Retrieve the plan published under a share slug."""
        result = await self._session.execute(
            select(PartnerPlanRecord).where(PartnerPlanRecord.share_slug == share_slug)
        )
        return result.scalar_one_or_none()

    async def set_share_slug(self, plan_id: uuid.UUID, share_slug: str) -> PartnerPlanRecord | None:
        """Store the share slug on a plan.

        Args:
            plan_id: Plan UUID.
            share_slug: Opaque slug for the public URL.

        Returns:
            The updated record, or None if the plan does not exist.
        """
        await self._session.execute(
            update(PartnerPlanRecord)
            .where(PartnerPlanRecord.id == plan_id)
            .values(share_slug=share_slug)
        )
        await self._session.flush()
        return await self.get_by_id(plan_id)
