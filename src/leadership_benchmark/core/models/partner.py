"""SQLAlchemy ORM models for the partner portfolio assessment.

Tables:
    partner_intakes         : one row per submitted partner intake form
    partner_portfolio_items : scored portfolio companies for an intake
    partner_plans           : the computed plan, optionally shared by slug
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class PartnerBase(DeclarativeBase):
    """Base class for partner ORM models."""


class PartnerIntakeRecord(PartnerBase):
    """A partner's intake form submission.

    Table: partner_intakes
    """

    __tablename__ = "partner_intakes"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Primary key UUID",
    )
    firm_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Partner firm name",
    )
    partner_type: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        comment="Partner category (consulting firm, VC/PE firm, ...)",
    )
    objectives_json: Mapped[list] = mapped_column(
        JSONB,
        nullable=False,
        server_default="[]",
        comment="Selected engagement goals",
    )
    pipeline_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Number of portfolio companies to assess (1-10)",
    )
    pipeline_names: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Comma-separated company names as typed",
    )
    urgency_window: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Engagement timeline window (0-30 days ... 90+ days)",
    )
    consent: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Partner agreed to the engagement terms",
    )
    contact_name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Optional contact person",
    )
    contact_email: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Optional contact email",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="Submission timestamp",
    )


class PartnerPortfolioItemRecord(PartnerBase):
    """A scored portfolio company belonging to an intake.

    Table: partner_portfolio_items
    """

    __tablename__ = "partner_portfolio_items"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Primary key UUID",
    )
    intake_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("partner_intakes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning intake",
    )
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Row order as entered by the partner",
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, comment="Company name")
    sector: Mapped[str | None] = mapped_column(String(100), nullable=True)
    stage: Mapped[str | None] = mapped_column(String(100), nullable=True)
    hype_vs_discipline: Mapped[str | None] = mapped_column(String(100), nullable=True)
    mental_scaffolding: Mapped[str | None] = mapped_column(String(100), nullable=True)
    decision_quality: Mapped[str | None] = mapped_column(String(100), nullable=True)
    vendor_resistance: Mapped[str | None] = mapped_column(String(100), nullable=True)
    pressure_intensity: Mapped[str | None] = mapped_column(String(100), nullable=True)
    sponsor_thinking: Mapped[str | None] = mapped_column(String(100), nullable=True)
    upgrade_willingness: Mapped[str | None] = mapped_column(String(100), nullable=True)
    cognitive_risk_score: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="0-100, higher means more AI waste risk",
    )
    capital_at_risk: Mapped[int] = mapped_column(Integer, nullable=False, comment="0-100")
    cognitive_readiness: Mapped[int] = mapped_column(Integer, nullable=False, comment="0-100")
    fit_score: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="100 minus the cognitive risk score",
    )
    recommendation: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Recommendation bucket label",
    )
    risk_flags_json: Mapped[list] = mapped_column(
        JSONB,
        nullable=False,
        server_default="[]",
        comment="Human-readable risk warnings",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class PartnerPlanRecord(PartnerBase):
    """A computed partner plan.

    ``share_slug`` stays NULL until a share link is requested; once set it
    is the only key the public read-only view accepts.

    Table: partner_plans
    """

    __tablename__ = "partner_plans"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Primary key UUID",
    )
    intake_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("partner_intakes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Intake the plan was computed from",
    )
    share_slug: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        unique=True,
        index=True,
        comment="Opaque token for the public read-only URL",
    )
    firm_name: Mapped[str] = mapped_column(String(255), nullable=False)
    objectives_json: Mapped[list] = mapped_column(JSONB, nullable=False, server_default="[]")
    urgency_window: Mapped[str] = mapped_column(String(50), nullable=False)
    pipeline_count: Mapped[int] = mapped_column(Integer, nullable=False)
    total_companies: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    average_risk_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sprint_candidates: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Estimated companies ready for a sprint",
    )
    recommendation_counts_json: Mapped[dict] = mapped_column(
        JSONB,
        nullable=False,
        server_default="{}",
        comment="Companies per recommendation bucket",
    )
    top_candidates_json: Mapped[list] = mapped_column(
        JSONB,
        nullable=False,
        server_default="[]",
        comment="Up to five critical/high-risk companies, highest risk first",
    )
    scored_items_json: Mapped[list] = mapped_column(
        JSONB,
        nullable=False,
        server_default="[]",
        comment="Snapshot of every scored company at plan creation",
    )
    insights_json: Mapped[list] = mapped_column(
        JSONB,
        nullable=False,
        server_default="[]",
        comment="Narrative insights shown with the plan",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
