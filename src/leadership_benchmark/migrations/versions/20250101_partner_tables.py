"""partner: portfolio assessment tables: intakes, portfolio items, plans.

Creates the three tables behind the partner portfolio flow. Plans are
published through an opaque share slug that stays NULL until a share link
is requested.

Revision ID: partner_001_tables
Revises:
Create Date: 2025-01-01 00:00:00.000000
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "partner_001_tables"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_COGNITIVE_COLUMNS: tuple[str, ...] = (
    "sector",
    "stage",
    "hype_vs_discipline",
    "mental_scaffolding",
    "decision_quality",
    "vendor_resistance",
    "pressure_intensity",
    "sponsor_thinking",
    "upgrade_willingness",
)


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        primary_key=True,
        server_default=sa.text("gen_random_uuid()"),
    )


def _timestamp_column(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("now()"),
    )


def upgrade() -> None:
    """Create partner_intakes, partner_portfolio_items and partner_plans."""
    # partner_intakes: one row per intake form submission
    op.create_table(
        "partner_intakes",
        _id_column(),
        sa.Column("firm_name", sa.String(255), nullable=False, comment="Partner firm name"),
        sa.Column(
            "partner_type",
            sa.String(100),
            nullable=True,
            comment="Partner category (consulting firm, VC/PE firm, ...)",
        ),
        sa.Column(
            "objectives_json",
            postgresql.JSONB,
            nullable=False,
            server_default="[]",
            comment="Selected engagement goals",
        ),
        sa.Column(
            "pipeline_count",
            sa.Integer,
            nullable=False,
            comment="Number of portfolio companies to assess (1-10)",
        ),
        sa.Column(
            "pipeline_names",
            sa.Text,
            nullable=False,
            comment="Comma-separated company names as typed",
        ),
        sa.Column(
            "urgency_window",
            sa.String(50),
            nullable=False,
            comment="Engagement timeline window (0-30 days ... 90+ days)",
        ),
        sa.Column(
            "consent",
            sa.Boolean,
            nullable=False,
            server_default=sa.false(),
            comment="Partner agreed to the engagement terms",
        ),
        sa.Column("contact_name", sa.String(255), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        _timestamp_column("created_at"),
    )

    # partner_portfolio_items: scored companies, replaced on resubmission
    op.create_table(
        "partner_portfolio_items",
        _id_column(),
        sa.Column(
            "intake_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("partner_intakes.id", ondelete="CASCADE"),
            nullable=False,
            comment="Owning intake",
        ),
        sa.Column(
            "position",
            sa.Integer,
            nullable=False,
            server_default="0",
            comment="Row order as entered by the partner",
        ),
        sa.Column("name", sa.String(255), nullable=False, comment="Company name"),
        *[sa.Column(name, sa.String(100), nullable=True) for name in _COGNITIVE_COLUMNS],
        sa.Column(
            "cognitive_risk_score",
            sa.Integer,
            nullable=False,
            comment="0-100, higher means more AI waste risk",
        ),
        sa.Column("capital_at_risk", sa.Integer, nullable=False, comment="0-100"),
        sa.Column("cognitive_readiness", sa.Integer, nullable=False, comment="0-100"),
        sa.Column(
            "fit_score",
            sa.Integer,
            nullable=False,
            comment="100 minus the cognitive risk score",
        ),
        sa.Column(
            "recommendation",
            sa.String(100),
            nullable=False,
            comment="Recommendation bucket label",
        ),
        sa.Column(
            "risk_flags_json",
            postgresql.JSONB,
            nullable=False,
            server_default="[]",
            comment="Human-readable risk warnings",
        ),
        _timestamp_column("created_at"),
    )
    op.create_index(
        "ix_partner_portfolio_items_intake_id",
        "partner_portfolio_items",
        ["intake_id"],
    )

    # partner_plans: computed plan snapshots, optionally shared
    op.create_table(
        "partner_plans",
        _id_column(),
        sa.Column(
            "intake_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("partner_intakes.id", ondelete="CASCADE"),
            nullable=False,
            comment="Intake the plan was computed from",
        ),
        sa.Column(
            "share_slug",
            sa.String(64),
            nullable=True,
            comment="Opaque token for the public read-only URL",
        ),
        sa.Column("firm_name", sa.String(255), nullable=False),
        sa.Column("objectives_json", postgresql.JSONB, nullable=False, server_default="[]"),
        sa.Column("urgency_window", sa.String(50), nullable=False),
        sa.Column("pipeline_count", sa.Integer, nullable=False),
        sa.Column("total_companies", sa.Integer, nullable=False, server_default="0"),
        sa.Column("average_risk_score", sa.Integer, nullable=False, server_default="0"),
        sa.Column(
            "sprint_candidates",
            sa.Integer,
            nullable=False,
            server_default="0",
            comment="Estimated companies ready for a sprint",
        ),
        sa.Column(
            "recommendation_counts_json",
            postgresql.JSONB,
            nullable=False,
            server_default="{}",
            comment="Companies per recommendation bucket",
        ),
        sa.Column(
            "top_candidates_json",
            postgresql.JSONB,
            nullable=False,
            server_default="[]",
            comment="Up to five critical/high-risk companies, highest risk first",
        ),
        sa.Column(
            "scored_items_json",
            postgresql.JSONB,
            nullable=False,
            server_default="[]",
            comment="Snapshot of every scored company at plan creation",
        ),
        sa.Column(
            "insights_json",
            postgresql.JSONB,
            nullable=False,
            server_default="[]",
            comment="Narrative insights shown with the plan",
        ),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
    )
    op.create_index("ix_partner_plans_intake_id", "partner_plans", ["intake_id"])
    op.create_index(
        "ix_partner_plans_share_slug",
        "partner_plans",
        ["share_slug"],
        unique=True,
    )


def downgrade() -> None:
    """Drop the partner tables in reverse dependency order."""
    op.drop_index("ix_partner_plans_share_slug", table_name="partner_plans")
    op.drop_index("ix_partner_plans_intake_id", table_name="partner_plans")
    op.drop_table("partner_plans")

    op.drop_index("ix_partner_portfolio_items_intake_id", table_name="partner_portfolio_items")
    op.drop_table("partner_portfolio_items")

    op.drop_table("partner_intakes")
