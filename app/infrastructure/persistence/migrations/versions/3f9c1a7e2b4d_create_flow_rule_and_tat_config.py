"""create flow_rule and tat_config tables

Revision ID: 3f9c1a7e2b4d
Revises:
Create Date: 2026-10-19

flow_rule: one transition per row, scoped by (organization_id, system).
tat_config: one office-hours calendar per organization.
"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import JSONB

revision: str = "3f9c1a7e2b4d"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "flow_rule",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("organization_id", sa.String(length=64), nullable=False),
        sa.Column("position", sa.BigInteger(), sa.Identity(), nullable=False),
        sa.Column("system", sa.String(), nullable=False),
        sa.Column("current_task", sa.String(), server_default="", nullable=False),
        sa.Column("status", sa.String(), server_default="", nullable=False),
        sa.Column("next_task", sa.String(), nullable=False),
        sa.Column("tat", sa.Integer(), nullable=False),
        sa.Column("tat_type", sa.String(), server_default="daytat", nullable=False),
        sa.Column("doer", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("form_id", sa.String(), nullable=True),
        sa.Column(
            "transferable", sa.Boolean(), server_default=sa.false(), nullable=False
        ),
        sa.Column("transfer_to_emails", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_flow_rule_organization_id", "flow_rule", ["organization_id"], unique=False
    )
    op.create_index(
        "ix_flow_rule_org_system",
        "flow_rule",
        ["organization_id", "system"],
        unique=False,
    )
    op.create_index(
        "ix_flow_rule_org_system_task_status",
        "flow_rule",
        ["organization_id", "system", "current_task", "status"],
        unique=False,
    )

    op.create_table(
        "tat_config",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("organization_id", sa.String(length=64), nullable=False),
        sa.Column("office_start_hour", sa.Integer(), nullable=False),
        sa.Column("office_end_hour", sa.Integer(), nullable=False),
        sa.Column("timezone", sa.String(), nullable=False),
        sa.Column("skip_weekends", sa.Boolean(), nullable=False),
        sa.Column("weekend_days", JSONB, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("organization_id", name="uq_tat_config_organization"),
    )
    op.create_index(
        "ix_tat_config_organization_id", "tat_config", ["organization_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_tat_config_organization_id", table_name="tat_config")
    op.drop_table("tat_config")
    op.drop_index("ix_flow_rule_org_system_task_status", table_name="flow_rule")
    op.drop_index("ix_flow_rule_org_system", table_name="flow_rule")
    op.drop_index("ix_flow_rule_organization_id", table_name="flow_rule")
    op.drop_table("flow_rule")
