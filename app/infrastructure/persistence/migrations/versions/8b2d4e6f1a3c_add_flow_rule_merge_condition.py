"""add flow_rule.merge_condition

Revision ID: 8b2d4e6f1a3c
Revises: 3f9c1a7e2b4d
Create Date: 2026-10-19

Parallel joins: when several rules share a next_task, "all" waits for every
prerequisite task, "any" proceeds on the first. Existing rows become "all".
"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op

revision: str = "8b2d4e6f1a3c"
down_revision: Union[str, Sequence[str], None] = "3f9c1a7e2b4d"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column(
        "flow_rule",
        sa.Column("merge_condition", sa.String(), server_default="all", nullable=False),
    )
    op.create_check_constraint(
        "ck_flow_rule_merge_condition",
        "flow_rule",
        "merge_condition IN ('all', 'any')",
    )


def downgrade() -> None:
    op.drop_constraint("ck_flow_rule_merge_condition", "flow_rule", type_="check")
    op.drop_column("flow_rule", "merge_condition")
