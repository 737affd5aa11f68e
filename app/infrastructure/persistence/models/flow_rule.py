"""FlowRule ORM model. One transition of a workflow definition ("system")."""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Identity,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import OrganizationModel


class FlowRule(OrganizationModel, Base):
    """Flow rule. Table: flow_rule. Empty current_task marks the start rule."""

    __tablename__ = "flow_rule"

    # Insertion order; rows created in one transaction share created_at.
    position: Mapped[int] = mapped_column(BigInteger, Identity(), nullable=False)
    system: Mapped[str] = mapped_column(String, nullable=False)
    current_task: Mapped[str] = mapped_column(
        String, nullable=False, default="", server_default=""
    )
    status: Mapped[str] = mapped_column(
        String, nullable=False, default="", server_default=""
    )
    next_task: Mapped[str] = mapped_column(String, nullable=False)
    tat: Mapped[int] = mapped_column(Integer, nullable=False)
    tat_type: Mapped[str] = mapped_column(
        String, nullable=False, default="daytat", server_default="daytat"
    )
    doer: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    form_id: Mapped[str | None] = mapped_column(String, nullable=True)
    transferable: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false"
    )
    # Comma-separated addresses a task of this rule may be transferred to.
    transfer_to_emails: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Parallel join behaviour: "all" or "any".
    merge_condition: Mapped[str] = mapped_column(
        String, nullable=False, default="all", server_default="all"
    )

    __table_args__ = (
        CheckConstraint(
            "merge_condition IN ('all', 'any')",
            name="ck_flow_rule_merge_condition",
        ),
        Index("ix_flow_rule_org_system", "organization_id", "system"),
        Index(
            "ix_flow_rule_org_system_task_status",
            "organization_id",
            "system",
            "current_task",
            "status",
        ),
    )
