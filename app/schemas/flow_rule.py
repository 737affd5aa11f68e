"""Flow rule API schemas."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.application.dtos.flow_rule import FlowRuleCreate
from app.application.services.tat_calculator import MAX_TAT_VALUE
from app.domain.enums import TATType


def _canonical_tat_type(v: Any) -> Any:
    """Map tat_type (any case, short aliases allowed) to its canonical value."""
    if v is None or isinstance(v, TATType):
        return v.value if isinstance(v, TATType) else v
    resolved = TATType.lookup(str(v))
    if resolved is None:
        raise ValueError(f"tat_type must be one of: {', '.join(TATType.values())}")
    return resolved.value


class FlowRuleCreateRequest(BaseModel):
    """Request body for creating a flow rule.

    Empty current_task makes it the start rule; empty next_task ends the flow.
    """

    system: str = Field(..., min_length=1, max_length=128)
    current_task: str = Field(default="", max_length=255)
    status: str = Field(default="", max_length=64)
    next_task: str = Field(..., max_length=255)
    tat: int = Field(..., ge=0, le=MAX_TAT_VALUE)
    tat_type: str = Field(
        default=TATType.DAY.value,
        description="hourtat, daytat, beforetat or specifytat (hour/day/before/specify accepted)",
    )
    doer: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    form_id: str | None = Field(default=None, max_length=255)
    transferable: bool = False
    transfer_to_emails: list[EmailStr] | None = None
    merge_condition: Literal["all", "any"] = Field(
        default="all",
        description="Parallel join: wait for all rules sharing next_task, or any one",
    )

    @field_validator("tat_type", mode="before")
    @classmethod
    def _tat_type_known(cls, v: Any) -> Any:
        return _canonical_tat_type(v)

    def to_dto(self) -> FlowRuleCreate:
        return FlowRuleCreate(
            system=self.system,
            current_task=self.current_task,
            status=self.status,
            next_task=self.next_task,
            tat=self.tat,
            tat_type=self.tat_type,
            doer=self.doer,
            email=str(self.email),
            merge_condition=self.merge_condition,
            form_id=self.form_id,
            transferable=self.transferable,
            transfer_to_emails=(
                [str(e) for e in self.transfer_to_emails]
                if self.transfer_to_emails
                else None
            ),
        )


class FlowRuleUpdate(BaseModel):
    """Request body for PATCH (partial update). Only fields sent are changed."""

    system: str | None = Field(default=None, min_length=1, max_length=128)
    current_task: str | None = Field(default=None, max_length=255)
    status: str | None = Field(default=None, max_length=64)
    next_task: str | None = Field(default=None, max_length=255)
    tat: int | None = Field(default=None, ge=0, le=MAX_TAT_VALUE)
    tat_type: str | None = None
    doer: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    form_id: str | None = Field(default=None, max_length=255)
    transferable: bool | None = None
    transfer_to_emails: list[EmailStr] | None = None
    merge_condition: Literal["all", "any"] | None = None

    @field_validator("tat_type", mode="before")
    @classmethod
    def _tat_type_known(cls, v: Any) -> Any:
        return _canonical_tat_type(v)

    def changes(self) -> dict[str, Any]:
        """Return the fields the client sent; nullable-only fields may be cleared."""
        sent = self.model_dump(exclude_unset=True)
        nullable = {"form_id", "transfer_to_emails"}
        changes = {k: v for k, v in sent.items() if v is not None or k in nullable}
        if "email" in changes:
            changes["email"] = str(changes["email"])
        if changes.get("transfer_to_emails"):
            changes["transfer_to_emails"] = [str(e) for e in changes["transfer_to_emails"]]
        return changes


class FlowRuleResponse(BaseModel):
    """Flow rule response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    organization_id: str
    system: str
    current_task: str
    status: str
    next_task: str
    tat: int
    tat_type: str
    doer: str
    email: str
    form_id: str | None = None
    transferable: bool = False
    transfer_to_emails: list[str] | None = None
    merge_condition: str = "all"


class FlowRuleBulkCreateRequest(BaseModel):
    """Request body for POST /flow-rules/bulk. Size limits are checked by the use case."""

    rules: list[FlowRuleCreateRequest]


class BulkRuleFailureResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    index: int
    error: str
    cycle: list[str] | None = None


class FlowRuleBulkCreateResponse(BaseModel):
    """Bulk create outcome: valid rules are created even when others fail."""

    model_config = ConfigDict(from_attributes=True)

    total: int
    created: int
    failed: int
    rules: list[FlowRuleResponse]
    failed_rules: list[BulkRuleFailureResponse]


class FlowRuleValidateRequest(BaseModel):
    """Dry-run cycle check: would this edge close a loop in system?"""

    system: str = Field(..., min_length=1, max_length=128)
    current_task: str = Field(default="", max_length=255)
    status: str = Field(default="", max_length=64)
    next_task: str = Field(..., max_length=255)
    exclude_rule_id: str | None = Field(
        default=None,
        description="Ignore this persisted rule (checking an edit of an existing rule).",
    )


class CycleCheckResponse(BaseModel):
    """Cycle check result (camelCase, matching the flow builder client)."""

    model_config = ConfigDict(populate_by_name=True)

    has_cycle: bool = Field(..., serialization_alias="hasCycle")
    cycle: list[str] | None = None
    message: str | None = None
