"""Flow rule and TAT config repository integration tests.

Require Postgres with migrations applied; the session is rolled back after each test.
"""

import pytest

from app.application.dtos.flow_rule import FlowRuleCreate
from app.domain.value_objects.core import TATConfig
from app.infrastructure.persistence.repositories import (
    FlowRuleRepository,
    TATConfigRepository,
)

ORG = "repo-test-org"


def _data(current_task: str, next_task: str, **overrides) -> FlowRuleCreate:
    values = {
        "system": "repo-test-system",
        "current_task": current_task,
        "next_task": next_task,
        "tat": 1,
        "tat_type": "hourtat",
        "doer": "Ops",
        "email": "ops@example.com",
    }
    values.update(overrides)
    return FlowRuleCreate(**values)


@pytest.mark.requires_db
async def test_create_and_list_in_creation_order(db_session) -> None:
    """Rules of one system come back in the order they were created."""
    repo = FlowRuleRepository(db_session)
    first = await repo.create_rule(ORG, _data("", "A"))
    second = await repo.create_rule(ORG, _data("A", "B", status="done"))
    third = await repo.create_rule(ORG, _data("B", "C"))
    rules = await repo.list_for_system(ORG, "repo-test-system")
    assert [r.id for r in rules] == [first.id, second.id, third.id]
    assert rules[0].is_start
    assert rules[1].status == "done"


@pytest.mark.requires_db
async def test_transfer_emails_round_trip(db_session) -> None:
    repo = FlowRuleRepository(db_session)
    created = await repo.create_rule(
        ORG,
        _data(
            "A",
            "B",
            transferable=True,
            transfer_to_emails=["a@example.com", "b@example.com"],
        ),
    )
    found = await repo.get_by_id_and_organization(created.id, ORG)
    assert found is not None
    assert found.transferable is True
    assert found.transfer_to_emails == ["a@example.com", "b@example.com"]


@pytest.mark.requires_db
async def test_scoped_to_organization(db_session) -> None:
    repo = FlowRuleRepository(db_session)
    created = await repo.create_rule(ORG, _data("A", "B"))
    assert await repo.get_by_id_and_organization(created.id, "someone-else") is None
    assert await repo.list_for_system("someone-else", "repo-test-system") == []
    assert await repo.delete_rule("someone-else", created.id) is False


@pytest.mark.requires_db
async def test_update_and_delete(db_session) -> None:
    repo = FlowRuleRepository(db_session)
    created = await repo.create_rule(ORG, _data("A", "B"))
    updated = await repo.update_rule(ORG, created.id, {"doer": "Finance", "tat": 4})
    assert updated is not None
    assert updated.doer == "Finance"
    assert updated.tat == 4
    assert await repo.delete_rule(ORG, created.id) is True
    assert await repo.get_by_id_and_organization(created.id, ORG) is None
    assert await repo.update_rule(ORG, created.id, {"tat": 1}) is None


@pytest.mark.requires_db
async def test_tat_config_upsert(db_session) -> None:
    repo = TATConfigRepository(db_session)
    assert await repo.get_for_organization(ORG) is None
    first = TATConfig(office_start_hour=8, office_end_hour=16, timezone="UTC")
    assert await repo.upsert(ORG, first) == first
    second = TATConfig(
        office_start_hour=10, office_end_hour=19, timezone="Europe/Berlin", weekend_days=(4, 5)
    )
    await repo.upsert(ORG, second)
    assert await repo.get_for_organization(ORG) == second


@pytest.mark.requires_db
async def test_merge_condition_and_end_of_flow_round_trip(db_session) -> None:
    repo = FlowRuleRepository(db_session)
    created = await repo.create_rule(ORG, _data("C", "", merge_condition="any"))
    found = await repo.get_by_id_and_organization(created.id, ORG)
    assert found is not None
    assert found.next_task == ""
    assert found.merge_condition == "any"
    assert (await repo.create_rule(ORG, _data("A", "B"))).merge_condition == "all"
