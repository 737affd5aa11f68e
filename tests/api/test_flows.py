"""API tests for /api/v1/flows (path walking and scheduling)."""

from datetime import datetime, timezone

import pytest
from httpx import AsyncClient

from app.domain.value_objects.core import TATConfig
from tests.conftest import ORG_HEADERS, ORG_ID, make_rule


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.fixture
async def seeded(flow_rule_repo, tat_config_repo):
    """Onboarding flow with a rework loop (legacy data) and a UTC 9-18 calendar."""
    flow_rule_repo.rules.extend(
        [
            make_rule("", "Collect", tat=2, doer="Sales", email="sales@example.com"),
            make_rule("Collect", "Review", "done", tat=1, tat_type="daytat"),
            make_rule("Review", "Approve", "ok", tat=3),
            make_rule("Review", "Collect", "rework", tat=1),
        ]
    )
    await tat_config_repo.upsert(
        ORG_ID, TATConfig(office_start_hour=9, office_end_hour=18, timezone="UTC")
    )
    return flow_rule_repo


async def test_path_from_start_rule(api_client: AsyncClient, seeded) -> None:
    response = await api_client.get("/api/v1/flows/onboarding/path", headers=ORG_HEADERS)
    assert response.status_code == 200
    data = response.json()
    assert data["hasCycles"] is True
    assert data["path"] == [
        {"taskName": "Collect", "repeatNumber": 1},
        {"taskName": "Review", "repeatNumber": 1},
        {"taskName": "Approve", "repeatNumber": 1},
        {"taskName": "Collect", "repeatNumber": 2},
    ]


async def test_path_from_given_task(api_client: AsyncClient, seeded) -> None:
    response = await api_client.get(
        "/api/v1/flows/onboarding/path?start_task=Approve", headers=ORG_HEADERS
    )
    assert response.json() == {
        "path": [{"taskName": "Approve", "repeatNumber": 1}],
        "hasCycles": False,
    }


async def test_path_unknown_system_is_empty(api_client: AsyncClient) -> None:
    response = await api_client.get("/api/v1/flows/unknown/path", headers=ORG_HEADERS)
    assert response.status_code == 200
    assert response.json() == {"path": [], "hasCycles": False}


async def test_walk_instance_follows_task_statuses(api_client: AsyncClient, seeded) -> None:
    """The latest status of each task picks the branch."""
    response = await api_client.post(
        "/api/v1/flows/onboarding/path",
        json={
            "tasks": [
                {"task_name": "Collect", "status": "done"},
                {"task_name": "Review", "status": "rework"},
                {"task_name": "Review", "status": "ok"},
            ]
        },
        headers=ORG_HEADERS,
    )
    assert response.status_code == 200
    data = response.json()
    assert [s["taskName"] for s in data["path"]] == ["Collect", "Review", "Approve"]
    assert data["hasCycles"] is False


async def test_start_flow(api_client: AsyncClient, seeded) -> None:
    response = await api_client.post(
        "/api/v1/flows/onboarding/start",
        json={"started_at": "2025-10-17T17:00:00Z"},
        headers=ORG_HEADERS,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["task_name"] == "Collect"
    assert data["doer"] == "Sales"
    assert _parse(data["planned_time"]) == datetime(2025, 10, 20, 10, 0, tzinfo=timezone.utc)


async def test_start_flow_without_start_rule(api_client: AsyncClient) -> None:
    response = await api_client.post(
        "/api/v1/flows/empty/start",
        json={"started_at": "2025-10-17T17:00:00Z"},
        headers=ORG_HEADERS,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "No starting rule found for this system"


async def test_next_steps(api_client: AsyncClient, seeded) -> None:
    response = await api_client.post(
        "/api/v1/flows/onboarding/next-steps",
        json={
            "task_name": "Review",
            "status": "ok",
            "completed_at": "2025-10-15T10:00:00Z",
        },
        headers=ORG_HEADERS,
    )
    assert response.status_code == 200
    data = response.json()
    assert [a["task_name"] for a in data] == ["Approve"]
    assert _parse(data[0]["planned_time"]) == datetime(2025, 10, 15, 13, 0, tzinfo=timezone.utc)


async def test_next_steps_end_of_flow(api_client: AsyncClient, seeded) -> None:
    response = await api_client.post(
        "/api/v1/flows/onboarding/next-steps",
        json={"task_name": "Approve", "status": "", "completed_at": "2025-10-15T10:00:00Z"},
        headers=ORG_HEADERS,
    )
    assert response.json() == []


async def test_next_steps_join_waits_for_all_branches(
    api_client: AsyncClient, flow_rule_repo
) -> None:
    flow_rule_repo.rules.extend(
        [
            make_rule("", "Send", system="contract"),
            make_rule("Legal", "Sign", "done", system="contract"),
            make_rule("Finance", "Sign", "done", system="contract"),
        ]
    )
    body = {
        "task_name": "Legal",
        "status": "done",
        "completed_at": "2025-10-15T10:00:00Z",
        "tasks": [{"task_name": "Finance", "status": "pending"}],
    }
    waiting = await api_client.post(
        "/api/v1/flows/contract/next-steps", json=body, headers=ORG_HEADERS
    )
    assert waiting.status_code == 200
    assert waiting.json() == []

    body["tasks"] = [{"task_name": "Finance", "status": "completed"}]
    ready = await api_client.post(
        "/api/v1/flows/contract/next-steps", json=body, headers=ORG_HEADERS
    )
    assert [a["task_name"] for a in ready.json()] == ["Sign"]


async def test_schedule(api_client: AsyncClient, seeded) -> None:
    response = await api_client.post(
        "/api/v1/flows/onboarding/schedule",
        json={"started_at": "2025-10-15T10:00:00Z", "status_by_task": {"Review": "ok"}},
        headers=ORG_HEADERS,
    )
    assert response.status_code == 200
    steps = response.json()
    assert [s["task_name"] for s in steps] == ["Collect", "Review", "Approve"]
    assert _parse(steps[0]["due_at"]) == datetime(2025, 10, 15, 12, 0, tzinfo=timezone.utc)
    assert steps[1]["starts_at"] == steps[0]["due_at"]
    assert _parse(steps[2]["due_at"]) == datetime(2025, 10, 16, 15, 0, tzinfo=timezone.utc)


async def test_schedule_rejects_max_steps_out_of_range(api_client: AsyncClient) -> None:
    response = await api_client.post(
        "/api/v1/flows/onboarding/schedule",
        json={"started_at": "2025-10-15T10:00:00Z", "max_steps": 0},
        headers=ORG_HEADERS,
    )
    assert response.status_code == 422
