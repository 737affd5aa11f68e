"""Pytest configuration and fixtures for flowsense.

Uses app.main:app for HTTP tests and app.infrastructure.persistence.database
for DB-dependent fixtures. API tests run against in-memory repositories
swapped in through app.dependency_overrides, so they need no database.
"""

import dataclasses
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.dependencies import (
    get_flow_rule_repo,
    get_flow_rule_repo_for_write,
    get_tat_config_repo,
    get_tat_config_repo_for_write,
)
from app.application.dtos.flow_rule import FlowRuleCreate
from app.core.limiter import limiter
from app.domain.entities.flow_rule import FlowRule
from app.domain.value_objects.core import TATConfig
from app.infrastructure.persistence import database
from app.main import app
from app.shared.utils.generators import generate_cuid

ORG_ID = "org-test"
ORG_HEADERS = {"X-Organization-ID": ORG_ID}


class InMemoryFlowRuleRepository:
    """IFlowRuleRepository over a list; keeps creation order like the position column."""

    def __init__(self, rules: list[FlowRule] | None = None) -> None:
        self.rules: list[FlowRule] = list(rules or [])

    async def list_for_system(self, organization_id: str, system: str) -> list[FlowRule]:
        return [
            r
            for r in self.rules
            if r.organization_id == organization_id and r.system == system
        ]

    async def list_for_organization(
        self,
        organization_id: str,
        system: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[FlowRule]:
        rules = [
            r
            for r in self.rules
            if r.organization_id == organization_id
            and (system is None or r.system == system)
        ]
        rules.sort(key=lambda r: r.system)
        return rules[skip : skip + limit]

    async def get_by_id_and_organization(
        self, rule_id: str, organization_id: str
    ) -> FlowRule | None:
        for r in self.rules:
            if r.id == rule_id and r.organization_id == organization_id:
                return r
        return None

    async def create_rule(self, organization_id: str, data: FlowRuleCreate) -> FlowRule:
        rule = FlowRule(
            id=generate_cuid(),
            organization_id=organization_id,
            **dataclasses.asdict(data),
        )
        self.rules.append(rule)
        return rule

    async def update_rule(
        self, organization_id: str, rule_id: str, changes: dict[str, Any]
    ) -> FlowRule | None:
        for i, r in enumerate(self.rules):
            if r.id == rule_id and r.organization_id == organization_id:
                self.rules[i] = dataclasses.replace(r, **changes)
                return self.rules[i]
        return None

    async def delete_rule(self, organization_id: str, rule_id: str) -> bool:
        for r in self.rules:
            if r.id == rule_id and r.organization_id == organization_id:
                self.rules.remove(r)
                return True
        return False


class InMemoryTATConfigRepository:
    """ITATConfigRepository over a dict keyed by organization."""

    def __init__(self) -> None:
        self.configs: dict[str, TATConfig] = {}

    async def get_for_organization(self, organization_id: str) -> TATConfig | None:
        return self.configs.get(organization_id)

    async def upsert(self, organization_id: str, config: TATConfig) -> TATConfig:
        self.configs[organization_id] = config
        return config


def make_rule(
    current_task: str,
    next_task: str,
    status: str = "",
    *,
    system: str = "onboarding",
    organization_id: str = ORG_ID,
    tat: int = 1,
    tat_type: str = "hourtat",
    doer: str = "Ops",
    email: str = "ops@example.com",
    rule_id: str | None = None,
    merge_condition: str = "all",
) -> FlowRule:
    """Build a FlowRule entity with sensible defaults for tests."""
    return FlowRule(
        id=rule_id or generate_cuid(),
        organization_id=organization_id,
        system=system,
        current_task=current_task,
        status=status,
        next_task=next_task,
        tat=tat,
        tat_type=tat_type,
        doer=doer,
        email=email,
        merge_condition=merge_condition,
    )


@pytest.fixture(autouse=True)
def _reset_app_state():
    """Clear rate limiter counters and dependency overrides between tests."""
    limiter.reset()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def flow_rule_repo() -> InMemoryFlowRuleRepository:
    return InMemoryFlowRuleRepository()


@pytest.fixture
def tat_config_repo() -> InMemoryTATConfigRepository:
    return InMemoryTATConfigRepository()


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def api_client(
    client: AsyncClient,
    flow_rule_repo: InMemoryFlowRuleRepository,
    tat_config_repo: InMemoryTATConfigRepository,
) -> AsyncClient:
    """HTTP client whose repositories are the in-memory fakes (no database)."""
    app.dependency_overrides[get_flow_rule_repo] = lambda: flow_rule_repo
    app.dependency_overrides[get_flow_rule_repo_for_write] = lambda: flow_rule_repo
    app.dependency_overrides[get_tat_config_repo] = lambda: tat_config_repo
    app.dependency_overrides[get_tat_config_repo_for_write] = lambda: tat_config_repo
    return client


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL. Skips (pytest.skip) when Postgres is not
    configured. Use @pytest.mark.requires_db to mark tests that need this
    fixture; run without DB via: pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set DATABASE_URL, then run: alembic upgrade head"
        )
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
    # Pooled asyncpg connections are bound to this test's event loop.
    await database.dispose_engine()
