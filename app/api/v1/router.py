"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import flow_rules, flows, health, tat, tat_config

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(flow_rules.router, prefix="/flow-rules", tags=["flow-rules"])
api_router.include_router(tat_config.router, prefix="/tat-config", tags=["tat-config"])
api_router.include_router(tat.router, prefix="/tat", tags=["tat"])
api_router.include_router(flows.router, prefix="/flows", tags=["flows"])
