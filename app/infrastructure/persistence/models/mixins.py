"""SQLAlchemy mixins for common model patterns (DRY).

Provides: CuidMixin, OrganizationMixin, TimestampMixin, and the combined
OrganizationModel used by every table.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from app.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class OrganizationMixin:
    """Mixin for organization-scoped models.

    organization_id is a plain indexed string: organizations are provisioned
    outside this service, so there is no table to reference.
    """

    @declared_attr
    def organization_id(cls) -> Mapped[str]:
        return mapped_column(String(64), nullable=False, index=True)


class TimestampMixin:
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class OrganizationModel(CuidMixin, OrganizationMixin, TimestampMixin):
    """Combined mixin: CUID + organization_id + created_at/updated_at."""

    __abstract__ = True
