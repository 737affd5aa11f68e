"""Base repository: generic get/create/update/delete over one ORM model."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base


class BaseRepository[ModelType: Base]:
    """Base repository with get_by_id, create, update and delete.

    Subclasses add organization-scoped queries and map rows to domain
    objects; the ORM instances never leave the repository layer.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record; server defaults are loaded back."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType, changes: dict[str, Any]) -> ModelType:
        """Set changed attributes on a record loaded in this session and flush."""
        for name, value in changes.items():
            if not hasattr(obj, name):
                raise ValueError(
                    f"{self.model.__name__} has no attribute {name!r}"
                )
            setattr(obj, name, value)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Delete the record."""
        await self.db.delete(obj)
        await self.db.flush()
