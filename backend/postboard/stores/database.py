"""
PostBoard Backend: Database Resource Store
==========================================

What:  ResourceStore over a SQLAlchemy ORM model (UserRow / PostRow).
Why:   Persistent variant of the store; records survive restarts.
How:   One AsyncSession per operation from the injected session factory.
       Every SQLAlchemyError is re-raised as UpstreamError carrying
       the driver's message, which is what the create handler reports and
       what the Error Boundary renders for the other operations.

Query plan:
    get/update/delete use the primary key (session.get), list is a plain
    SELECT with no ORDER BY (order is whatever the database returns).

Concurrency:
    Two requests updating the same id interleave at their awaits and the
    later commit wins. There is no version column or locking.
"""

import logging
from typing import Any, List, Mapping, Optional, Type

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from postboard.database import Base
from postboard.exceptions import UpstreamError
from postboard.resources import ResourceKind
from postboard.stores.base import ResourceStore

logger = logging.getLogger(__name__)


class DatabaseStore(ResourceStore):
    """
    SQLAlchemy-backed ResourceStore.

    Args:
        kind:             Resource definition
        model:            ORM class mapped to the resource's table
        session_factory:  async_sessionmaker bound to the application's engine
    """

    def __init__(
        self,
        kind: ResourceKind,
        model: Type[Base],
        session_factory: async_sessionmaker[AsyncSession],
    ):
        super().__init__(kind)
        self.model = model
        self._session_factory = session_factory

    def _to_record(self, row: Base) -> BaseModel:
        return self.kind.record_schema.model_validate(row)

    def _upstream(self, operation: str, error: SQLAlchemyError) -> UpstreamError:
        logger.debug("%s %s failed: %s", self.kind.name, operation, str(error))
        return UpstreamError(
            message=str(error),
            context={"resource": self.kind.name, "operation": operation},
        )

    async def create(self, attrs: Any) -> BaseModel:
        fields = self.kind.parse_create(attrs)
        row = self.model(**fields)
        try:
            async with self._session_factory() as session:
                session.add(row)
                await session.commit()
        except SQLAlchemyError as e:
            raise self._upstream("create", e) from e
        logger.debug("Created %s %s", self.kind.name, row.id)
        return self._to_record(row)

    async def list(self) -> List[BaseModel]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(self.model))
                rows = result.scalars().all()
        except SQLAlchemyError as e:
            raise self._upstream("list", e) from e
        return [self._to_record(row) for row in rows]

    async def get(self, record_id: Any) -> Optional[BaseModel]:
        try:
            async with self._session_factory() as session:
                row = await session.get(self.model, str(record_id))
        except SQLAlchemyError as e:
            raise self._upstream("get", e) from e
        return self._to_record(row) if row is not None else None

    async def update(self, record_id: Any, changes: Mapping[str, Any]) -> Optional[BaseModel]:
        try:
            async with self._session_factory() as session:
                row = await session.get(self.model, str(record_id))
                if row is None:
                    return None
                for key, value in changes.items():
                    setattr(row, key, value)
                await session.commit()
        except SQLAlchemyError as e:
            raise self._upstream("update", e) from e
        return self._to_record(row)

    async def delete(self, record_id: Any) -> Optional[BaseModel]:
        try:
            async with self._session_factory() as session:
                row = await session.get(self.model, str(record_id))
                if row is None:
                    return None
                record = self._to_record(row)
                await session.delete(row)
                await session.commit()
        except SQLAlchemyError as e:
            raise self._upstream("delete", e) from e
        return record

    async def count(self) -> int:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(func.count()).select_from(self.model))
                return int(result.scalar() or 0)
        except SQLAlchemyError as e:
            raise self._upstream("count", e) from e
