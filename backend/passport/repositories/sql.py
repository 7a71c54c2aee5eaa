import logging
from typing import Optional

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from passport.exceptions import ConflictError
from passport.models import Message
from passport.repositories.base import ORDERING, Repository

logger = logging.getLogger(__name__)


def _order_by(model):
    attribute, newest_first = ORDERING.get(model, ("id", False))
    columns = [getattr(model, attribute), model.id] if attribute != "id" else [model.id]
    return [c.desc() for c in columns] if newest_first else columns


class SqlRepository(Repository):
    """SQLAlchemy-backed repository. Every write is a single-row commit."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, model, record_id: int):
        return await self.session.get(model, record_id)

    async def find(self, model, limit: Optional[int] = None, **criteria) -> list:
        query = select(model).where(*self._criteria(model, criteria)).order_by(*_order_by(model))
        if limit:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self, model, **criteria) -> int:
        query = select(func.count(model.id)).where(*self._criteria(model, criteria))
        return await self.session.scalar(query) or 0

    async def list_messages_between(self, pregnancy_id: int, user_a: int, user_b: int) -> list:
        query = (
            select(Message)
            .where(
                Message.pregnancy_id == pregnancy_id,
                or_(
                    and_(Message.from_id == user_a, Message.to_id == user_b),
                    and_(Message.from_id == user_b, Message.to_id == user_a),
                ),
            )
            .order_by(*_order_by(Message))
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def _insert(self, model, data: dict):
        record = model(**data)
        self.session.add(record)
        await self._commit()
        await self.session.refresh(record)
        return record

    async def _update(self, record, data: dict):
        for key, value in data.items():
            setattr(record, key, value)
        await self._commit()
        await self.session.refresh(record)
        return record

    async def _delete(self, record) -> None:
        await self.session.delete(record)
        await self._commit()

    async def _commit(self):
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.info("Integrity violation: %s", e.orig)
            raise ConflictError("Record conflicts with an existing row") from e

    @staticmethod
    def _criteria(model, criteria: dict) -> list:
        return [getattr(model, key) == value for key, value in criteria.items()]
