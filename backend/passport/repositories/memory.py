import itertools
from collections import defaultdict
from typing import Optional

from passport.exceptions import ConflictError
from passport.models import Message
from passport.repositories.base import ORDERING, Repository


def _column_default(column):
    default = column.default
    if default is None:
        return None
    if default.is_callable:
        return default.arg(None)
    if default.is_scalar:
        return default.arg
    return None


class MemoryRepository(Repository):
    """Dict-backed repository holding transient ORM instances.

    Used when no DATABASE_URL is configured and by the test-suite. Nothing
    here awaits, so each operation is atomic with respect to other requests.
    """

    def __init__(self):
        self._tables: dict = defaultdict(dict)
        self._ids: dict = defaultdict(lambda: itertools.count(1))

    async def get(self, model, record_id: int):
        return self._tables[model].get(record_id)

    async def find(self, model, limit: Optional[int] = None, **criteria) -> list:
        rows = [
            row for row in self._tables[model].values()
            if all(getattr(row, key) == value for key, value in criteria.items())
        ]
        rows = self._sorted(model, rows)
        return rows[:limit] if limit else rows

    async def count(self, model, **criteria) -> int:
        return len(await self.find(model, **criteria))

    async def list_messages_between(self, pregnancy_id: int, user_a: int, user_b: int) -> list:
        return [
            m for m in await self.find(Message, pregnancy_id=pregnancy_id)
            if (m.from_id, m.to_id) in ((user_a, user_b), (user_b, user_a))
        ]

    async def _insert(self, model, data: dict):
        record = model(**data)
        for column in model.__table__.columns:
            if column.primary_key:
                continue
            if getattr(record, column.key) is None:
                value = _column_default(column)
                if value is not None:
                    setattr(record, column.key, value)
        self._check_unique(model, {c.key: getattr(record, c.key) for c in model.__table__.columns})
        record.id = next(self._ids[model])
        self._tables[model][record.id] = record
        return record

    async def _update(self, record, data: dict):
        model = type(record)
        self._check_unique(model, data, exclude_id=record.id)
        for key, value in data.items():
            setattr(record, key, value)
        for column in model.__table__.columns:
            if column.onupdate is not None and column.key not in data and column.onupdate.is_callable:
                setattr(record, column.key, column.onupdate.arg(None))
        return record

    async def _delete(self, record) -> None:
        del self._tables[type(record)][record.id]

    def _check_unique(self, model, values: dict, exclude_id: Optional[int] = None):
        for column in model.__table__.columns:
            if not column.unique or values.get(column.key) is None:
                continue
            for row in self._tables[model].values():
                if row.id != exclude_id and getattr(row, column.key) == values[column.key]:
                    raise ConflictError(f"{model.__tablename__}.{column.key} already exists")

    @staticmethod
    def _sorted(model, rows: list) -> list:
        attribute, newest_first = ORDERING.get(model, ("id", False))
        return sorted(rows, key=lambda row: (getattr(row, attribute), row.id), reverse=newest_first)
