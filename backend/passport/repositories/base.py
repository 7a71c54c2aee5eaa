"""
Repository interface shared by the in-memory and relational backends.

Backends implement a handful of primitives (get / find / count / insert /
update / delete). Entity rules that must hold for both live here: list
orderings, which entities are append-only, which fields may change after
creation, and which entities may be physically deleted.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from passport.models import (
    Appointment, EducationModule, ImmunisationHistory, Message, Pregnancy, Scan, TestResult, User, VitalStat,
)

# model -> (attribute, newest_first)
ORDERING = {
    VitalStat: ("date", True),
    TestResult: ("date", True),
    Scan: ("date", True),
    Appointment: ("date_time", False),
    Message: ("timestamp", False),
}

APPEND_ONLY = (VitalStat, TestResult, Scan)
UPDATABLE_FIELDS = {Message: {"read"}}
DELETABLE = (Appointment,)


class Repository(ABC):

    # --- primitives ---------------------------------------------------------

    @abstractmethod
    async def get(self, model, record_id: int) -> Optional[Any]:
        ...

    @abstractmethod
    async def find(self, model, limit: Optional[int] = None, **criteria) -> list:
        """Rows matching all criteria, in the model's list ordering (id otherwise)."""

    @abstractmethod
    async def count(self, model, **criteria) -> int:
        ...

    @abstractmethod
    async def list_messages_between(self, pregnancy_id: int, user_a: int, user_b: int) -> list:
        ...

    @abstractmethod
    async def _insert(self, model, data: dict):
        ...

    @abstractmethod
    async def _update(self, record, data: dict):
        ...

    @abstractmethod
    async def _delete(self, record) -> None:
        ...

    # --- generic operations -------------------------------------------------

    async def find_one(self, model, **criteria) -> Optional[Any]:
        rows = await self.find(model, limit=1, **criteria)
        return rows[0] if rows else None

    async def create(self, model, data: dict):
        return await self._insert(model, data)

    async def update(self, model, record_id: int, data: dict) -> Optional[Any]:
        """Merge `data` over the stored row. Returns None if the row does not exist."""
        if model in APPEND_ONLY:
            raise ValueError(f"{model.__name__} rows cannot be updated")
        allowed = UPDATABLE_FIELDS.get(model)
        if allowed is not None and set(data) - allowed:
            raise ValueError(f"{model.__name__} only allows updating {sorted(allowed)}")
        record = await self.get(model, record_id)
        if record is None:
            return None
        if not data:
            return record
        return await self._update(record, data)

    async def delete(self, model, record_id: int) -> bool:
        if model not in DELETABLE:
            raise ValueError(f"{model.__name__} rows cannot be deleted")
        record = await self.get(model, record_id)
        if record is None:
            return False
        await self._delete(record)
        return True

    async def list_for_pregnancy(self, model, pregnancy_id: int) -> list:
        return await self.find(model, pregnancy_id=pregnancy_id)

    async def list_all(self, model) -> list:
        return await self.find(model)

    # --- users --------------------------------------------------------------

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self.get(User, user_id)

    async def get_user_by_external_ref(self, ref: str) -> Optional[User]:
        return await self.find_one(User, external_identity_ref=ref)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return await self.find_one(User, username=username)

    async def list_patients(self) -> list:
        return await self.find(User, role="patient")

    # --- pregnancies --------------------------------------------------------

    async def get_pregnancy(self, pregnancy_id: int) -> Optional[Pregnancy]:
        return await self.get(Pregnancy, pregnancy_id)

    async def get_pregnancy_by_patient_id(self, patient_id: int) -> Optional[Pregnancy]:
        # One pregnancy per patient; the first match wins
        return await self.find_one(Pregnancy, patient_id=patient_id)

    # --- messages -----------------------------------------------------------

    async def mark_message_read(self, message_id: int) -> bool:
        return await self.update(Message, message_id, {"read": True}) is not None

    # --- immunisation / education -------------------------------------------

    async def get_immunisation_history(self, pregnancy_id: int) -> Optional[ImmunisationHistory]:
        return await self.find_one(ImmunisationHistory, pregnancy_id=pregnancy_id)

    async def list_education_modules(self) -> list:
        return await self.find(EducationModule)
