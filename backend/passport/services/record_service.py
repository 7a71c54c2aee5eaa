"""
Pregnancy-scoped reads and writes shared by the appointment, vital stat,
test result, scan, message and immunisation routers.
"""

import logging
from typing import Optional

from passport.auth import Principal, authorize_pregnancy
from passport.exceptions import AuthorizationError, BadRequestError, ConflictError, NotFoundError
from passport.models import ImmunisationHistory, Message
from passport.params import parse_optional_int
from passport.repositories import Repository

logger = logging.getLogger(__name__)
audit = logging.getLogger("passport.audit")


class RecordService:
    async def list_for(self, principal: Principal, repo: Repository, model, requested: Optional[str]) -> list:
        pregnancy_id = await principal.scoped_pregnancy_id(repo, requested)
        return await repo.list_for_pregnancy(model, pregnancy_id)

    async def create(self, principal: Principal, repo: Repository, model, data: dict, stamp_clinician: bool = False):
        await authorize_pregnancy(principal, repo, data["pregnancy_id"])
        if stamp_clinician:
            # Overwrites anything the client sent; patients always get None
            data["clinician_id"] = principal.authoring_clinician_id
        record = await repo.create(model, data)
        logger.info(
            "Created %s id=%s pregnancy=%s by user=%s",
            model.__tablename__, record.id, record.pregnancy_id, principal.id,
        )
        return record

    # --- messages -----------------------------------------------------------

    async def list_messages(
        self, principal: Principal, repo: Repository, requested: Optional[str], other_user: Optional[str]
    ) -> list:
        pregnancy_id = await principal.scoped_pregnancy_id(repo, requested)
        other_user_id = parse_optional_int(other_user, "otherUserId")
        if other_user_id is not None:
            return await repo.list_messages_between(pregnancy_id, principal.id, other_user_id)
        return await repo.list_for_pregnancy(Message, pregnancy_id)

    async def send_message(self, principal: Principal, repo: Repository, data: dict) -> Message:
        await authorize_pregnancy(principal, repo, data["pregnancy_id"])
        if await repo.get_user(data["to_id"]) is None:
            raise BadRequestError("Unknown recipient")
        data["from_id"] = principal.id
        return await repo.create(Message, data)

    async def mark_read(self, principal: Principal, repo: Repository, message_id: int) -> None:
        message = await repo.get(Message, message_id)
        if message is None:
            raise NotFoundError("Message not found")
        if message.to_id != principal.id:
            audit.info("Denied user=%s marking message=%s read", principal.id, message_id)
            raise AuthorizationError("You can only mark messages addressed to you as read")
        await repo.mark_message_read(message_id)

    # --- immunisation history -----------------------------------------------

    async def get_immunisation(self, principal: Principal, repo: Repository, requested: Optional[str]):
        pregnancy_id = await principal.scoped_pregnancy_id(repo, requested)
        history = await repo.get_immunisation_history(pregnancy_id)
        if history is None:
            raise NotFoundError("No immunisation history found")
        return history

    async def create_immunisation(self, principal: Principal, repo: Repository, data: dict):
        await authorize_pregnancy(principal, repo, data["pregnancy_id"])
        if await repo.get_immunisation_history(data["pregnancy_id"]) is not None:
            raise ConflictError("Immunisation history already exists for this pregnancy")
        return await repo.create(ImmunisationHistory, data)


record_service = RecordService()
