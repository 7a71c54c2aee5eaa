from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from passport.auth import Principal, get_current_user
from passport.repositories import Repository, get_repository
from passport.schemas.message import MessageCreate, MessageResponse
from passport.services.record_service import record_service

router = APIRouter()


@router.get("", response_model=list[MessageResponse])
async def list_messages(
    pregnancy_id: Optional[str] = Query(None, alias="pregnancyId"),
    other_user_id: Optional[str] = Query(None, alias="otherUserId"),
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    messages = await record_service.list_messages(current_user, repo, pregnancy_id, other_user_id)
    return [MessageResponse.model_validate(m) for m in messages]


@router.post("", response_model=MessageResponse, status_code=201)
async def send_message(
    data: MessageCreate,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    message = await record_service.send_message(current_user, repo, data.model_dump())
    return MessageResponse.model_validate(message)


@router.post("/{message_id}/read", status_code=204)
async def mark_message_read(
    message_id: int,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    await record_service.mark_read(current_user, repo, message_id)
    return Response(status_code=204)
