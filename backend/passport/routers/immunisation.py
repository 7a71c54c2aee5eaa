from typing import Optional

from fastapi import APIRouter, Depends, Query

from passport.auth import Principal, get_current_user, load_visible
from passport.models import ImmunisationHistory
from passport.repositories import Repository, get_repository
from passport.schemas.immunisation import ImmunisationCreate, ImmunisationResponse, ImmunisationUpdate
from passport.services.record_service import record_service

router = APIRouter()


@router.get("", response_model=ImmunisationResponse)
async def get_immunisation_history(
    pregnancy_id: Optional[str] = Query(None, alias="pregnancyId"),
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    history = await record_service.get_immunisation(current_user, repo, pregnancy_id)
    return ImmunisationResponse.model_validate(history)


@router.post("", response_model=ImmunisationResponse, status_code=201)
async def create_immunisation_history(
    data: ImmunisationCreate,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    history = await record_service.create_immunisation(current_user, repo, data.model_dump())
    return ImmunisationResponse.model_validate(history)


@router.patch("/{history_id}", response_model=ImmunisationResponse)
async def update_immunisation_history(
    history_id: int,
    data: ImmunisationUpdate,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    await load_visible(current_user, repo, ImmunisationHistory, history_id, "Immunisation history")
    history = await repo.update(ImmunisationHistory, history_id, data.model_dump(exclude_unset=True))
    return ImmunisationResponse.model_validate(history)
