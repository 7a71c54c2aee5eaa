from typing import Optional

from fastapi import APIRouter, Depends, Query

from passport.auth import Principal, get_current_user
from passport.models import VitalStat
from passport.repositories import Repository, get_repository
from passport.schemas.records import VitalStatCreate, VitalStatResponse
from passport.services.record_service import record_service

router = APIRouter()


@router.get("", response_model=list[VitalStatResponse])
async def list_vital_stats(
    pregnancy_id: Optional[str] = Query(None, alias="pregnancyId"),
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    stats = await record_service.list_for(current_user, repo, VitalStat, pregnancy_id)
    return [VitalStatResponse.model_validate(s) for s in stats]


@router.post("", response_model=VitalStatResponse, status_code=201)
async def create_vital_stat(
    data: VitalStatCreate,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    stat = await record_service.create(current_user, repo, VitalStat, data.model_dump(), stamp_clinician=True)
    return VitalStatResponse.model_validate(stat)
