from typing import Optional

from fastapi import APIRouter, Depends, Query

from passport.auth import Principal, get_current_user
from passport.models import Scan
from passport.repositories import Repository, get_repository
from passport.schemas.records import ScanCreate, ScanResponse
from passport.services.record_service import record_service

router = APIRouter()


@router.get("", response_model=list[ScanResponse])
async def list_scans(
    pregnancy_id: Optional[str] = Query(None, alias="pregnancyId"),
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    scans = await record_service.list_for(current_user, repo, Scan, pregnancy_id)
    return [ScanResponse.model_validate(s) for s in scans]


@router.post("", response_model=ScanResponse, status_code=201)
async def create_scan(
    data: ScanCreate,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    scan = await record_service.create(current_user, repo, Scan, data.model_dump(), stamp_clinician=True)
    return ScanResponse.model_validate(scan)
