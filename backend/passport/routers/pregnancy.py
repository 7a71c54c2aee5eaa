import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from passport.auth import Principal, get_current_user, require_clinician
from passport.exceptions import BadRequestError, ConflictError, NotFoundError
from passport.models import Pregnancy
from passport.repositories import Repository, get_repository
from passport.schemas.pregnancy import PregnancyCreate, PregnancyResponse, PregnancyUpdate

router = APIRouter()
audit = logging.getLogger("passport.audit")


@router.get("", response_model=PregnancyResponse)
async def get_pregnancy(
    patient_id: Optional[str] = Query(None, alias="patientId"),
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    pregnancy = await current_user.pregnancy_for_read(repo, patient_id)
    if not pregnancy:
        raise NotFoundError("No pregnancy record found")
    return PregnancyResponse.model_validate(pregnancy)


@router.post("", response_model=PregnancyResponse, status_code=201)
async def create_pregnancy(
    data: PregnancyCreate,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(require_clinician),
):
    patient = await repo.get_user(data.patient_id)
    if not patient or patient.role != "patient":
        raise BadRequestError("patientId must reference a patient")
    if await repo.get_pregnancy_by_patient_id(data.patient_id):
        raise ConflictError("Patient already has a pregnancy record")

    pregnancy = await repo.create(Pregnancy, data.model_dump())
    audit.info("Pregnancy %s created for patient=%s by user=%s", pregnancy.id, data.patient_id, current_user.id)
    return PregnancyResponse.model_validate(pregnancy)


@router.patch("/{pregnancy_id}", response_model=PregnancyResponse)
async def update_pregnancy(
    pregnancy_id: int,
    data: PregnancyUpdate,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(require_clinician),
):
    pregnancy = await repo.update(Pregnancy, pregnancy_id, data.model_dump(exclude_unset=True))
    if not pregnancy:
        raise NotFoundError("No pregnancy record found")
    return PregnancyResponse.model_validate(pregnancy)
