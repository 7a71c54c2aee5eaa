from fastapi import APIRouter, Depends

from passport.auth import Principal, require_clinician
from passport.exceptions import NotFoundError
from passport.repositories import Repository, get_repository
from passport.schemas.user import UserResponse

router = APIRouter()


@router.get("", response_model=list[UserResponse])
async def list_patients(
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(require_clinician),
):
    # No assigned-patient list: every patient is visible to every clinician
    return [UserResponse.model_validate(p) for p in await repo.list_patients()]


@router.get("/{patient_id}", response_model=UserResponse)
async def get_patient(
    patient_id: int,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(require_clinician),
):
    patient = await repo.get_user(patient_id)
    if not patient or patient.role != "patient":
        raise NotFoundError("Patient not found")
    return UserResponse.model_validate(patient)
