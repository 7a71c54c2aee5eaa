from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from passport.auth import Principal, get_current_user, load_visible
from passport.models import Appointment
from passport.repositories import Repository, get_repository
from passport.schemas.appointment import AppointmentCreate, AppointmentResponse, AppointmentUpdate
from passport.services.record_service import record_service

router = APIRouter()


@router.get("", response_model=list[AppointmentResponse])
async def list_appointments(
    pregnancy_id: Optional[str] = Query(None, alias="pregnancyId"),
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    appointments = await record_service.list_for(current_user, repo, Appointment, pregnancy_id)
    return [AppointmentResponse.model_validate(a) for a in appointments]


@router.post("", response_model=AppointmentResponse, status_code=201)
async def create_appointment(
    data: AppointmentCreate,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    appointment = await record_service.create(current_user, repo, Appointment, data.model_dump())
    return AppointmentResponse.model_validate(appointment)


@router.patch("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: int,
    data: AppointmentUpdate,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    await load_visible(current_user, repo, Appointment, appointment_id, "Appointment")
    appointment = await repo.update(Appointment, appointment_id, data.model_dump(exclude_unset=True))
    return AppointmentResponse.model_validate(appointment)


@router.delete("/{appointment_id}", status_code=204)
async def delete_appointment(
    appointment_id: int,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    await load_visible(current_user, repo, Appointment, appointment_id, "Appointment")
    await repo.delete(Appointment, appointment_id)
    return Response(status_code=204)
