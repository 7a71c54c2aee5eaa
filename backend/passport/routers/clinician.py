from fastapi import APIRouter, Depends

from passport.auth import Principal, require_clinician
from passport.models import Appointment, TestResult
from passport.repositories import Repository, get_repository
from passport.schemas.appointment import AppointmentResponse
from passport.schemas.clinician import ClinicianStatistics
from passport.schemas.records import TestResultResponse
from passport.services.statistics_service import statistics_service

router = APIRouter()


@router.get("/appointments", response_model=list[AppointmentResponse])
async def all_appointments(
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(require_clinician),
):
    return [AppointmentResponse.model_validate(a) for a in await repo.list_all(Appointment)]


@router.get("/test-results/pending", response_model=list[TestResultResponse])
async def pending_test_results(
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(require_clinician),
):
    results = await repo.find(TestResult, status="follow_up")
    return [TestResultResponse.model_validate(r) for r in results]


@router.get("/statistics", response_model=ClinicianStatistics)
async def statistics(
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(require_clinician),
):
    return await statistics_service.clinician_statistics(current_user, repo)
