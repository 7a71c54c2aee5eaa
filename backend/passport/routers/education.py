from typing import Optional

from fastapi import APIRouter, Depends, Query

from passport.auth import Principal, get_current_user
from passport.repositories import Repository, get_repository
from passport.schemas.education import EducationModuleResponse
from passport.services import education_service

router = APIRouter()


@router.get("", response_model=list[EducationModuleResponse])
async def list_education_modules(
    week: Optional[str] = Query(None, description="Pregnancy week, e.g. 24"),
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    modules = await education_service.list_modules(repo, week)
    return [EducationModuleResponse.model_validate(m) for m in modules]
