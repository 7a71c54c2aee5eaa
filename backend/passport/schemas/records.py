from datetime import date
from typing import Any, Literal, Optional
from pydantic import Field
from passport.schemas.base import CamelModel

# clinician_id is never accepted from the client; it is stamped server-side.


class VitalStatCreate(CamelModel):
    pregnancy_id: int
    date: date
    weight: Optional[int] = Field(None, ge=0)
    blood_pressure_systolic: Optional[int] = Field(None, ge=0)
    blood_pressure_diastolic: Optional[int] = Field(None, ge=0)
    fundal_height: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class VitalStatResponse(VitalStatCreate):
    id: int
    clinician_id: Optional[int] = None


class TestResultCreate(CamelModel):
    pregnancy_id: int
    date: date
    title: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1, max_length=100)
    status: Literal["normal", "abnormal", "follow_up"] = "normal"
    results: Optional[Any] = None
    notes: Optional[str] = None


class TestResultResponse(TestResultCreate):
    id: int
    clinician_id: Optional[int] = None


class ScanCreate(CamelModel):
    pregnancy_id: int
    date: date
    title: str = Field(..., min_length=1, max_length=200)
    image_url: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None


class ScanResponse(ScanCreate):
    id: int
    clinician_id: Optional[int] = None
