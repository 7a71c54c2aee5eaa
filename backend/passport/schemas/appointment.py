from datetime import datetime
from typing import Literal, Optional
from pydantic import Field, field_validator
from passport.schemas.base import CamelModel, as_utc, reject_null

AppointmentStatus = Literal["scheduled", "completed", "cancelled"]


class AppointmentCreate(CamelModel):
    pregnancy_id: int
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    location: Optional[str] = None
    clinician_name: Optional[str] = None
    date_time: datetime
    duration: int = Field(30, ge=1)
    notes: Optional[str] = None
    status: AppointmentStatus = "scheduled"

    @field_validator("date_time")
    @classmethod
    def date_time_as_utc(cls, value):
        return as_utc(value)


class AppointmentUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    location: Optional[str] = None
    clinician_name: Optional[str] = None
    date_time: Optional[datetime] = None
    duration: Optional[int] = Field(None, ge=1)
    notes: Optional[str] = None
    status: Optional[AppointmentStatus] = None

    @field_validator("title", "date_time", "duration", "status")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

    @field_validator("date_time")
    @classmethod
    def date_time_as_utc(cls, value):
        return as_utc(value)


class AppointmentResponse(CamelModel):
    id: int
    pregnancy_id: int
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    clinician_name: Optional[str] = None
    date_time: datetime
    duration: int
    notes: Optional[str] = None
    status: str
