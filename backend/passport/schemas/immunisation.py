from datetime import date
from typing import Optional
from passport.schemas.base import CamelModel


class ImmunisationDates(CamelModel):
    flu_date: Optional[date] = None
    covid_date: Optional[date] = None
    whooping_cough_date: Optional[date] = None
    rsv_date: Optional[date] = None
    anti_d_date: Optional[date] = None


class ImmunisationCreate(ImmunisationDates):
    pregnancy_id: int


class ImmunisationUpdate(ImmunisationDates):
    pass


class ImmunisationResponse(ImmunisationCreate):
    id: int
