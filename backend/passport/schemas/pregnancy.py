from datetime import date, datetime
from typing import Any, Optional
from pydantic import field_validator
from passport.schemas.base import CamelModel, reject_null


class PregnancyDetails(CamelModel):
    last_menstrual_period: Optional[date] = None
    edb_determined_by: Optional[str] = None
    pregnancy_type: Optional[str] = None
    notes: Optional[str] = None

    medical_record_number: Optional[str] = None
    sex: Optional[str] = None
    facility: Optional[str] = None
    location_ward: Optional[str] = None

    preferred_name: Optional[str] = None
    emergency_contact: Optional[str] = None
    country_of_birth: Optional[str] = None
    interpreter_required: Optional[bool] = None
    language: Optional[str] = None
    contact_number: Optional[str] = None
    descent: Optional[str] = None
    cultural_religious_considerations: Optional[str] = None
    planned_place_of_birth: Optional[str] = None
    birth_unit_contact_number: Optional[str] = None
    model_of_care: Optional[str] = None
    lead_care_provider: Optional[str] = None
    lead_care_provider_contact_number: Optional[str] = None

    pre_pregnancy_weight: Optional[int] = None
    body_mass_index: Optional[int] = None
    pregnancy_intention: Optional[str] = None
    booking_weeks: Optional[str] = None

    substance_use: Optional[Any] = None

    hepatitis_b: Optional[str] = None
    hepatitis_c: Optional[str] = None
    rubella: Optional[str] = None
    syphilis: Optional[str] = None
    hiv: Optional[str] = None
    group_b_streptococcus: Optional[str] = None
    diabetes: Optional[str] = None
    venous_thromboembolism_risk: Optional[str] = None

    blood_group: Optional[str] = None
    rh_factor: Optional[str] = None
    antibody_screen: Optional[str] = None
    haemoglobin: Optional[str] = None
    midstream_urine: Optional[str] = None

    edinburgh_postnatal_depression_scale: Optional[int] = None
    epds_date: Optional[date] = None
    epds_referral: Optional[bool] = None

    prenatal_testing: Optional[Any] = None

    previous_pregnancies: Optional[Any] = None
    gravidity: Optional[int] = None
    parity: Optional[int] = None

    medications: Optional[Any] = None
    adverse_reactions: Optional[Any] = None
    medical_considerations: Optional[str] = None
    gynecological_considerations: Optional[str] = None
    major_surgeries: Optional[str] = None
    mental_health_diagnosis: Optional[str] = None
    non_prescription_medication: Optional[str] = None
    previous_thrombotic_events: Optional[str] = None
    vitamins: Optional[str] = None
    other_considerations: Optional[str] = None
    last_pap_smear_date: Optional[date] = None


class PregnancyCreate(PregnancyDetails):
    patient_id: int
    due_date: date
    start_date: date


class PregnancyUpdate(PregnancyDetails):
    # patient_id is immutable
    due_date: Optional[date] = None
    start_date: Optional[date] = None

    @field_validator("due_date", "start_date")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class PregnancyResponse(PregnancyCreate):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
