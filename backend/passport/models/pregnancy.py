from sqlalchemy import Column, Integer, String, Text, Date, Boolean, DateTime, JSON, ForeignKey
from passport.database import Base, utcnow


class Pregnancy(Base):
    __tablename__ = "pregnancies"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Basic pregnancy information
    due_date = Column(Date, nullable=False)
    start_date = Column(Date, nullable=False)
    last_menstrual_period = Column(Date)
    edb_determined_by = Column(String(50))  # LMP / dating scan / other
    pregnancy_type = Column(String(50))  # singleton / multiple
    notes = Column(Text)

    # Identification
    medical_record_number = Column(String(50))
    sex = Column(String(20))
    facility = Column(String(200))
    location_ward = Column(String(100))

    # Personal details
    preferred_name = Column(String(100))
    emergency_contact = Column(Text)
    country_of_birth = Column(String(100))
    interpreter_required = Column(Boolean)
    language = Column(String(100))
    contact_number = Column(String(50))
    descent = Column(String(100))
    cultural_religious_considerations = Column(Text)
    planned_place_of_birth = Column(String(200))
    birth_unit_contact_number = Column(String(50))
    model_of_care = Column(String(100))
    lead_care_provider = Column(String(200))
    lead_care_provider_contact_number = Column(String(50))

    # Pregnancy details
    pre_pregnancy_weight = Column(Integer)
    body_mass_index = Column(Integer)
    pregnancy_intention = Column(String(100))
    booking_weeks = Column(String(50))

    # Lifestyle
    substance_use = Column(JSON)

    # Antenatal screening
    hepatitis_b = Column(String(50))
    hepatitis_c = Column(String(50))
    rubella = Column(String(50))
    syphilis = Column(String(50))
    hiv = Column(String(50))
    group_b_streptococcus = Column(String(50))
    diabetes = Column(String(50))
    venous_thromboembolism_risk = Column(String(20))  # low / intermediate / high

    # Blood group
    blood_group = Column(String(5))
    rh_factor = Column(String(10))
    antibody_screen = Column(String(50))
    haemoglobin = Column(String(50))
    midstream_urine = Column(String(50))

    # Mental health
    edinburgh_postnatal_depression_scale = Column(Integer)
    epds_date = Column(Date)
    epds_referral = Column(Boolean)

    prenatal_testing = Column(JSON)

    # Obstetric history
    previous_pregnancies = Column(JSON)
    gravidity = Column(Integer)
    parity = Column(Integer)

    # Health considerations
    medications = Column(JSON)
    adverse_reactions = Column(JSON)
    medical_considerations = Column(Text)
    gynecological_considerations = Column(Text)
    major_surgeries = Column(Text)
    mental_health_diagnosis = Column(Text)
    non_prescription_medication = Column(Text)
    previous_thrombotic_events = Column(Text)
    vitamins = Column(Text)
    other_considerations = Column(Text)
    last_pap_smear_date = Column(Date)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
