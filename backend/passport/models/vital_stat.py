from sqlalchemy import Column, Integer, Text, Date, ForeignKey
from passport.database import Base


class VitalStat(Base):
    __tablename__ = "vital_stats"

    id = Column(Integer, primary_key=True, index=True)
    pregnancy_id = Column(Integer, ForeignKey("pregnancies.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    weight = Column(Integer)  # kg
    blood_pressure_systolic = Column(Integer)
    blood_pressure_diastolic = Column(Integer)
    fundal_height = Column(Integer)  # cm
    notes = Column(Text)
    # Null when entered by the patient
    clinician_id = Column(Integer, ForeignKey("users.id"), nullable=True)
