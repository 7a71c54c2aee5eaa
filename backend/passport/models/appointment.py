from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from passport.database import Base


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    pregnancy_id = Column(Integer, ForeignKey("pregnancies.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    location = Column(String(200))
    clinician_name = Column(String(200))
    date_time = Column(DateTime(timezone=True), nullable=False)
    duration = Column(Integer, nullable=False, default=30)  # minutes
    notes = Column(Text)
    status = Column(String(20), nullable=False, default="scheduled")  # "scheduled" | "completed" | "cancelled"
