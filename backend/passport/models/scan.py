from sqlalchemy import Column, Integer, String, Text, Date, ForeignKey
from passport.database import Base


class Scan(Base):
    __tablename__ = "scans"

    id = Column(Integer, primary_key=True, index=True)
    pregnancy_id = Column(Integer, ForeignKey("pregnancies.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    title = Column(String(200), nullable=False)
    image_url = Column(String(500))  # images live elsewhere, only the URL is stored
    notes = Column(Text)
    clinician_id = Column(Integer, ForeignKey("users.id"), nullable=True)
