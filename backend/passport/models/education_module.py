from sqlalchemy import Column, Integer, String, Text
from passport.database import Base


class EducationModule(Base):
    __tablename__ = "education_modules"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    week_range = Column(String(20), nullable=False)  # e.g. "20-28"
    image_url = Column(String(500))
