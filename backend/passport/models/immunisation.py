from sqlalchemy import Column, Integer, Date, ForeignKey
from passport.database import Base


class ImmunisationHistory(Base):
    __tablename__ = "immunisation_history"

    id = Column(Integer, primary_key=True, index=True)
    pregnancy_id = Column(Integer, ForeignKey("pregnancies.id"), unique=True, nullable=False)
    flu_date = Column(Date)
    covid_date = Column(Date)
    whooping_cough_date = Column(Date)
    rsv_date = Column(Date)
    anti_d_date = Column(Date)
