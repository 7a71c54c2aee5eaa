from sqlalchemy import Column, Integer, String, DateTime
from passport.database import Base, utcnow

ROLES = ("patient", "clinician", "admin")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False, default="patient")  # "patient" | "clinician" | "admin"
    # Subject claim issued by the external identity provider
    external_identity_ref = Column(String(255), unique=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
