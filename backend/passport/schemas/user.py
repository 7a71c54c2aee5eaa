from typing import Optional
from pydantic import Field, field_validator
from passport.schemas.base import CamelModel, reject_null


class UserResponse(CamelModel):
    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    role: str


class ProfileUpdate(CamelModel):
    username: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, pattern=r"^[^@\s]+@[^@\s]+$", max_length=255)
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)

    @field_validator("username", "email", "first_name", "last_name")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class PasswordChange(CamelModel):
    current_password: Optional[str] = None
    new_password: str = Field(..., min_length=8)
