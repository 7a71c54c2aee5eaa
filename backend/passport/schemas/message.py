from datetime import datetime
from pydantic import Field
from passport.schemas.base import CamelModel


class MessageCreate(CamelModel):
    # from_id is always the caller
    pregnancy_id: int
    to_id: int
    message: str = Field(..., min_length=1)


class MessageResponse(CamelModel):
    id: int
    pregnancy_id: int
    from_id: int
    to_id: int
    message: str
    timestamp: datetime
    read: bool
