from typing import Optional
from passport.schemas.base import CamelModel


class EducationModuleResponse(CamelModel):
    id: int
    title: str
    description: str
    content: str
    week_range: str
    image_url: Optional[str] = None
