from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ProfileResponse(BaseModel):
    id: str
    email: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
