from pydantic import BaseModel, field_validator
from datetime import date, datetime


class TaskCreate(BaseModel):
    description: str
    due_date: date

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Description is required")
        return value


class TaskCompletionUpdate(BaseModel):
    completed: bool


class TaskResponse(BaseModel):
    id: str
    user_id: str
    description: str
    due_date: date
    completed: bool = False
    created_at: datetime

    class Config:
        from_attributes = True


class TaskUpdateResult(BaseModel):
    updated: int
