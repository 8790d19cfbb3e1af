from datetime import datetime

from pydantic import BaseModel, Field


class HabitCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)


class HabitResponse(BaseModel):
    id: int
    user_id: int
    title: str
    description: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class CompletionResponse(BaseModel):
    id: int
    habit_id: int
    user_id: int
    completed_at: datetime

    model_config = {"from_attributes": True}
