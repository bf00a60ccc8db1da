# app/feedback/schemas.py
from datetime import datetime

from pydantic import BaseModel, Field


class FeedbackCreate(BaseModel):
    message: str = Field(..., min_length=1, max_length=1024)


class FeedbackOut(BaseModel):
    id: int
    message: str
    submitted_by: str
    submitted_at: datetime

    model_config = {"from_attributes": True}
