# app/label/schemas.py
from datetime import datetime

from pydantic import BaseModel, Field

HEX_COLOR_PATTERN = r"^#(?:[A-Fa-f0-9]{3}){1,2}$"


class LabelCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=64)
    background_color: str = Field(..., max_length=7, pattern=HEX_COLOR_PATTERN)
    text_color: str | None = Field(default=None, max_length=7, pattern=HEX_COLOR_PATTERN)
    description: str | None = Field(default=None, max_length=256)


class LabelOut(LabelCreate):
    id: int
    created_by_id: int

    model_config = {"from_attributes": True}


class LabelAttach(BaseModel):
    ticket_id: int
    label_id: int


class IssueCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=1024)
    parent_id: int | None = None


class IssueOut(BaseModel):
    id: int
    display_id: str
    parent_id: int | None = None
    depth: int
    title: str
    description: str
    created_at: datetime
    created_by_id: int
    children: list[int] = []
    labels: list[LabelOut] = []
