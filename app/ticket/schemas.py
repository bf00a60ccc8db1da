# app/ticket/schemas.py
from datetime import datetime

from pydantic import BaseModel, Field, computed_field

from app.ticket.models import TicketState
from app.ticket.pagination import PageState


class TicketBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=1024)


class TicketCreate(TicketBase):
    pass


class TicketCreateForm(BaseModel):
    title: str = ""
    description: str = ""


class TicketUpdate(TicketBase):
    id: int


class TicketStateUpdate(BaseModel):
    status: TicketState


class TicketIndexItem(BaseModel):
    id: int
    is_open: bool
    status: TicketState
    title: str
    description: str
    user_id: int
    username: str
    created_at: datetime
    closed_at: datetime | None = None

    @computed_field
    @property
    def display_date(self) -> datetime:
        if self.is_open:
            return self.created_at
        return self.closed_at or self.created_at


class TicketPage(BaseModel):
    tickets: list[TicketIndexItem]
    ticket_state: bool | None = None
    current_page: int
    page_size: int
    total_pages: int
    total_open_tickets: int
    total_in_progress_tickets: int
    total_closed_tickets: int
    total_tickets: int
    page_state: PageState
    pages: list[int]
    has_previous: bool
    has_next: bool


class TicketDetails(BaseModel):
    id: int
    is_open: bool
    status: TicketState
    title: str
    description: str
    created_at: datetime
    updated_at: datetime
    closed_at: datetime | None = None
    can_edit: bool = False


class TicketEdit(BaseModel):
    id: int
    is_open: bool
    title: str
    description: str
