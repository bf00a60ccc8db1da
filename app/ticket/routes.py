# app/ticket/routes.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.audit.models import AuditLog
from app.core.config import get_settings
from app.core.data_accessor import DataAccessor
from app.core.database import get_db
from app.core.errors import FormError
from app.core.security import get_current_user
from app.ticket import services as ticket_service
from app.ticket.models import Ticket
from app.ticket.schemas import (
    TicketCreate,
    TicketCreateForm,
    TicketDetails,
    TicketEdit,
    TicketPage,
    TicketStateUpdate,
    TicketUpdate,
)
from app.user.models import User

router = APIRouter(prefix="/Ticket", tags=["Tickets"])


def get_ticket_accessor(db: Session = Depends(get_db)) -> DataAccessor:
    return DataAccessor(db, allowed_entities=[Ticket, AuditLog])


def _get_or_404(accessor: DataAccessor, ticket_id: int) -> Ticket:
    ticket = ticket_service.get_ticket(accessor, ticket_id)
    if not ticket:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return ticket


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("", response_model=TicketPage)
def index(
    ticket_state: bool | None = Query(default=None, description="true: open tickets, false: closed tickets"),
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1, le=100),
    accessor: DataAccessor = Depends(get_ticket_accessor),
    user: User = Depends(get_current_user),
):
    page_size = page_size or get_settings().DEFAULT_PAGE_SIZE
    return ticket_service.get_paginated_tickets(accessor, ticket_state, page, page_size)


@router.get("/Details")
def details_without_id(user: User = Depends(get_current_user)):
    return _redirect("/Ticket")


@router.get("/Details/{ticket_id}", response_model=TicketDetails)
def details(
    ticket_id: int,
    accessor: DataAccessor = Depends(get_ticket_accessor),
    user: User = Depends(get_current_user),
):
    ticket = _get_or_404(accessor, ticket_id)
    return TicketDetails(
        id=ticket.id,
        is_open=ticket.is_open,
        status=ticket.state,
        title=ticket.title,
        description=ticket.description,
        created_at=ticket.created_at,
        updated_at=ticket.last_modified_at,
        closed_at=ticket.closed_at,
        can_edit=ticket.created_by_id == user.id,
    )


@router.get("/Create", response_model=TicketCreateForm)
def create_form(user: User = Depends(get_current_user)):
    return TicketCreateForm()


@router.post("/Create")
def create(
    payload: TicketCreate,
    accessor: DataAccessor = Depends(get_ticket_accessor),
    user: User = Depends(get_current_user),
):
    result = ticket_service.create_ticket(accessor, payload, user)
    if not result:
        raise FormError.single("", result.message, payload.model_dump())
    return _redirect("/Ticket")


@router.get("/Edit/{ticket_id}", response_model=TicketEdit)
def edit(
    ticket_id: int,
    accessor: DataAccessor = Depends(get_ticket_accessor),
    user: User = Depends(get_current_user),
):
    ticket = _get_or_404(accessor, ticket_id)
    return TicketEdit(id=ticket.id, is_open=ticket.is_open, title=ticket.title, description=ticket.description)


@router.post("/Update")
def update(
    payload: TicketUpdate,
    accessor: DataAccessor = Depends(get_ticket_accessor),
    user: User = Depends(get_current_user),
):
    ticket = _get_or_404(accessor, payload.id)
    result = ticket_service.update_ticket(accessor, ticket, payload, user)
    if not result:
        raise FormError.single("", result.message, payload.model_dump())
    return _redirect(f"/Ticket/Details/{payload.id}")


@router.post("/Delete/{ticket_id}")
def delete(
    ticket_id: int,
    accessor: DataAccessor = Depends(get_ticket_accessor),
    user: User = Depends(get_current_user),
):
    ticket = _get_or_404(accessor, ticket_id)
    result = ticket_service.delete_ticket(accessor, ticket, user)
    if not result:
        raise HTTPException(status_code=500, detail=result.message)
    return _redirect("/Ticket")


@router.post("/CloseOrOpen/{ticket_id}")
def close_or_open(
    ticket_id: int,
    accessor: DataAccessor = Depends(get_ticket_accessor),
    user: User = Depends(get_current_user),
):
    ticket = _get_or_404(accessor, ticket_id)
    result = ticket_service.toggle_ticket(accessor, ticket, user)
    if not result:
        raise HTTPException(status_code=500, detail=result.message)
    return _redirect(f"/Ticket/Details/{ticket_id}")


@router.post("/State/{ticket_id}")
def change_state(
    ticket_id: int,
    payload: TicketStateUpdate,
    accessor: DataAccessor = Depends(get_ticket_accessor),
    user: User = Depends(get_current_user),
):
    ticket = _get_or_404(accessor, ticket_id)
    result = ticket_service.set_ticket_state(accessor, ticket, payload.status, user)
    if not result:
        raise HTTPException(status_code=500, detail=result.message)
    return _redirect(f"/Ticket/Details/{ticket_id}")


@router.post("/Cancel/{ticket_id}")
def cancel(ticket_id: int, user: User = Depends(get_current_user)):
    return _redirect(f"/Ticket/Details/{ticket_id}")
