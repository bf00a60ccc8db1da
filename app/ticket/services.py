# app/ticket/services.py
from datetime import datetime
from typing import Callable

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from app.audit import services as audit_service
from app.core.data_accessor import DataAccessor
from app.core.result import Result
from app.ticket.models import Ticket, TicketState
from app.ticket.pagination import PaginationMetadata
from app.ticket.schemas import TicketCreate, TicketIndexItem, TicketPage, TicketUpdate
from app.user.models import User


def _to_index_item(ticket: Ticket) -> TicketIndexItem:
    return TicketIndexItem(
        id=ticket.id,
        is_open=ticket.is_open,
        status=ticket.state,
        title=ticket.title,
        description=ticket.description,
        user_id=ticket.created_by_id,
        username=ticket.created_by.username if ticket.created_by else "",
        created_at=ticket.created_at,
        closed_at=ticket.closed_at,
    )


def get_paginated_tickets(
    accessor: DataAccessor,
    ticket_state: bool | None = None,
    page: int = 1,
    page_size: int = 10,
) -> TicketPage:
    """Newest-first slice of tickets, optionally only open (True) or closed (False).

    The open/in-progress/closed counts always cover every ticket; the page
    count follows the filtered list.
    """
    closed = Ticket.status == TicketState.CLOSED.value
    total_open = accessor.query(Ticket, ~closed).count()
    total_in_progress = accessor.query(Ticket, Ticket.status == TicketState.IN_PROGRESS.value).count()
    total_closed = accessor.query(Ticket, closed).count()

    tickets = accessor.query(Ticket)
    if ticket_state is True:
        tickets = tickets.filter(~closed)
    elif ticket_state is False:
        tickets = tickets.filter(closed)

    meta = PaginationMetadata(
        current=page,
        page_size=page_size,
        total_items=tickets.count(),
        total_open_items=total_open,
        total_in_progress_items=total_in_progress,
        total_closed_items=total_closed,
    )
    items = tickets.order_by(Ticket.id.desc()).offset(meta.skip).limit(meta.take).all()

    return TicketPage(
        tickets=[_to_index_item(t) for t in items],
        ticket_state=ticket_state,
        current_page=meta.current,
        page_size=page_size,
        total_pages=meta.total_pages,
        total_open_tickets=total_open,
        total_in_progress_tickets=total_in_progress,
        total_closed_tickets=total_closed,
        total_tickets=total_open + total_closed,
        page_state=meta.page_state,
        pages=meta.page_list(),
        has_previous=meta.has_previous,
        has_next=meta.has_next,
    )


def get_ticket(accessor: DataAccessor, ticket_id: int) -> Ticket | None:
    return accessor.get(Ticket, ticket_id)


class _ChangeRejected(Exception):
    def __init__(self, result: Result) -> None:
        super().__init__(result.message)
        self.result = result


def _save_with_audit(
    accessor: DataAccessor,
    ticket: Ticket,
    action: str,
    actor: User,
    apply: Callable[[], Result],
    metadata: dict | None = None,
) -> Result[Ticket]:
    """Apply a change and its audit entry in a single commit."""
    try:
        with accessor.deferred_save():
            changed = apply()
            if not changed:
                # Raising makes deferred_save roll back instead of committing
                raise _ChangeRejected(changed)
            accessor.flush()
            audit_service.record(accessor, "Ticket", ticket.id, action, actor.id, metadata)
    except _ChangeRejected as rejected:
        return Result.failure(rejected.result.message, rejected.result.exception)
    except SQLAlchemyError as exc:
        logger.error("Failed to {action} ticket: {error}", action=action.lower(), error=exc)
        return Result.failure("Failed to save changes", exc)
    return Result.success(ticket)


def create_ticket(accessor: DataAccessor, payload: TicketCreate, creator: User) -> Result[Ticket]:
    now = datetime.now()
    ticket = Ticket(
        title=payload.title,
        description=payload.description,
        status=TicketState.OPEN.value,
        created_at=now,
        last_modified_at=now,
        created_by_id=creator.id,
    )
    result = _save_with_audit(accessor, ticket, "Create", creator, lambda: accessor.create(ticket))
    if result:
        logger.info("Ticket #{id} created by {username}", id=ticket.id, username=creator.username)
    return result


def update_ticket(accessor: DataAccessor, ticket: Ticket, payload: TicketUpdate, editor: User) -> Result[Ticket]:
    changes = {
        field: value
        for field, value in payload.model_dump(include={"title", "description"}).items()
        if getattr(ticket, field) != value
    }
    ticket.title = payload.title
    ticket.description = payload.description
    ticket.last_modified_at = datetime.now()
    result = _save_with_audit(accessor, ticket, "Update", editor, lambda: accessor.update(ticket), changes)
    if result:
        logger.info("Ticket #{id} updated", id=ticket.id)
    return result


def delete_ticket(accessor: DataAccessor, ticket: Ticket, actor: User) -> Result[Ticket]:
    ticket_id = ticket.id
    result = _save_with_audit(
        accessor, ticket, "Delete", actor, lambda: accessor.remove(ticket), {"title": ticket.title}
    )
    if result:
        logger.info("Ticket #{id} deleted", id=ticket_id)
    return result


def set_ticket_state(accessor: DataAccessor, ticket: Ticket, state: TicketState, actor: User) -> Result[Ticket]:
    previous = ticket.status
    ticket.set_state(state)
    return _save_with_audit(
        accessor, ticket, "Update", actor, lambda: accessor.update(ticket),
        {"status": [previous, ticket.status]},
    )


def toggle_ticket(accessor: DataAccessor, ticket: Ticket, actor: User) -> Result[Ticket]:
    previous = ticket.status
    ticket.toggle_open()
    result = _save_with_audit(
        accessor, ticket, "Update", actor, lambda: accessor.update(ticket),
        {"status": [previous, ticket.status]},
    )
    if result:
        logger.info("Ticket #{id} is now {status}", id=ticket.id, status=ticket.status)
    return result
