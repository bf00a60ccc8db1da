# app/label/routes.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.data_accessor import DataAccessor
from app.core.database import get_db
from app.core.errors import FormError
from app.core.security import get_current_user
from app.label import services as label_service
from app.label.models import Issue, IssueLabel, Label, TicketLabel
from app.label.schemas import IssueCreate, IssueOut, LabelAttach, LabelCreate, LabelOut
from app.ticket.models import Ticket
from app.user.models import User

router = APIRouter(tags=["Labels"])


def get_label_accessor(db: Session = Depends(get_db)) -> DataAccessor:
    return DataAccessor(db, allowed_entities=[Label, TicketLabel, Issue, IssueLabel, Ticket])


@router.get("/Label", response_model=list[LabelOut])
def list_labels(accessor: DataAccessor = Depends(get_label_accessor), user: User = Depends(get_current_user)):
    return label_service.list_labels(accessor, user)


@router.post("/Label/Create", response_model=LabelOut, status_code=201)
def create_label(
    payload: LabelCreate,
    accessor: DataAccessor = Depends(get_label_accessor),
    user: User = Depends(get_current_user),
):
    result = label_service.create_label(accessor, payload, user)
    if not result:
        raise FormError.single("", result.message, payload.model_dump())
    return result.value


@router.post("/Label/Attach", response_model=list[LabelOut])
def attach_label(
    payload: LabelAttach,
    accessor: DataAccessor = Depends(get_label_accessor),
    user: User = Depends(get_current_user),
):
    result = label_service.attach_to_ticket(accessor, payload.ticket_id, payload.label_id)
    if not result:
        raise HTTPException(status_code=404, detail=result.message)
    return label_service.labels_for_ticket(accessor, payload.ticket_id)


@router.get("/Label/Ticket/{ticket_id}", response_model=list[LabelOut])
def ticket_labels(
    ticket_id: int,
    accessor: DataAccessor = Depends(get_label_accessor),
    user: User = Depends(get_current_user),
):
    if accessor.get(Ticket, ticket_id) is None:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return label_service.labels_for_ticket(accessor, ticket_id)


@router.post("/Issue/Create", response_model=IssueOut, status_code=201)
def create_issue(
    payload: IssueCreate,
    accessor: DataAccessor = Depends(get_label_accessor),
    user: User = Depends(get_current_user),
):
    result = label_service.create_issue(accessor, payload, user)
    if not result:
        raise FormError.single("", result.message, payload.model_dump())
    return label_service.to_issue_out(result.value)


@router.get("/Issue/{issue_id}", response_model=IssueOut)
def issue_details(
    issue_id: int,
    accessor: DataAccessor = Depends(get_label_accessor),
    user: User = Depends(get_current_user),
):
    issue = accessor.get(Issue, issue_id)
    if issue is None:
        raise HTTPException(status_code=404, detail="Issue not found")
    return label_service.to_issue_out(issue)


@router.post("/Issue/{issue_id}/Label/{label_id}", response_model=IssueOut)
def label_issue(
    issue_id: int,
    label_id: int,
    accessor: DataAccessor = Depends(get_label_accessor),
    user: User = Depends(get_current_user),
):
    issue = accessor.get(Issue, issue_id)
    if issue is None:
        raise HTTPException(status_code=404, detail="Issue not found")
    result = label_service.attach_to_issue(accessor, issue, label_id)
    if not result:
        raise HTTPException(status_code=404, detail=result.message)
    accessor.refresh(issue)
    return label_service.to_issue_out(issue)
