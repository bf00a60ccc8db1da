# app/label/services.py
from datetime import datetime

from loguru import logger

from app.core.data_accessor import DataAccessor
from app.core.result import Result
from app.label.models import Issue, IssueLabel, Label, TicketLabel
from app.label.schemas import IssueCreate, IssueOut, LabelCreate, LabelOut
from app.ticket.models import Ticket
from app.user.models import User


def list_labels(accessor: DataAccessor, owner: User) -> list[Label]:
    return accessor.query(Label, Label.created_by_id == owner.id).order_by(Label.name).all()


def create_label(accessor: DataAccessor, payload: LabelCreate, owner: User) -> Result[Label]:
    label = Label(**payload.model_dump(), created_by_id=owner.id)
    result = accessor.create(label)
    if result:
        logger.info("Label {name} created", name=label.name)
    return result


def attach_to_ticket(accessor: DataAccessor, ticket_id: int, label_id: int) -> Result[TicketLabel]:
    if accessor.get(Ticket, ticket_id) is None:
        return Result.failure("Ticket not found")
    if accessor.get(Label, label_id) is None:
        return Result.failure("Label not found")
    existing = accessor.find(TicketLabel, TicketLabel.ticket_id == ticket_id, TicketLabel.label_id == label_id)
    if existing is not None:
        return Result.success(existing, "Label already attached")
    return accessor.create(TicketLabel(ticket_id=ticket_id, label_id=label_id))


def labels_for_ticket(accessor: DataAccessor, ticket_id: int) -> list[Label]:
    links = accessor.query(TicketLabel, TicketLabel.ticket_id == ticket_id).order_by(TicketLabel.id).all()
    return [link.label for link in links]


def create_issue(accessor: DataAccessor, payload: IssueCreate, owner: User) -> Result[Issue]:
    if payload.parent_id is not None and accessor.get(Issue, payload.parent_id) is None:
        return Result.failure("Parent issue not found")
    issue = Issue(
        title=payload.title,
        description=payload.description,
        parent_id=payload.parent_id,
        created_at=datetime.now(),
        created_by_id=owner.id,
    )
    return accessor.create(issue)


def attach_to_issue(accessor: DataAccessor, issue: Issue, label_id: int) -> Result[IssueLabel]:
    if accessor.get(Label, label_id) is None:
        return Result.failure("Label not found")
    existing = accessor.find(IssueLabel, IssueLabel.issue_id == issue.id, IssueLabel.label_id == label_id)
    if existing is not None:
        return Result.success(existing, "Label already attached")
    return accessor.create(IssueLabel(issue_id=issue.id, label_id=label_id))


def to_issue_out(issue: Issue) -> IssueOut:
    return IssueOut(
        id=issue.id,
        display_id=issue.display_id,
        parent_id=issue.parent_id,
        depth=issue.depth,
        title=issue.title,
        description=issue.description,
        created_at=issue.created_at,
        created_by_id=issue.created_by_id,
        children=[child.id for child in issue.children],
        labels=[LabelOut.model_validate(link.label) for link in issue.issue_labels],
    )
