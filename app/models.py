# app/models.py
# Every mapped class, so Base.metadata knows all tables before create_all
from app.audit.models import AuditLog
from app.feedback.models import Feedback
from app.label.models import Issue, IssueLabel, Label, TicketLabel
from app.ticket.models import Ticket
from app.user.models import User

__all__ = ["AuditLog", "Feedback", "Issue", "IssueLabel", "Label", "Ticket", "TicketLabel", "User"]
