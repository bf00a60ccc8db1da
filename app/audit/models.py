# app/audit/models.py
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from app.core.database import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    entity_name = Column(String(64), nullable=False, index=True)  # "Ticket", "User"
    entity_id = Column(String(64), nullable=False, index=True)
    action = Column(String(16), nullable=False)  # "Create", "Update", "Delete"
    timestamp = Column(DateTime, nullable=False, default=datetime.now)
    actor_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    # "metadata" is reserved on declarative classes
    extra = Column("metadata", Text, nullable=True)
