# app/label/models.py
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base


class Label(Base):
    __tablename__ = "labels"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(64), nullable=False, index=True)
    background_color = Column(String(7), nullable=False)
    text_color = Column(String(7), nullable=True)
    description = Column(String(256), nullable=True)
    created_by_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)


class TicketLabel(Base):
    __tablename__ = "ticket_labels"
    __table_args__ = (UniqueConstraint("ticket_id", "label_id", name="uq_ticket_labels_ticket_label"),)

    id = Column(Integer, primary_key=True, index=True)
    ticket_id = Column(Integer, ForeignKey("tickets.id", ondelete="CASCADE"), nullable=False, index=True)
    label_id = Column(Integer, ForeignKey("labels.id", ondelete="CASCADE"), nullable=False, index=True)

    label = relationship("Label", lazy="joined")


class Issue(Base):
    """An issue, optionally nested under a parent issue."""

    __tablename__ = "issues"
    __table_args__ = (UniqueConstraint("title", "created_by_id", name="uq_issues_title_created_by"),)

    id = Column(Integer, primary_key=True, index=True)
    parent_id = Column(Integer, ForeignKey("issues.id", ondelete="CASCADE"), nullable=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(String(1024), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    created_by_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)

    parent = relationship("Issue", remote_side=[id], back_populates="children")
    children = relationship("Issue", back_populates="parent", order_by="Issue.id")
    issue_labels = relationship("IssueLabel", cascade="all, delete-orphan")

    @property
    def root(self) -> "Issue":
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def depth(self) -> int:
        depth, node = 0, self
        while node.parent is not None:
            depth += 1
            node = node.parent
        return depth

    @property
    def display_id(self) -> str:
        return f"{self.root.id:08d}-{self.depth:03d}-{self.id:03d}"


class IssueLabel(Base):
    __tablename__ = "issue_labels"
    __table_args__ = (UniqueConstraint("issue_id", "label_id", name="uq_issue_labels_issue_label"),)

    id = Column(Integer, primary_key=True, index=True)
    issue_id = Column(Integer, ForeignKey("issues.id", ondelete="CASCADE"), nullable=False, index=True)
    label_id = Column(Integer, ForeignKey("labels.id", ondelete="CASCADE"), nullable=False, index=True)

    label = relationship("Label", lazy="joined")
