# app/ticket/models.py
import enum
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base


class TicketState(str, enum.Enum):
    OPEN = "Open"
    IN_PROGRESS = "InProgress"
    CLOSED = "Closed"


class Ticket(Base):
    __tablename__ = "tickets"
    __table_args__ = (
        UniqueConstraint("title", "created_by_id", name="uq_tickets_title_created_by"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), index=True, nullable=False)
    description = Column(String(1024), nullable=False)
    status = Column(String(16), default=TicketState.OPEN.value, index=True, nullable=False)

    created_at = Column(DateTime, nullable=False, default=datetime.now)
    last_modified_at = Column(DateTime, nullable=False, default=datetime.now)
    closed_at = Column(DateTime, nullable=True)

    created_by_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    created_by = relationship("User", lazy="joined")

    @property
    def state(self) -> TicketState:
        return TicketState(self.status)

    @property
    def is_open(self) -> bool:
        return self.status != TicketState.CLOSED.value

    def set_state(self, state: TicketState, when: datetime | None = None) -> None:
        """Move to ``state``; closed_at is kept set exactly while the ticket is closed."""
        when = when or datetime.now()
        if state == TicketState.CLOSED:
            if self.status != TicketState.CLOSED.value:
                self.closed_at = when
        else:
            self.closed_at = None
        self.status = state.value
        self.last_modified_at = when

    def toggle_open(self, when: datetime | None = None) -> None:
        self.set_state(TicketState.OPEN if not self.is_open else TicketState.CLOSED, when)

    def __repr__(self) -> str:
        return f"<Ticket #{self.id} {self.title}>"
