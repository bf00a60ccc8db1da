# app/feedback/models.py
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String
from app.core.database import Base


class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True, index=True)
    message = Column(String(1024), nullable=False)
    submitted_by = Column(String(128), nullable=False, default="Anonymous")
    submitted_at = Column(DateTime, nullable=False, default=datetime.now)
