# app/user/models.py
from datetime import date, datetime

from sqlalchemy import Column, Date, DateTime, Integer, String, Text
from app.core.database import Base

ROLE_ADMIN = "Admin"
ROLE_USER = "User"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(256), unique=True, index=True, nullable=False)
    email = Column(String(256), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=ROLE_USER)

    first_name = Column(String(128), nullable=False)
    last_name = Column(String(128), nullable=False)
    display_name = Column(String(256), nullable=False)
    bio = Column(Text, nullable=True)
    birthdate = Column(Date, nullable=False, default=date(1900, 1, 1))
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def __repr__(self) -> str:
        return f"<User {self.username}>"
