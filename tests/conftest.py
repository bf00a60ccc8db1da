# tests/conftest.py
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_ADMIN", "false")

from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.data_accessor import DataAccessor
from app.core.database import Base, get_db, init_db
from app.main import app
from app.ticket.models import Ticket, TicketState
from app.user.models import User
from app.user.schemas import RegisterForm
from app.user.services import register_user

PASSWORD = "secret123"


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(username: str = "testuser", password: str = PASSWORD, email: str | None = None) -> User:
        form = RegisterForm(
            first_name="Test",
            last_name="User",
            birthdate=date(1990, 1, 1),
            username=username,
            email=email or f"{username}@example.com",
            password=password,
            confirm_password=password,
        )
        result = register_user(DataAccessor(db, allowed_entities=[User]), form)
        assert result, result.message
        return result.value

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user()


def _post_login(client: TestClient, email_or_username: str, password: str = PASSWORD, **extra):
    return client.post(
        "/User/Login",
        json={"email_or_username": email_or_username, "password": password, **extra},
        follow_redirects=False,
    )


@pytest.fixture
def password():
    return PASSWORD


@pytest.fixture
def login(client):
    """Post the login form through ``client``; returns the raw response."""

    def _login(email_or_username: str, password: str = PASSWORD, **extra):
        return _post_login(client, email_or_username, password, **extra)

    return _login


@pytest.fixture
def auth_client(client, user):
    r = _post_login(client, user.username)
    assert r.status_code == 303
    return client


@pytest.fixture
def seed_tickets(db):
    """Insert open tickets first, then closed ones, all owned by ``owner``."""

    def _seed(owner: User, open_count: int, closed_count: int) -> list[Ticket]:
        now = datetime.now()
        tickets = []
        for i in range(open_count):
            tickets.append(
                Ticket(
                    title=f"Open Ticket {i + 1}",
                    description=f"This is open ticket {i + 1}.",
                    status=TicketState.OPEN.value,
                    created_at=now,
                    last_modified_at=now,
                    created_by_id=owner.id,
                )
            )
        for i in range(closed_count):
            tickets.append(
                Ticket(
                    title=f"Closed Ticket {i + 1}",
                    description=f"This is closed ticket {i + 1}.",
                    status=TicketState.CLOSED.value,
                    created_at=now,
                    last_modified_at=now,
                    closed_at=now,
                    created_by_id=owner.id,
                )
            )
        db.add_all(tickets)
        db.commit()
        return tickets

    return _seed
