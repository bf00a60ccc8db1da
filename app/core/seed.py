# app/core/seed.py
"""Start-up data: the default admin account and, for demos, sample users and tickets."""
from __future__ import annotations

import random
from datetime import date, datetime, timedelta

from loguru import logger

from app.core.data_accessor import DataAccessor
from app.core.security import get_password_hash
from app.ticket.models import Ticket, TicketState
from app.user.models import ROLE_ADMIN, User

ADMIN_USERNAME = "admin"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "Admin@1234"

FIRST_NAMES = [
    "John", "Jane", "Mary", "James", "Lisa", "Michael", "Sarah", "David",
    "Emily", "Charles", "Sophia", "Lucas", "Olivia", "Ethan", "Mia",
]
LAST_NAMES = [
    "Doe", "Smith", "Johnson", "Williams", "Brown", "Davis", "Miller", "Wilson",
    "Moore", "Taylor", "Anderson", "Thomas", "Jackson", "White", "Harris",
]


def seed_admin(accessor: DataAccessor) -> User:
    existing = accessor.find(User, User.email == ADMIN_EMAIL)
    if existing is not None:
        return existing

    admin = User(
        username=ADMIN_USERNAME,
        email=ADMIN_EMAIL,
        password_hash=get_password_hash(ADMIN_PASSWORD),
        role=ROLE_ADMIN,
        first_name="Admin",
        last_name="User",
        display_name="Admin User",
        birthdate=date(1990, 1, 1),
        created_at=datetime.now(),
    )
    result = accessor.create(admin)
    if not result:
        raise RuntimeError(f"Failed to create admin user: {result.message}") from result.exception
    logger.info("Seeded admin user")
    return admin


def seed_users(accessor: DataAccessor, count: int = 15, rng: random.Random | None = None) -> list[User]:
    if accessor.query(User, User.username != ADMIN_USERNAME).count():
        logger.info("Users already exist. Skipping user seeding.")
        return []

    rng = rng or random.Random()
    users: list[User] = []
    taken: set[str] = set()
    while len(users) < count:
        first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
        username = f"{first.lower()}{last.lower()}"
        if username in taken:
            username = f"{username}{len(users)}"
        taken.add(username)
        users.append(
            User(
                username=username,
                email=f"{username}@maintenanceportal.com",
                password_hash=get_password_hash(f"{first}{last}123!"),
                first_name=first,
                last_name=last,
                display_name=f"{first} {last}",
                bio=f"Hello, I'm {first} {last}, a user of Maintenance Portal.",
                birthdate=date(1970, 1, 1) + timedelta(days=rng.randint(0, 365 * 30)),
                created_at=datetime.now(),
            )
        )

    result = accessor.batch_create(users)
    if not result:
        raise RuntimeError(f"Failed to seed users: {result.message}") from result.exception
    logger.info("Seeded {count} users", count=len(users))
    return users


def seed_tickets(accessor: DataAccessor, count: int = 30, rng: random.Random | None = None) -> list[Ticket]:
    if accessor.query(Ticket).count():
        logger.info("Tickets already exist. Skipping ticket seeding.")
        return []

    users = accessor.get_all(User)
    if not users:
        logger.info("No users found. Skipping ticket seeding.")
        return []

    rng = rng or random.Random()
    now = datetime.now()
    states = [TicketState.OPEN, TicketState.IN_PROGRESS, TicketState.CLOSED]
    tickets: list[Ticket] = []
    for i in range(1, count + 1):
        state = states[i % 3]
        created_at = now - timedelta(days=rng.randint(1, 9))
        ticket = Ticket(
            title=f"Ticket {i}: Issue {i}",
            description=f"This is a description for issue {i}. More details can be found here.",
            created_by_id=rng.choice(users).id,
            created_at=created_at,
        )
        ticket.set_state(state, when=created_at + timedelta(hours=rng.randint(1, 24)))
        tickets.append(ticket)

    result = accessor.batch_create(tickets)
    if not result:
        logger.error("Error while saving tickets: {message}", message=result.message)
        return []
    logger.info("Seeded {count} tickets", count=len(tickets))
    return tickets


def seed_database(accessor: DataAccessor, admin: bool = True, sample_data: bool = False) -> None:
    if admin:
        seed_admin(accessor)
    if sample_data:
        seed_users(accessor)
        seed_tickets(accessor)
