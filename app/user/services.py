# app/user/services.py
from datetime import datetime

from loguru import logger

from app.core.data_accessor import DataAccessor
from app.core.result import Result
from app.core.security import get_password_hash, verify_password
from app.user.models import ROLE_USER, User
from app.user.schemas import RegisterForm, UserEdit


def get_by_username(accessor: DataAccessor, username: str) -> User | None:
    return accessor.find(User, User.username == username)


def get_by_email(accessor: DataAccessor, email: str) -> User | None:
    return accessor.find(User, User.email == email)


def find_login_user(accessor: DataAccessor, email_or_username: str) -> User | None:
    if "@" in email_or_username:
        logger.debug("Looking up user by email")
        return get_by_email(accessor, email_or_username)
    logger.debug("Looking up user by username")
    return get_by_username(accessor, email_or_username)


def authenticate(accessor: DataAccessor, email_or_username: str, password: str) -> Result[User]:
    user = find_login_user(accessor, email_or_username)
    if user is None:
        return Result.failure("Invalid email or username.")
    if not verify_password(password, user.password_hash):
        logger.info("Failed login for {username}", username=user.username)
        return Result.failure("Invalid login attempt.")
    return Result.success(user)


def register_user(accessor: DataAccessor, form: RegisterForm) -> Result[User]:
    user = User(
        username=form.username,
        email=form.email,
        password_hash=get_password_hash(form.password),
        role=ROLE_USER,
        first_name=form.first_name,
        last_name=form.last_name,
        display_name=f"{form.first_name} {form.last_name}",
        birthdate=form.birthdate,
        created_at=datetime.now(),
    )
    result = accessor.create(user)
    if result:
        logger.info("Registered user {username}", username=user.username)
    return result


def update_profile(accessor: DataAccessor, user: User, changes: UserEdit) -> Result[User]:
    # Fields left out of the form keep their current values
    for field, value in changes.model_dump(exclude_none=True).items():
        setattr(user, field, value)
    return accessor.update(user)
