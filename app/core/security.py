# app/core/security.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from fastapi import Depends, Request, Response
from jose import JWTError, jwt
from loguru import logger
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.errors import LoginRequired
from app.user.models import User

# Password Context (Argon2)
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return jwt.encode({"sub": str(user_id), "exp": expire}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> int | None:
    """Return the user id carried by ``token``, or None when it is invalid or expired."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        return None
    return int(subject)


def sign_in(response: Response, user: User, persistent: bool = False) -> None:
    settings = get_settings()
    token = create_access_token(user.id)
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite="lax",
        # Session cookie unless "remember me"
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60 if persistent else None,
    )
    logger.info("User {username} signed in", username=user.username)


def sign_out(response: Response) -> None:
    settings = get_settings()
    response.delete_cookie(settings.AUTH_COOKIE_NAME)


def get_optional_user(request: Request, db: Session = Depends(get_db)) -> User | None:
    settings = get_settings()
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token:
        return None

    user_id = decode_access_token(token)
    if user_id is None:
        return None
    return db.get(User, user_id)


def get_current_user(request: Request, user: User | None = Depends(get_optional_user)) -> User:
    if user is None:
        return_url = request.url.path
        if request.url.query:
            return_url = f"{return_url}?{request.url.query}"
        raise LoginRequired(return_url)
    return user
