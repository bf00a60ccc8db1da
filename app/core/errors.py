# app/core/errors.py
from __future__ import annotations

from urllib.parse import urlencode

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse
from loguru import logger

from app.core.config import get_settings


class LoginRequired(Exception):
    """The endpoint needs a signed-in user."""

    def __init__(self, return_url: str | None = None) -> None:
        super().__init__("Login required")
        self.return_url = return_url


class FormError(Exception):
    """A submitted form is redisplayed with validation messages.

    ``errors`` maps a field name to its messages; the empty key holds messages
    that apply to the whole form.
    """

    def __init__(self, errors: dict[str, list[str]], model: dict | None = None) -> None:
        super().__init__("; ".join(msg for msgs in errors.values() for msg in msgs))
        self.errors = errors
        self.model = model or {}

    @classmethod
    def single(cls, field: str, message: str, model: dict | None = None) -> "FormError":
        return cls({field: [message]}, model)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(LoginRequired)
    async def login_required_handler(request: Request, exc: LoginRequired):
        settings = get_settings()
        url = settings.LOGIN_PATH
        if exc.return_url:
            url = f"{url}?{urlencode({'returnUrl': exc.return_url})}"
        return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)

    @app.exception_handler(FormError)
    async def form_error_handler(request: Request, exc: FormError):
        logger.debug("Form rejected on {path}: {errors}", path=request.url.path, errors=exc.errors)
        return JSONResponse(
            status_code=422,
            content=jsonable_encoder({"detail": str(exc), "errors": exc.errors, "model": exc.model}),
        )
