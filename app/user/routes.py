# app/user/routes.py
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.data_accessor import DataAccessor
from app.core.database import get_db
from app.core.errors import FormError
from app.core.security import get_optional_user, sign_in, sign_out
from app.user import services as user_service
from app.user.models import User
from app.user.schemas import LoginForm, LoginView, RegisterForm, RegisterView

router = APIRouter(prefix="/User", tags=["Users"])


def get_user_accessor(db: Session = Depends(get_db)) -> DataAccessor:
    return DataAccessor(db, allowed_entities=[User])


def _is_local_url(url: str | None) -> bool:
    return bool(url) and url.startswith("/") and not url.startswith("//")


@router.get("/Login", response_model=LoginView)
def login_form(
    return_url: str | None = Query(default=None, alias="returnUrl"),
    user: User | None = Depends(get_optional_user),
):
    if user is not None:
        return RedirectResponse(url="/Ticket", status_code=status.HTTP_302_FOUND)
    return LoginView(return_url=return_url)


@router.post("/Login")
def login(
    payload: LoginForm,
    return_url: str | None = Query(default=None, alias="returnUrl"),
    accessor: DataAccessor = Depends(get_user_accessor),
):
    result = user_service.authenticate(accessor, payload.email_or_username, payload.password)
    if not result:
        raise FormError.single("", result.message, payload.model_dump(exclude={"password"}))

    response = RedirectResponse(
        url=return_url if _is_local_url(return_url) else "/Ticket",
        status_code=status.HTTP_303_SEE_OTHER,
    )
    sign_in(response, result.value, persistent=payload.remember_me)
    return response


@router.post("/Logout")
def logout():
    response = RedirectResponse(url=get_settings().LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)
    sign_out(response)
    return response


@router.get("/Register", response_model=RegisterView)
def register_form():
    return RegisterView()


@router.post("/Register")
def register(payload: RegisterForm, accessor: DataAccessor = Depends(get_user_accessor)):
    model = payload.model_dump(exclude={"password", "confirm_password"})

    if user_service.get_by_username(accessor, payload.username) is not None:
        raise FormError.single("username", "The username is already taken.", model)
    if user_service.get_by_email(accessor, payload.email) is not None:
        raise FormError.single("email", "The email address is already registered.", model)

    result = user_service.register_user(accessor, payload)
    if not result:
        raise FormError.single("", result.message, model)

    response = RedirectResponse(url="/Ticket", status_code=status.HTTP_303_SEE_OTHER)
    sign_in(response, result.value)
    return response
