# app/profile/routes.py
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse

from app.core.data_accessor import DataAccessor
from app.core.errors import FormError
from app.core.security import get_current_user, get_optional_user
from app.user import services as user_service
from app.user.models import User
from app.user.routes import get_user_accessor
from app.user.schemas import UserEdit, UserEditView, UserProfile

router = APIRouter(tags=["Profile"])


@router.get("/profile/{username}", response_model=UserProfile)
def profile(
    username: str,
    accessor: DataAccessor = Depends(get_user_accessor),
    current: User | None = Depends(get_optional_user),
):
    user = user_service.get_by_username(accessor, username)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")

    view = UserProfile.model_validate(user)
    view.can_edit = current is not None and current.id == user.id
    return view


@router.get("/Profile/Edit", response_model=UserEditView)
def edit_form(user: User = Depends(get_current_user)):
    return UserEditView.model_validate(user)


@router.post("/Profile/Edit")
def edit(
    payload: UserEdit,
    accessor: DataAccessor = Depends(get_user_accessor),
    user: User = Depends(get_current_user),
):
    if payload.username and payload.username != user.username:
        if user_service.get_by_username(accessor, payload.username) is not None:
            raise FormError.single("username", "The username is already taken.", payload.model_dump())

    result = user_service.update_profile(accessor, user, payload)
    if not result:
        raise FormError.single("", result.message, payload.model_dump())
    return RedirectResponse(url=f"/profile/{user.username}", status_code=status.HTTP_303_SEE_OTHER)
