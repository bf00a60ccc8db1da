# app/user/schemas.py
from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class LoginForm(BaseModel):
    email_or_username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    remember_me: bool = False


class LoginView(BaseModel):
    return_url: str | None = None
    email_or_username: str = ""
    remember_me: bool = False


class RegisterForm(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=128)
    last_name: str = Field(..., min_length=1, max_length=128)
    birthdate: date
    username: str = Field(..., min_length=1, max_length=256)
    email: str = Field(..., max_length=256, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterForm":
        if self.password != self.confirm_password:
            raise ValueError("The password and confirmation password do not match.")
        return self


class RegisterView(BaseModel):
    first_name: str = ""
    last_name: str = ""
    birthdate: date | None = None
    username: str = ""
    email: str = ""


class UserProfile(BaseModel):
    id: int
    first_name: str
    last_name: str
    username: str
    display_name: str
    role: str
    bio: str | None = None
    birthdate: date
    created_at: datetime
    can_edit: bool = False

    model_config = {"from_attributes": True}


class UserEdit(BaseModel):
    username: str | None = Field(default=None, min_length=1, max_length=256)
    display_name: str | None = Field(default=None, max_length=256)
    bio: str | None = None
    first_name: str | None = Field(default=None, max_length=128)
    last_name: str | None = Field(default=None, max_length=128)
    birthdate: date | None = None


class UserEditView(UserEdit):
    id: int

    model_config = {"from_attributes": True}
