from pydantic import BaseModel, Field

from census_admin.census.schemas import CamelModel


class SessionContext(BaseModel):
    """Identity of the logged-in dashboard user, resolved once per request."""

    session_id: str
    email: str
    name: str
    api_token: str = Field(repr=False)


class SessionUser(CamelModel):
    email: str
    name: str


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    email: str
    password: str


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: SessionUser


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class EmailUpdate(CamelModel):
    new_email: str
    password: str


class PasswordUpdate(CamelModel):
    current_password: str = ""
    new_password: str = ""
    confirm_password: str = ""
