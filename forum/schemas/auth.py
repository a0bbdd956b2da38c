"""Request/response schemas for login and the authenticated caller."""

from pydantic import BaseModel, Field

from forum.schemas.user import UserRead


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str | None = Field(default=None, description="Username")
    password: str | None = Field(default=None, description="Password")


class LoginResponse(BaseModel):
    """Returned after a successful login; user never includes the password hash."""

    message: str = Field(default="Login successful")
    user: UserRead
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class CurrentUser(BaseModel):
    """Authenticated caller (id, username, role) for dependency injection."""

    user_id: int
    username: str
    role: str

    class Config:
        from_attributes = True

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
