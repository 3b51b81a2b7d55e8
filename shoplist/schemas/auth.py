"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from shoplist.models.enums import Role


class UserRegister(BaseModel):
    """User registration request."""

    email: EmailStr = Field(..., max_length=255)
    pseudo: str = Field(..., min_length=2, max_length=50)
    password: str = Field(..., min_length=8, max_length=100)


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=100)


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: "UserResponse"


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    pseudo: str
    role: Role


class UserCreate(BaseModel):
    """Create a user (superuser only)."""

    email: EmailStr = Field(..., max_length=255)
    pseudo: str = Field(..., min_length=2, max_length=50)
    password: str = Field(..., min_length=8, max_length=100)
    role: Role = Role.USER


class UserUpdate(BaseModel):
    """Update a user (superuser only)."""

    email: EmailStr | None = Field(None, max_length=255)
    pseudo: str | None = Field(None, min_length=2, max_length=50)
    password: str | None = Field(None, min_length=8, max_length=100)
    role: Role | None = None
