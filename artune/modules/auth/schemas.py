from pydantic import BaseModel, EmailStr, model_validator
from typing import Optional, Dict, Any, Literal
from datetime import datetime

from artune.core.enums import Role

MIN_PASSWORD_LENGTH = 6


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str
    role: Optional[Role] = None
    redirect_to: str = "/dashboard"


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    confirm_password: str
    # Admins are never self-registered
    role: Optional[Literal["artist", "client"]] = None
    full_name: Optional[str] = None

    @model_validator(mode="after")
    def check_form(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        if len(self.password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if not self.role:
            raise ValueError("Please select a role")
        return self


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    role: Role
    access_token: Optional[str] = None
    message: str = "Account created successfully"
    redirect_to: str


class LogoutResponse(BaseModel):
    message: str = "Logged out successfully"
    redirect_to: str = "/"


class CurrentUser(BaseModel):
    """Auth identity merged with its profiles row."""
    id: str
    email: str
    role: Optional[Role] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    user_metadata: Dict[str, Any] = {}
    created_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.email
