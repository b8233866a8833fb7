"""Authentication-related Pydantic schemas."""
from typing import Optional

from pydantic import EmailStr, model_validator

from careerpage.config import settings
from careerpage.schemas.base import CamelModel


class SignUpRequest(CamelModel):
    """Admin sign-up, optionally creating the admin's company in the same step."""
    email: EmailStr
    password: str
    confirm_password: str
    full_name: str
    company_name: Optional[str] = None
    company_slug: Optional[str] = None

    @model_validator(mode="after")
    def check_fields(self) -> "SignUpRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        if len(self.password) < settings.min_password_length:
            raise ValueError(f"Password must be at least {settings.min_password_length} characters")
        self.full_name = self.full_name.strip()
        if not self.full_name:
            raise ValueError("Full name is required")
        if self.company_name is not None and not self.company_name.strip():
            self.company_name = None
        return self


class SignInRequest(CamelModel):
    email: EmailStr
    password: str


class AdminCompany(CamelModel):
    id: str
    name: str
    slug: str


class AdminProfile(CamelModel):
    """The signed-in admin and the company they manage, if any."""
    id: str
    email: str
    full_name: Optional[str] = None
    company_id: Optional[str] = None
    company: Optional[AdminCompany] = None


class AuthResponse(CamelModel):
    """Response after sign-in, sign-up or a session check."""
    authenticated: bool
    user: Optional[AdminProfile] = None
    confirmation_required: bool = False
    redirect_to: Optional[str] = None
    message: Optional[str] = None


class AuthPage(CamelModel):
    """What the /admin/auth screen needs before showing its forms."""
    signed_in: bool
    redirect_to: Optional[str] = None
    min_password_length: int
    require_email_confirmation: bool
