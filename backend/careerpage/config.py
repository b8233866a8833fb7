from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )

    # Database (unset = read from the sample dataset, refuse writes)
    database_url: Optional[str] = None

    # Email
    email_mode: str = "dev"  # dev | prod
    sendgrid_api_key: Optional[str] = None
    email_from: str = "noreply@careers.example.com"

    # Auth
    session_ttl_days: int = 30
    confirmation_ttl_minutes: int = 60 * 24
    require_email_confirmation: bool = False
    min_password_length: int = 6

    # Careers page
    excerpt_length: int = 150

    # App
    debug: bool = False
    frontend_url: str = "http://localhost:3000"
    allowed_origins: Optional[str] = None  # comma-separated

    def get_frontend_url(self) -> str:
        return self.frontend_url.rstrip("/")


settings = Settings()
