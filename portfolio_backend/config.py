"""
Configuration and settings for the portfolio backend.
"""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Annotated, Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")

    # Database (Postgres expected)
    database_url: Optional[str] = Field(default=None, env="DATABASE_URL")

    # Firebase Storage (service account credentials)
    firebase_type: str = Field(default="service_account", env="FIREBASE_TYPE")
    firebase_project_id: Optional[str] = Field(
        default=None, env="FIREBASE_PROJECT_ID"
    )
    firebase_private_key_id: Optional[str] = Field(
        default=None, env="FIREBASE_PRIVATE_KEY_ID"
    )
    firebase_private_key: Optional[str] = Field(
        default=None, env="FIREBASE_PRIVATE_KEY"
    )
    firebase_client_email: Optional[str] = Field(
        default=None, env="FIREBASE_CLIENT_EMAIL"
    )
    firebase_client_id: Optional[str] = Field(default=None, env="FIREBASE_CLIENT_ID")
    firebase_auth_uri: str = Field(
        default="https://accounts.google.com/o/oauth2/auth", env="FIREBASE_AUTH_URI"
    )
    firebase_token_uri: str = Field(
        default="https://oauth2.googleapis.com/token", env="FIREBASE_TOKEN_URI"
    )
    firebase_auth_provider_x509_cert_url: Optional[str] = Field(
        default=None, env="FIREBASE_AUTH_PROVIDER_X509_CERT_URL"
    )
    firebase_client_x509_cert_url: Optional[str] = Field(
        default=None, env="FIREBASE_CLIENT_X509_CERT_URL"
    )
    storage_bucket: str = Field(
        default="thienanport.appspot.com", env="STORAGE_BUCKET"
    )

    # S3-compatible access to the asset bucket (e.g. GCS interoperability)
    s3_endpoint: Optional[str] = Field(default=None, env="S3_ENDPOINT")
    s3_region: Optional[str] = Field(default=None, env="S3_REGION")
    s3_bucket: Optional[str] = Field(default=None, env="S3_BUCKET")
    aws_access_key_id: Optional[str] = Field(
        default=None, env="AWS_ACCESS_KEY_ID"
    )
    aws_secret_access_key: Optional[str] = Field(
        default=None, env="AWS_SECRET_ACCESS_KEY"
    )

    # Outbound mail for the contact form
    email_user: Optional[str] = Field(default=None, env="EMAIL_USER")
    email_pass: Optional[str] = Field(default=None, env="EMAIL_PASS")
    smtp_host: str = Field(default="smtp.gmail.com", env="SMTP_HOST")
    smtp_port: int = Field(default=587, env="SMTP_PORT")
    contact_recipient: Optional[str] = Field(default=None, env="CONTACT_RECIPIENT")

    # Browser access
    allowed_origins: Annotated[list[str], NoDecode] = Field(
        default=[
            "https://basilogast.github.io",
            "http://localhost:5173",
            "https://annguyen.vercel.app",
            "https://demoportfolio1.vercel.app",
        ],
        env="ALLOWED_ORIGINS",
    )
    session_secret: str = Field(default="change-me", env="SESSION_SECRET")
    session_cookie: str = Field(default="portfolio_session", env="SESSION_COOKIE")
    session_max_age: int = Field(default=24 * 60 * 60, env="SESSION_MAX_AGE")
    session_https_only: bool = Field(default=False, env="SESSION_HTTPS_ONLY")

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False, env="USE_IN_MEMORY_BACKENDS"
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        """Accept a JSON array or a comma-separated list of origins."""
        if not isinstance(value, str):
            return value
        value = value.strip()
        if value.startswith("["):
            return json.loads(value)
        return [origin.strip() for origin in value.split(",") if origin.strip()]

    def firebase_credentials(self) -> Optional[dict]:
        """
        Service account dict for firebase_admin, or None when not configured.
        """
        if not (self.firebase_project_id and self.firebase_private_key):
            return None
        return {
            "type": self.firebase_type,
            "project_id": self.firebase_project_id,
            "private_key_id": self.firebase_private_key_id,
            # Keys stored in env files carry escaped newlines.
            "private_key": self.firebase_private_key.replace("\\n", "\n"),
            "client_email": self.firebase_client_email,
            "client_id": self.firebase_client_id,
            "auth_uri": self.firebase_auth_uri,
            "token_uri": self.firebase_token_uri,
            "auth_provider_x509_cert_url": self.firebase_auth_provider_x509_cert_url,
            "client_x509_cert_url": self.firebase_client_x509_cert_url,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
