"""AppSettings model holding the single settings record (relational variant)."""

from typing import Any

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from adminpanel.config import get_settings
from adminpanel.models.base import BaseModel, JSONType

SECTIONS = ("theme", "smtp", "gateway")

GLOBAL_SCOPE = "global"


def get_default_theme() -> dict[str, Any]:
    """Get the default theme section."""
    return {
        "mode": "light",
        "primaryColor": "#1976d2",
        "userDefinedColors": [],
    }


def get_default_smtp() -> dict[str, Any]:
    """Get the default SMTP section, seeded from the environment."""
    settings = get_settings()
    return {
        "host": settings.smtp_host,
        "port": settings.smtp_port,
        "user": settings.smtp_user,
        "pass": settings.smtp_pass,
        "encryption": settings.smtp_encryption,
        "fromName": settings.smtp_from_name,
        "fromEmail": settings.smtp_from_email,
    }


def get_default_gateway() -> dict[str, Any]:
    """Get the default payment gateway section."""
    settings = get_settings()
    return {
        "provider": settings.gateway_provider,
        "apiKey": settings.gateway_api_key,
    }


def default_settings_document() -> dict[str, dict[str, Any]]:
    """Get the full default settings document used when the record is created."""
    return {
        "theme": get_default_theme(),
        "smtp": get_default_smtp(),
        "gateway": get_default_gateway(),
    }


class AppSettings(BaseModel):
    """The application's settings record, one JSON column per section.

    Exactly one row is expected; it is created lazily on first access.
    The unique scope column keeps a second row from ever being inserted.
    """

    __tablename__ = "app_settings"

    scope: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        default=GLOBAL_SCOPE,
    )

    theme: Mapped[dict] = mapped_column(
        JSONType,
        nullable=False,
        default=get_default_theme,
    )
    smtp: Mapped[dict] = mapped_column(
        JSONType,
        nullable=False,
        default=get_default_smtp,
    )
    gateway: Mapped[dict] = mapped_column(
        JSONType,
        nullable=False,
        default=get_default_gateway,
    )
