"""SQLAlchemy models for the admin panel."""

from adminpanel.models.base import Base, BaseModel, TimestampMixin
from adminpanel.models.app_settings import AppSettings, default_settings_document
from adminpanel.models.system_settings import SystemSettings

__all__ = [
    "Base",
    "BaseModel",
    "TimestampMixin",
    "AppSettings",
    "default_settings_document",
    "SystemSettings",
]
