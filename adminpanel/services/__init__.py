"""Service layer for business logic."""

from adminpanel.services.mail_service import MailService, SmtpRelay, get_mail_service
from adminpanel.services.settings_service import (
    DocumentSettingsRepository,
    RelationalSettingsRepository,
    SettingsRepository,
    get_settings_repository,
)

__all__ = [
    "MailService",
    "SmtpRelay",
    "get_mail_service",
    "SettingsRepository",
    "RelationalSettingsRepository",
    "DocumentSettingsRepository",
    "get_settings_repository",
]
