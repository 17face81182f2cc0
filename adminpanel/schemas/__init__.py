"""Pydantic schemas for request and response bodies."""

from adminpanel.schemas.common import CamelSchema, ErrorResponse, MessageResponse
from adminpanel.schemas.settings import SettingsRecord, SettingsUpdateRequest, SmtpTestRequest

__all__ = [
    "CamelSchema",
    "ErrorResponse",
    "MessageResponse",
    "SettingsRecord",
    "SettingsUpdateRequest",
    "SmtpTestRequest",
]
