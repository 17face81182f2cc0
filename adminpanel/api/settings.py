"""Settings API routes: read, update and SMTP test."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from adminpanel.database import get_db
from adminpanel.exceptions import (
    BadRequestException,
    IncompleteSmtpConfigException,
    MailDeliveryException,
    ServerErrorException,
)
from adminpanel.schemas.common import ErrorResponse, MessageResponse
from adminpanel.schemas.settings import SettingsRecord, SettingsUpdateRequest, SmtpTestRequest
from adminpanel.services.mail_service import get_mail_service, is_smtp_config_complete
from adminpanel.services.settings_service import SettingsRepository, get_settings_repository

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/settings",
    tags=["Settings"],
    responses={500: {"model": ErrorResponse}},
)


async def settings_repository(db: AsyncSession = Depends(get_db)) -> SettingsRepository:
    """Dependency that binds the configured settings repository to the request session."""
    return get_settings_repository(db)


@router.get("", response_model=SettingsRecord)
async def get_settings_record(
    repository: SettingsRepository = Depends(settings_repository),
) -> SettingsRecord:
    """Get the settings record, creating it with defaults on first access."""
    try:
        return await repository.get_or_create()
    except Exception as e:
        raise ServerErrorException(str(e)) from e


@router.put("", response_model=SettingsRecord)
async def update_settings_record(
    request: SettingsUpdateRequest | None = None,
    repository: SettingsRepository = Depends(settings_repository),
) -> SettingsRecord:
    """Merge the provided sections into the settings record."""
    partial = request.sections() if request else {}
    try:
        return await repository.update(partial)
    except Exception as e:
        raise ServerErrorException(str(e)) from e


@router.post(
    "/test-smtp",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}},
)
async def send_test_email(
    body: SmtpTestRequest | None = None,
    repository: SettingsRepository = Depends(settings_repository),
) -> MessageResponse:
    """Send a test email using the stored SMTP settings."""
    recipient = body.recipient if body else ""
    if not recipient:
        raise BadRequestException("recipientEmail is required")

    try:
        record = await repository.get()
    except Exception as e:
        raise MailDeliveryException(str(e)) from e

    smtp = record.smtp if record else {}
    if not is_smtp_config_complete(smtp):
        raise IncompleteSmtpConfigException()

    try:
        await get_mail_service().send_test_email(smtp, recipient)
    except Exception as e:
        logger.error(f"Failed to send test email to {recipient}: {e}")
        raise MailDeliveryException(str(e)) from e

    return MessageResponse(message="Test email sent successfully!")
