"""Custom exception classes and global exception handlers."""

import logging
import traceback

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AdminPanelException(Exception):
    """Base exception for all admin panel errors."""

    def __init__(self, message: str, status_code: int = 400, error: str | None = None):
        self.message = message
        self.status_code = status_code
        self.error = error
        super().__init__(self.message)


class BadRequestException(AdminPanelException):
    """Client input error."""

    def __init__(self, message: str):
        super().__init__(message, 400)


class IncompleteSmtpConfigException(AdminPanelException):
    """Stored SMTP settings lack host, port, user or password."""

    def __init__(self, message: str = "SMTP settings are incomplete. Save SMTP settings first."):
        super().__init__(message, 400)


class ServerErrorException(AdminPanelException):
    """Storage or other server-side failure, reported with the raw error text."""

    def __init__(self, error: str, message: str = "Server error"):
        super().__init__(message, 500, error)


class MailDeliveryException(ServerErrorException):
    """Sending through the SMTP relay failed."""

    def __init__(self, error: str):
        super().__init__(error, message="Failed to send test email")


def create_exception_handlers():
    """Create the exception handlers registered on the application."""

    async def admin_panel_exception_handler(request: Request, exc: AdminPanelException):
        """Handle admin panel exceptions."""
        logger.warning(f"AdminPanelException on {request.method} {request.url.path}: {exc.message} (status={exc.status_code})")

        content = {"message": exc.message}
        if exc.error is not None:
            content["error"] = exc.error
        return JSONResponse(status_code=exc.status_code, content=content)

    async def generic_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(f"Unhandled exception on {request.method} {request.url.path}")
        tb_lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
        logger.error("".join(tb_lines))

        return JSONResponse(
            status_code=500,
            content={"message": "Server error", "error": str(exc)},
        )

    return {
        AdminPanelException: admin_panel_exception_handler,
        Exception: generic_exception_handler,
    }
