"""Settings record Pydantic schemas.

Section fields are all optional: a request may carry any subset of them.
Section contents are passed through as sent, so keys and values are stored
exactly as given and only sections that are JSON objects take part in the
merge.
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import ConfigDict

from adminpanel.models.app_settings import SECTIONS
from adminpanel.schemas.common import CamelSchema


class SettingsUpdateRequest(CamelSchema):
    """Partial or full settings record sent to PUT /settings."""

    model_config = ConfigDict(extra="ignore")

    theme: Any = None
    smtp: Any = None
    gateway: Any = None

    def sections(self) -> dict[str, dict[str, Any]]:
        """Get the sections present in the request that are objects."""
        provided = {}
        for name in SECTIONS:
            section = getattr(self, name)
            if isinstance(section, dict):
                provided[name] = dict(section)
        return provided


class SettingsRecord(CamelSchema):
    """The full settings record as returned by the API."""

    id: uuid.UUID
    theme: dict[str, Any]
    smtp: dict[str, Any]
    gateway: dict[str, Any]
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SmtpTestRequest(CamelSchema):
    """Request body for POST /settings/test-smtp."""

    recipient_email: Any = None

    @property
    def recipient(self) -> str:
        """Get the trimmed recipient address, empty when missing or not a string."""
        if not isinstance(self.recipient_email, str):
            return ""
        return self.recipient_email.strip()
