"""SystemSettings model for document-style configuration storage."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from adminpanel.models.base import BaseModel, JSONType


class SystemSettings(BaseModel):
    """Key-value store where each value is a whole JSON document.

    The document storage variant keeps the settings record under a single
    fixed key.
    """

    __tablename__ = "system_settings"

    key: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
    )
    value: Mapped[dict] = mapped_column(
        JSONType,
        nullable=False,
        default=dict,
    )
