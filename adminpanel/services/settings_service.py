"""Persistence for the single settings record.

Two storage variants share one contract:

* ``RelationalSettingsRepository`` keeps one ``app_settings`` row with a JSON
  column per section.
* ``DocumentSettingsRepository`` keeps the whole record as one JSON document
  in ``system_settings`` under a fixed key.

Both key the record on a unique column and create it with an
insert-if-absent, so concurrent first requests converge on the same row.

Updates use a field-group shallow merge: every section present in the
update has its keys merged over the stored section, sections not mentioned
are left untouched. Concurrent writers are not coordinated, the last write
wins.
"""

import logging
from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from adminpanel.config import get_settings
from adminpanel.models import AppSettings, SystemSettings, default_settings_document
from adminpanel.models.app_settings import GLOBAL_SCOPE, SECTIONS
from adminpanel.schemas.settings import SettingsRecord

logger = logging.getLogger(__name__)

SETTINGS_DOCUMENT_KEY = "app_settings"

# Dialects with INSERT ... ON CONFLICT DO NOTHING
UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


def merge_sections(
    document: dict[str, dict[str, Any]],
    partial: dict[str, dict[str, Any] | None],
) -> dict[str, dict[str, Any]]:
    """Shallow-merge the sections of ``partial`` into ``document``.

    Returns a new document; neither argument is modified. Keys outside the
    known sections and sections that are not objects are ignored.
    """
    merged = {name: dict(document.get(name) or {}) for name in SECTIONS}
    for name in SECTIONS:
        incoming = partial.get(name)
        if isinstance(incoming, dict):
            merged[name] = {**merged[name], **incoming}
    return merged


class SettingsRepository:
    """Find-or-create access to the settings record over one session.

    Subclasses name the mapped model and the unique column (and its fixed
    value) that identifies the single record.
    """

    model: type
    key_column: str
    key_value: str

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self) -> SettingsRecord | None:
        """Get the settings record without creating it."""
        row = await self._find_row()
        if row is None:
            return None
        return self._to_record(row)

    async def get_or_create(self) -> SettingsRecord:
        """Get the settings record, creating it with defaults if missing."""
        row = await self._find_row()
        if row is None:
            row = await self._create_row()
        return self._to_record(row)

    async def update(self, partial: dict[str, dict[str, Any] | None]) -> SettingsRecord:
        """Apply a partial update and return the resulting record."""
        row = await self._find_row()
        if row is None:
            row = await self._create_row()

        document = merge_sections(self._read_document(row), partial)
        self._write_document(row, document)
        await self.db.flush()
        await self.db.refresh(row)

        updated = sorted(name for name in SECTIONS if isinstance(partial.get(name), dict))
        logger.info(f"Settings updated: {', '.join(updated) or 'no sections'}")
        return self._to_record(row)

    async def _find_row(self):
        key = getattr(self.model, self.key_column)
        result = await self.db.execute(select(self.model).where(key == self.key_value))
        return result.scalar_one_or_none()

    async def _create_row(self):
        """Insert the default record unless another request already did, then load it."""
        values = self._new_row_values(default_settings_document())
        dialect = self.db.get_bind().dialect.name
        dialect_insert = UPSERT_INSERTS.get(dialect)

        if dialect_insert is not None:
            stmt = (
                dialect_insert(self.model.__table__)
                .values(**values)
                .on_conflict_do_nothing(index_elements=[self.key_column])
            )
            result = await self.db.execute(stmt)
            created = result.rowcount == 1
        else:
            try:
                async with self.db.begin_nested():
                    await self.db.execute(insert(self.model.__table__).values(**values))
                created = True
            except IntegrityError:
                created = False

        if created:
            logger.info(f"Settings record created ({type(self).__name__})")
        else:
            logger.debug("Settings record created concurrently, loading it")
        return await self._find_row()

    def _to_record(self, row) -> SettingsRecord:
        return SettingsRecord(
            id=row.id,
            created_at=row.created_at,
            updated_at=row.updated_at,
            **self._read_document(row),
        )

    def _new_row_values(self, document: dict[str, dict[str, Any]]) -> dict[str, Any]:
        raise NotImplementedError

    def _read_document(self, row) -> dict[str, dict[str, Any]]:
        raise NotImplementedError

    def _write_document(self, row, document: dict[str, dict[str, Any]]) -> None:
        raise NotImplementedError


class RelationalSettingsRepository(SettingsRepository):
    """Settings stored as one ``app_settings`` row."""

    model = AppSettings
    key_column = "scope"
    key_value = GLOBAL_SCOPE

    def _new_row_values(self, document: dict[str, dict[str, Any]]) -> dict[str, Any]:
        return {"scope": GLOBAL_SCOPE, **document}

    def _read_document(self, row: AppSettings) -> dict[str, dict[str, Any]]:
        return {name: dict(getattr(row, name) or {}) for name in SECTIONS}

    def _write_document(self, row: AppSettings, document: dict[str, dict[str, Any]]) -> None:
        # Assign fresh dicts so the JSON columns are flagged as changed
        for name in SECTIONS:
            setattr(row, name, dict(document[name]))


class DocumentSettingsRepository(SettingsRepository):
    """Settings stored as one JSON document in ``system_settings``."""

    model = SystemSettings
    key_column = "key"
    key_value = SETTINGS_DOCUMENT_KEY

    def _new_row_values(self, document: dict[str, dict[str, Any]]) -> dict[str, Any]:
        return {"key": SETTINGS_DOCUMENT_KEY, "value": document}

    def _read_document(self, row: SystemSettings) -> dict[str, dict[str, Any]]:
        value = row.value or {}
        return {name: dict(value.get(name) or {}) for name in SECTIONS}

    def _write_document(self, row: SystemSettings, document: dict[str, dict[str, Any]]) -> None:
        row.value = {name: dict(document[name]) for name in SECTIONS}


REPOSITORIES: dict[str, type[SettingsRepository]] = {
    "relational": RelationalSettingsRepository,
    "document": DocumentSettingsRepository,
}


def get_settings_repository(db: AsyncSession, store: str | None = None) -> SettingsRepository:
    """Get the settings repository for ``store``, defaulting to the configured variant."""
    store = store or get_settings().settings_store
    return REPOSITORIES[store](db)
