"""Record store: the immutable, in-memory sequence of character records.

The store reads its records once from a pluggable read-only ``DataSource``
and shares the resulting tuple between all concurrent invokes.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import jsonschema
from pydantic import ValidationError

from ..core.exceptions import DataSourceError
from ..core.logging import get_logger
from ..schemas.character import CharacterRecord

logger = get_logger(__name__)

# Shape of the character data document
CHARACTERS_DOCUMENT_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "characters": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "actor": {"type": "string"},
                    "realname": {"type": "string"},
                    "image": {"type": ["string", "null"]},
                    "link": {"type": "string"},
                },
                "required": ["name", "actor", "realname", "link"],
            },
        },
    },
    "required": ["characters"],
}


@runtime_checkable
class DataSource(Protocol):
    """A read-only source of the character data document."""

    description: str

    def read(self) -> Any:
        """Return the decoded JSON document. Raise DataSourceError on failure."""
        ...


class JsonFileDataSource:
    """Character document stored as a JSON file on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.description = str(self.path)

    def read(self) -> Any:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise DataSourceError(self.description, "file not found") from e
        except OSError as e:
            raise DataSourceError(self.description, f"unreadable: {e}") from e
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise DataSourceError(
                self.description,
                f"invalid JSON at line {e.lineno} column {e.colno}",
                details={"source": self.description, "reason": e.msg, "line": e.lineno, "column": e.colno},
            ) from e


class InMemoryDataSource:
    """Character document held in memory (embedding, fixtures)."""

    def __init__(self, document: Any, description: str = "<memory>"):
        self._document = document
        self.description = description

    def read(self) -> Any:
        return self._document


def load(source: DataSource) -> tuple[CharacterRecord, ...]:
    """Read and validate every record of ``source``, in document order.

    Raises:
        DataSourceError: If the source cannot be read or any record is malformed.
            A single bad record fails the whole load.
    """
    document = source.read()
    try:
        jsonschema.validate(instance=document, schema=CHARACTERS_DOCUMENT_SCHEMA)
    except jsonschema.ValidationError as e:
        path = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise DataSourceError(
            source.description,
            f"malformed document at {path}: {e.message}",
            details={"source": source.description, "path": path, "reason": e.message},
        ) from e

    try:
        return tuple(CharacterRecord.model_validate(item) for item in document["characters"])
    except ValidationError as e:
        raise DataSourceError(source.description, f"malformed record: {e}") from e


class RecordStore:
    """Lazily loaded, process-wide cache of the character records.

    The first caller loads the source; concurrent first callers wait on the
    same lock and observe that result. Failed loads are not cached, so the
    next call retries, and an already loaded sequence is never replaced.
    """

    def __init__(self, source: DataSource):
        self.source = source
        self._records: tuple[CharacterRecord, ...] | None = None
        self._lock: asyncio.Lock | None = None

    def _get_lock(self) -> asyncio.Lock:
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    @property
    def is_loaded(self) -> bool:
        return self._records is not None

    async def get_records(self) -> tuple[CharacterRecord, ...]:
        """Return the loaded records, loading them on first use."""
        # Fast path - already loaded
        if self._records is not None:
            return self._records

        async with self._get_lock():
            # Double-check after acquiring lock
            if self._records is not None:
                return self._records
            try:
                records = await asyncio.to_thread(load, self.source)
            except DataSourceError as e:
                logger.error(
                    "Character data source failed to load",
                    extra={"source": self.source.description, "error_code": e.error_code, "reason": e.message},
                )
                raise
            self._records = records
            logger.info(
                "Character records loaded",
                extra={"source": self.source.description, "record_count": len(records)},
            )
            return records

    async def preload(self) -> int:
        """Load the records now and return how many there are."""
        return len(await self.get_records())

    def reset(self) -> None:
        """Drop the cached records so the next call reloads the source."""
        self._records = None


_store: RecordStore | None = None


def get_record_store() -> RecordStore:
    """Get the process-wide store backed by the configured data file."""
    global _store  # noqa: PLW0603
    if _store is None:
        from ..core.config import get_settings_instance

        _store = RecordStore(JsonFileDataSource(get_settings_instance().data_file))
    return _store
