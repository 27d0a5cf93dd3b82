# nightpay/core/storage.py
"""
Data loading and persistence layer for the compensation config and the two record maps.
"""

import datetime
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from nightpay.core.config import COMPENSATION_CONFIG_PATH
from nightpay.core.constants import STORAGE_KEY_RECORDED_SHIFTS, STORAGE_KEY_WEEKEND_ENTRIES
from nightpay.core.models import CompensationConfig, WeekendShiftEntry
from nightpay.core.sentry_config import capture_exception
from nightpay.core.types import RecordedShifts, WeekendEntries

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """General error type for problems loading data files."""

    pass


def _load_json(file_path: Path) -> list[Any] | dict[str, Any]:
    """
    Read and parse JSON with robust error handling.
    Args:
        file_path: Path to the JSON file
    Returns:
        Parsed JSON data as list or dict
    Raises:
        StorageError: If file cannot be read or JSON is invalid
    """
    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.exception("Failed to read JSON file %s", file_path)
        raise StorageError(f"Could not read JSON file {file_path}: {e}") from e

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.exception("Invalid JSON in file %s", file_path)
        raise StorageError(f"Invalid JSON in file {file_path}: {e}") from e


def load_compensation_config(path: str | Path | None = None) -> CompensationConfig:
    """
    Load the compensation config, overriding defaults from an optional JSON file.

    Args:
        path: JSON file with a subset of CompensationConfig fields. Defaults to
            the COMPENSATION_CONFIG environment variable; no file means defaults.
    Returns:
        Immutable compensation config
    Raises:
        StorageError: If the file cannot be loaded or parsed
    """
    path = path or COMPENSATION_CONFIG_PATH
    if not path:
        return CompensationConfig()

    file_path = Path(path)
    data = _load_json(file_path)
    try:
        if not isinstance(data, dict):
            raise TypeError("Expected compensation config dict")
        compensation = CompensationConfig(**data)
    except (TypeError, ValidationError) as e:
        logger.exception("Failed to parse compensation config from %s", file_path)
        raise StorageError(f"Could not parse compensation config from {file_path}: {e}") from e

    logger.info("Loaded compensation config from %s", file_path)
    return compensation


class EarningsRepository:
    """
    Best-effort key-value store for recorded weekday shifts and weekend entries.

    Malformed or unreadable data loads as an empty map. Failed writes are
    logged and otherwise ignored; the engine keeps its in-memory state.
    """

    def __init__(self, session_factory):
        self.session_factory = session_factory

    # === Record maps ===

    def load_recorded_shifts(self) -> RecordedShifts:
        data = self._load(STORAGE_KEY_RECORDED_SHIFTS)
        if data is None:
            return {}
        try:
            if not isinstance(data, dict):
                raise TypeError("Expected dict of recorded shifts")
            return {datetime.date.fromisoformat(key): float(value) for key, value in data.items()}
        except (TypeError, ValueError) as e:
            logger.warning("Ignoring malformed recorded shifts: %s", e)
            return {}

    def save_recorded_shifts(self, recorded: RecordedShifts) -> None:
        self._save(
            STORAGE_KEY_RECORDED_SHIFTS,
            {day.isoformat(): total for day, total in sorted(recorded.items())},
        )

    def load_weekend_entries(self) -> WeekendEntries:
        data = self._load(STORAGE_KEY_WEEKEND_ENTRIES)
        if data is None:
            return {}
        try:
            if not isinstance(data, dict):
                raise TypeError("Expected dict of weekend entries")
            return {datetime.date.fromisoformat(key): WeekendShiftEntry(**value) for key, value in data.items()}
        except (TypeError, ValueError, ValidationError) as e:
            logger.warning("Ignoring malformed weekend entries: %s", e)
            return {}

    def save_weekend_entries(self, entries: WeekendEntries) -> None:
        self._save(
            STORAGE_KEY_WEEKEND_ENTRIES,
            {day.isoformat(): entry.model_dump(mode="json") for day, entry in sorted(entries.items())},
        )

    # === Private helpers ===

    def _load(self, key: str) -> Any:
        from nightpay.database.database import StoredValue

        session = self.session_factory()
        try:
            record = session.get(StoredValue, key)
            return record.value if record else None
        except SQLAlchemyError:
            logger.exception("Failed to load %s, falling back to empty state", key)
            return None
        finally:
            session.close()

    def _save(self, key: str, value: Any) -> None:
        from nightpay.database.database import StoredValue

        session = self.session_factory()
        try:
            record = session.get(StoredValue, key)
            if record is None:
                session.add(StoredValue(key=key, value=value))
            else:
                record.value = value
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.exception("Failed to save %s, keeping in-memory state only", key)
            capture_exception(e, context={"storage": {"key": key}})
        finally:
            session.close()
