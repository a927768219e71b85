"""
Key/value storage backed by the storage_slots table.

Values are stored as JSON. datetime/date values are written as ISO-8601
strings and come back as strings; callers parse them where they need
date arithmetic (see maquirent.buisness.core.dates).
"""

import json
from datetime import date, datetime
from typing import Any, List, Optional

from maquirent import db
from maquirent.data.storage_slot import StorageSlot
from maquirent.utils.logger import get_logger

logger = get_logger("maquirent.data.local_storage")


def _json_default(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps(value: Any) -> str:
    return json.dumps(value, default=_json_default, ensure_ascii=False)


class LocalStorage:
    """
    Slot-per-key JSON storage.

    Every write commits immediately; concurrent writers to the same key
    simply overwrite each other.

    Args:
        session: SQLAlchemy session (defaults to db.session)
    """

    def __init__(self, session=None):
        self._session = session or db.session

    def get_item(self, key: str, default: Any = None) -> Any:
        slot = self._session.get(StorageSlot, key)
        if slot is None:
            return default
        try:
            return json.loads(slot.value)
        except ValueError:
            logger.error(f"Corrupt JSON in storage slot '{key}', using default")
            return default

    def set_item(self, key: str, value: Any) -> None:
        payload = dumps(value)
        slot = self._session.get(StorageSlot, key)
        if slot is None:
            slot = StorageSlot(key=key, value=payload)
            self._session.add(slot)
        else:
            slot.value = payload
        self._session.commit()

    def remove_item(self, key: str) -> bool:
        slot = self._session.get(StorageSlot, key)
        if slot is None:
            return False
        self._session.delete(slot)
        self._session.commit()
        return True

    def keys(self) -> List[str]:
        return [slot.key for slot in self._session.query(StorageSlot).order_by(StorageSlot.key).all()]

    def clear(self, keys: Optional[List[str]] = None) -> int:
        """Remove the given keys, or every key when none are given."""
        query = self._session.query(StorageSlot)
        if keys is not None:
            query = query.filter(StorageSlot.key.in_(keys))
        removed = query.delete(synchronize_session=False)
        self._session.commit()
        return removed
