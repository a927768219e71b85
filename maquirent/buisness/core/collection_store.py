"""
Collection Store
Generic add/update/delete over the named entity collections.

Handles:
- Id generation and audit stamping (createdAt/By, updatedAt/By)
- Collection-specific defaults (financial records, alerts)
- Alert resolution
- Clearing every collection
- Warehouse id -> warehouse lookup
"""

import random
import string
import time
from typing import Any, Callable, Dict, List, Optional

from maquirent.buisness.core.dates import isoformat_z, utcnow
from maquirent.data.collections import COLLECTIONS, INITIAL_DATA, CollectionSpec, get_collection
from maquirent.data.local_storage import LocalStorage
from maquirent.utils.logger import get_logger

logger = get_logger("maquirent.buisness.core.collection_store")

DEFAULT_USER = 'current-user'
SYSTEM_USER = 'system'

# Set once by add(); update() never overwrites them
PROTECTED_FIELDS = frozenset({'id', 'createdAt', 'createdBy'})

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_id() -> str:
    """Millisecond timestamp followed by nine random base-36 characters."""
    suffix = ''.join(random.choice(_ID_ALPHABET) for _ in range(9))
    return f"{int(time.time() * 1000)}{suffix}"


class CollectionStore:
    """
    Entity collections persisted in LocalStorage, one slot per collection.

    Every write reads the whole collection, changes it and writes it back,
    so the last writer wins.

    Args:
        storage: LocalStorage instance
        current_user: Name stamped into createdBy/updatedBy
        on_change: Called with the collection name after every write
    """

    def __init__(
        self,
        storage: LocalStorage,
        current_user: str = DEFAULT_USER,
        on_change: Optional[Callable[[str], None]] = None,
    ):
        self.storage = storage
        self.current_user = current_user
        self.on_change = on_change

    def _spec(self, name: str) -> CollectionSpec:
        spec = get_collection(name)
        if spec is None:
            raise ValueError(f"Unknown collection: {name}")
        return spec

    def _write(self, name: str, records: List[Dict[str, Any]]) -> None:
        spec = self._spec(name)
        self.storage.set_item(spec.storage_key, records)
        if self.on_change:
            self.on_change(spec.name)

    def list(self, name: str) -> List[Dict[str, Any]]:
        spec = self._spec(name)
        default = [dict(record) for record in INITIAL_DATA.get(spec.name, [])]
        records = self.storage.get_item(spec.storage_key, default)
        return records if isinstance(records, list) else default

    def get(self, name: str, record_id: str) -> Optional[Dict[str, Any]]:
        for record in self.list(name):
            if record.get('id') == record_id:
                return record
        return None

    def add(self, name: str, data: Dict[str, Any]) -> Dict[str, Any]:
        spec = self._spec(name)

        record = dict(data)
        if spec.name == 'financialRecords':
            record['currency'] = 'PEN'
            record['status'] = 'pagado'
        if spec.name == 'alerts':
            record['resolved'] = False
            record['autoGenerated'] = False

        record['id'] = generate_id()
        record['createdAt'] = isoformat_z(utcnow())
        record['createdBy'] = SYSTEM_USER if spec.name == 'alerts' else self.current_user

        records = self.list(name)
        records.append(record)
        self._write(name, records)
        logger.info(f"Added {spec.name} record {record['id']}")
        return record

    def update(self, name: str, record_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Merge data into the record with record_id.

        Returns:
            The updated record, or None when no record has that id
        """
        spec = self._spec(name)
        changes = {key: value for key, value in data.items() if key not in PROTECTED_FIELDS}
        records = self.list(name)
        updated = None
        for index, record in enumerate(records):
            if record.get('id') != record_id:
                continue
            merged = {**record, **changes}
            if spec.name != 'alerts':
                merged['updatedAt'] = isoformat_z(utcnow())
                merged['updatedBy'] = self.current_user
            records[index] = merged
            updated = merged

        if updated is None:
            logger.debug(f"Update skipped, {spec.name} record {record_id} not found")
            return None

        self._write(name, records)
        logger.info(f"Updated {spec.name} record {record_id}")
        return updated

    def delete(self, name: str, record_id: str) -> bool:
        records = self.list(name)
        remaining = [record for record in records if record.get('id') != record_id]
        if len(remaining) == len(records):
            return False
        self._write(name, remaining)
        logger.info(f"Deleted {name} record {record_id}")
        return True

    def resolve_alert(self, alert_id: str, resolution_notes: Optional[str] = None) -> Optional[Dict[str, Any]]:
        return self.update('alerts', alert_id, {
            'resolved': True,
            'resolvedAt': isoformat_z(utcnow()),
            'resolvedBy': self.current_user,
            'resolutionNotes': resolution_notes,
        })

    def clear_all_data(self) -> int:
        """Remove every entity collection slot. Notifications are kept."""
        removed = self.storage.clear([spec.storage_key for spec in COLLECTIONS])
        if self.on_change:
            self.on_change('*')
        logger.warning(f"Cleared all collection data ({removed} slots removed)")
        return removed

    def warehouse_map(self) -> Dict[str, Dict[str, Any]]:
        return {warehouse['id']: warehouse for warehouse in self.list('warehouses') if 'id' in warehouse}

    def snapshot(self) -> Dict[str, List[Dict[str, Any]]]:
        """Every collection keyed by its store name."""
        return {spec.name: self.list(spec.name) for spec in COLLECTIONS}
