"""
Database build and reset for MaquiRent
"""

from maquirent import db
from maquirent.data.collections import INITIAL_DATA, COLLECTIONS_BY_NAME, NOTIFICATIONS_KEY
from maquirent.data.local_storage import LocalStorage
from maquirent.utils.logger import get_logger

logger = get_logger("maquirent.build")


def build_database(app, seed=True):
    """
    Create the storage tables and, unless seed is False, write the initial
    collections into slots that have never been written.

    Returns:
        list: Storage keys that were seeded
    """
    seeded = []
    with app.app_context():
        from maquirent.data.storage_slot import StorageSlot  # noqa: F401

        db.create_all()
        logger.info("Storage tables created")

        if not seed:
            return seeded

        storage = LocalStorage()
        existing = set(storage.keys())
        for name, records in INITIAL_DATA.items():
            key = COLLECTIONS_BY_NAME[name].storage_key
            if key in existing:
                continue
            storage.set_item(key, [dict(record) for record in records])
            seeded.append(key)
            logger.info(f"Seeded '{key}' with {len(records)} records")

    return seeded


def clear_data(app):
    """
    Remove every collection and the notifications slot.

    Returns:
        int: Number of storage slots removed
    """
    from maquirent.buisness.core.collection_store import CollectionStore

    with app.app_context():
        storage = LocalStorage()
        removed = CollectionStore(storage).clear_all_data()
        if storage.remove_item(NOTIFICATIONS_KEY):
            removed += 1
    logger.warning(f"Cleared {removed} storage slots")
    return removed
