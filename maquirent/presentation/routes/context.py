"""
Per-request access to the application's stores and caches.
"""

from typing import Any, Dict, Optional

from flask import current_app, request

from maquirent.buisness.core.collection_store import CollectionStore
from maquirent.buisness.core.notifications import NotificationCenter
from maquirent.data.local_storage import LocalStorage
from maquirent.utils.cache import CacheRegistry

DASHBOARD_CACHE_KEY = 'dashboard'


def get_caches() -> CacheRegistry:
    return current_app.extensions['maquirent.caches']


def _invalidate_caches(collection_name: str) -> None:
    caches = get_caches()
    caches.search_cache.clear()
    caches.data_cache.delete(DASHBOARD_CACHE_KEY)


def get_store() -> CollectionStore:
    """Collection store for the current request; writes clear derived caches."""
    return CollectionStore(
        LocalStorage(),
        current_user=current_app.config['CURRENT_USER'],
        on_change=_invalidate_caches,
    )


def get_notifications() -> NotificationCenter:
    return NotificationCenter(LocalStorage())


def json_body() -> Optional[Dict[str, Any]]:
    """The request's JSON object, or None when the body is not a JSON object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None
