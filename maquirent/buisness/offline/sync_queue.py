"""
Queue of writes made while offline, replayed by background sync.
"""

import threading
from typing import Any, Dict, List, Optional

from maquirent.buisness.core.collection_store import generate_id


class PendingWriteQueue:
    """
    In-memory FIFO of pending writes.

    Entries are dicts with id, url, method, headers and body. Nothing is
    enqueued automatically; callers decide which offline writes to keep.
    """

    def __init__(self):
        self._entries: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    def enqueue(self, url: str, method: str = 'POST', headers: Optional[Dict[str, str]] = None,
                body: Optional[bytes] = None) -> str:
        entry = {
            'id': generate_id(),
            'url': url,
            'method': method,
            'headers': dict(headers or {}),
            'body': body,
        }
        with self._lock:
            self._entries.append(entry)
        return entry['id']

    def pending(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [dict(entry) for entry in self._entries]

    def remove(self, entry_id: str) -> bool:
        with self._lock:
            before = len(self._entries)
            self._entries = [entry for entry in self._entries if entry['id'] != entry_id]
            return len(self._entries) != before

    def __len__(self):
        with self._lock:
            return len(self._entries)
