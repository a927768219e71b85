"""
Offline layer: cache buckets, request routing and the service worker lifecycle.
"""

from .http_types import FetchRequest, FetchResponse, NetworkError
from .cache_storage import CacheBucket, CacheStorage
from .request_router import CacheConfig, OfflineRequestRouter
from .service_worker import ServiceWorker
from .sync_queue import PendingWriteQueue

__all__ = [
    'FetchRequest',
    'FetchResponse',
    'NetworkError',
    'CacheBucket',
    'CacheStorage',
    'CacheConfig',
    'OfflineRequestRouter',
    'ServiceWorker',
    'PendingWriteQueue',
]
