"""
Service Worker
Lifecycle and event handling around the offline request router.

Handles:
- install: pre-cache the static manifest, then skip waiting
- activate: delete outdated cache buckets, then claim clients
- fetch: delegate to OfflineRequestRouter
- message: SKIP_WAITING and GET_VERSION
- sync: replay the pending write queue on the background-sync tag
"""

from typing import Any, Dict, List, Optional

from maquirent.buisness.offline.cache_storage import CacheStorage
from maquirent.buisness.offline.http_types import FetchRequest, FetchResponse, Fetcher, NetworkError
from maquirent.buisness.offline.request_router import CacheConfig, OfflineRequestRouter
from maquirent.buisness.offline.sync_queue import PendingWriteQueue
from maquirent.utils.logger import get_logger

logger = get_logger("maquirent.buisness.offline.service_worker")

SYNC_TAG = 'background-sync'


class ServiceWorker:
    """
    One worker instance with its own cache storage.

    States move parsed -> installing -> installed -> activating -> activated.

    Args:
        fetch: Network fetcher shared with the router
        caches: Cache storage (a fresh one by default)
        origin: Base URL for the pre-cache manifest
        config: Bucket names and routing tables
        queue: Pending writes replayed by background sync
    """

    def __init__(self, fetch: Fetcher, caches: Optional[CacheStorage] = None,
                 origin: str = 'http://localhost:8080', config: CacheConfig = CacheConfig(),
                 queue: Optional[PendingWriteQueue] = None):
        self.caches = caches if caches is not None else CacheStorage()
        self.config = config
        self.queue = queue if queue is not None else PendingWriteQueue()
        self.router = OfflineRequestRouter(self.caches, fetch, origin=origin, config=config)
        self.state = 'parsed'
        self.waiting_skipped = False
        self.clients_claimed = False

    @property
    def version(self) -> str:
        return self.config.cache_name

    def install(self) -> bool:
        """
        Pre-cache the static manifest. A failed manifest fetch is logged
        and leaves the static bucket untouched.

        Returns:
            bool: True when the manifest was cached and waiting was skipped
        """
        logger.info("Service worker installing")
        self.state = 'installing'
        try:
            bucket = self.caches.open(self.config.static_cache_name)
            logger.debug("Caching static files")
            bucket.add_all([self.router.resolve(path) for path in self.config.static_files], self.router.fetch)
        except NetworkError as e:
            logger.error(f"Service worker installation failed: {e}")
            self.state = 'installed'
            return False

        self.state = 'installed'
        logger.info("Service worker installed")
        self.skip_waiting()
        return True

    def skip_waiting(self) -> None:
        self.waiting_skipped = True

    def activate(self) -> List[str]:
        """
        Delete every bucket that is not the current static or dynamic one.

        Returns:
            list: Names of the deleted buckets
        """
        logger.info("Service worker activating")
        self.state = 'activating'
        deleted = []
        for cache_name in self.caches.keys():
            if cache_name not in self.config.current_caches:
                logger.info(f"Deleting old cache {cache_name}")
                self.caches.delete(cache_name)
                deleted.append(cache_name)

        self.state = 'activated'
        self.claim_clients()
        logger.info("Service worker activated")
        return deleted

    def claim_clients(self) -> None:
        self.clients_claimed = True

    def fetch(self, request: FetchRequest) -> FetchResponse:
        return self.router.handle_fetch(request)

    def on_message(self, data: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """
        Handle a client message.

        Returns:
            dict: The reply for GET_VERSION, otherwise None
        """
        if not data:
            return None
        message_type = data.get('type')
        if message_type == 'SKIP_WAITING':
            self.skip_waiting()
            return None
        if message_type == 'GET_VERSION':
            return {'version': self.version}
        logger.debug(f"Ignoring unknown message type {message_type!r}")
        return None

    def on_sync(self, tag: str) -> int:
        logger.info(f"Background sync {tag}")
        if tag != SYNC_TAG:
            return 0
        return self.sync_offline_data()

    def sync_offline_data(self) -> int:
        """
        Replay queued writes. An entry is removed once the network
        answers, whatever the status; entries whose fetch fails stay queued.

        Returns:
            int: Number of entries replayed and removed
        """
        synced = 0
        for entry in self.queue.pending():
            request = FetchRequest(
                url=entry['url'],
                method=entry['method'],
                headers=entry['headers'],
                body=entry['body'],
            )
            try:
                self.router.fetch(request)
            except NetworkError as e:
                logger.error(f"Error syncing data for {entry['url']}: {e}")
                continue
            self.queue.remove(entry['id'])
            synced += 1
        return synced
