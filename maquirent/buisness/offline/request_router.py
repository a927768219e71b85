"""
Offline Request Router
Decides, per outgoing request, whether to answer from cache or network.

Routing:
- Non-HTTP(S) URLs: straight to the network, never cached
- Pre-cached paths and image/style/script requests: cache first
- API paths (machinery, vehicles, warehouses, tools, spareparts, alerts):
  network first, falling back to the cached copy or a 503 offline payload
- Everything else: network first, falling back to the cached copy or,
  for navigations, the cached app shell
"""

import json
import re
from dataclasses import dataclass, field
from typing import Pattern, Tuple
from urllib.parse import urljoin

from maquirent.buisness.offline.cache_storage import CacheStorage
from maquirent.buisness.offline.http_types import FetchRequest, FetchResponse, Fetcher, NetworkError
from maquirent.utils.logger import get_logger

logger = get_logger("maquirent.buisness.offline.request_router")

CACHE_VERSION = 'v1.0.0'

STATIC_FILES = (
    '/',
    '/index.html',
    '/manifest.json',
    '/icons/icon-192x192.png',
    '/icons/icon-512x512.png',
)

API_CACHE_PATTERNS = (
    re.compile(r'/api/machinery'),
    re.compile(r'/api/vehicles'),
    re.compile(r'/api/warehouses'),
    re.compile(r'/api/tools'),
    re.compile(r'/api/spareparts'),
    re.compile(r'/api/alerts'),
)

CACHE_FIRST_DESTINATIONS = ('image', 'style', 'script')

APP_SHELL = '/index.html'

PLACEHOLDER_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="200" height="200" viewBox="0 0 200 200">'
    '<rect width="200" height="200" fill="#f3f4f6"/>'
    '<text x="100" y="100" text-anchor="middle" dy=".3em" fill="#9ca3af">Sin imagen</text></svg>'
)

OFFLINE_PAYLOAD = {
    'error': 'Sin conexión',
    'message': 'Esta información no está disponible sin conexión a internet',
    'offline': True,
}


@dataclass(frozen=True)
class CacheConfig:
    """Versioned bucket names, the pre-cache manifest and the API patterns."""
    version: str = CACHE_VERSION
    prefix: str = 'maquirent'
    static_files: Tuple[str, ...] = STATIC_FILES
    api_patterns: Tuple[Pattern, ...] = field(default=API_CACHE_PATTERNS)

    @property
    def cache_name(self) -> str:
        return f"{self.prefix}-{self.version}"

    @property
    def static_cache_name(self) -> str:
        return f"{self.prefix}-static-{self.version}"

    @property
    def dynamic_cache_name(self) -> str:
        return f"{self.prefix}-dynamic-{self.version}"

    @property
    def current_caches(self) -> Tuple[str, str]:
        return (self.static_cache_name, self.dynamic_cache_name)


def placeholder_image_response() -> FetchResponse:
    return FetchResponse(
        status=200,
        headers={'Content-Type': 'image/svg+xml'},
        body=PLACEHOLDER_SVG.encode('utf-8'),
    )


def offline_api_response() -> FetchResponse:
    return FetchResponse(
        status=503,
        headers={'Content-Type': 'application/json'},
        body=json.dumps(OFFLINE_PAYLOAD, ensure_ascii=False).encode('utf-8'),
    )


class OfflineRequestRouter:
    """
    Args:
        caches: Cache buckets shared with the service worker lifecycle
        fetch: Network fetcher; must raise NetworkError when offline
        origin: Base URL that relative paths (manifest, app shell) resolve against
        config: Bucket names and routing tables
    """

    def __init__(self, caches: CacheStorage, fetch: Fetcher, origin: str = 'http://localhost:8080',
                 config: CacheConfig = CacheConfig()):
        self.caches = caches
        self.fetch = fetch
        self.origin = origin
        self.config = config

    def resolve(self, path: str) -> str:
        return urljoin(self.origin, path)

    def classify(self, request: FetchRequest) -> str:
        """Return 'passthrough', 'static', 'api' or 'default'."""
        if not request.is_http:
            return 'passthrough'
        if request.path in self.config.static_files or request.destination in CACHE_FIRST_DESTINATIONS:
            return 'static'
        if any(pattern.search(request.url) for pattern in self.config.api_patterns):
            return 'api'
        return 'default'

    def handle_fetch(self, request: FetchRequest) -> FetchResponse:
        """
        Answer a request.

        Raises:
            NetworkError: When the network fails and no cached copy or
                synthesized fallback applies
        """
        route = self.classify(request)
        if route == 'passthrough':
            return self.fetch(request)
        if route == 'static':
            return self._cache_first(request)
        if route == 'api':
            return self._network_first_api(request)
        return self._network_first(request)

    def _store(self, cache_name: str, request: FetchRequest, response: FetchResponse) -> None:
        if response.status == 200 and request.method.upper() == 'GET':
            self.caches.open(cache_name).put(request, response.clone())

    def _cache_first(self, request: FetchRequest) -> FetchResponse:
        cached = self.caches.match(request)
        if cached is not None:
            return cached

        try:
            response = self.fetch(request)
        except NetworkError:
            if request.destination == 'image':
                logger.debug(f"Serving placeholder image for {request.url}")
                return placeholder_image_response()
            raise

        self._store(self.config.static_cache_name, request, response)
        return response

    def _network_first_api(self, request: FetchRequest) -> FetchResponse:
        try:
            response = self.fetch(request)
        except NetworkError:
            cached = self.caches.match(request)
            if cached is not None:
                logger.debug(f"Network down, serving cached API response for {request.url}")
                return cached
            logger.info(f"Network down and no cached copy for {request.url}")
            return offline_api_response()

        self._store(self.config.dynamic_cache_name, request, response)
        return response

    def _network_first(self, request: FetchRequest) -> FetchResponse:
        try:
            return self.fetch(request)
        except NetworkError:
            cached = self.caches.match(request)
            if cached is not None:
                return cached
            if request.mode == 'navigate':
                shell = self.caches.match(self.resolve(APP_SHELL))
                if shell is not None:
                    return shell
            raise
