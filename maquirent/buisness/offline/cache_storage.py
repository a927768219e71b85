"""
Named cache buckets holding responses keyed by request URL.

CacheStorage.match() looks through every bucket in the order they were
opened and returns a copy of the first hit.
"""

from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Union

from maquirent.buisness.offline.http_types import FetchRequest, FetchResponse, Fetcher, NetworkError
from maquirent.utils.logger import get_logger

logger = get_logger("maquirent.buisness.offline.cache_storage")

RequestLike = Union[FetchRequest, str]


def _as_request(request: RequestLike) -> FetchRequest:
    return request if isinstance(request, FetchRequest) else FetchRequest(url=request)


class CacheBucket:

    def __init__(self, name: str):
        self.name = name
        self._entries: "OrderedDict[str, FetchResponse]" = OrderedDict()

    def match(self, request: RequestLike) -> Optional[FetchResponse]:
        request = _as_request(request)
        if request.method.upper() != 'GET':
            return None
        response = self._entries.get(request.cache_key)
        return response.clone() if response is not None else None

    def put(self, request: RequestLike, response: FetchResponse) -> None:
        """
        Store a copy of response under the request URL.

        Raises:
            ValueError: For non-GET requests, which cannot be cached
        """
        request = _as_request(request)
        if request.method.upper() != 'GET':
            raise ValueError(f"Cannot cache {request.method} request for {request.url}")
        self._entries[request.cache_key] = response.clone()

    def add_all(self, requests: Iterable[RequestLike], fetch: Fetcher) -> None:
        """
        Fetch every request and store all responses, or none of them.

        Raises:
            NetworkError: If any fetch fails or returns a non-OK status
        """
        fetched = []
        for request in requests:
            request = _as_request(request)
            response = fetch(request)
            if not response.ok:
                raise NetworkError(f"Request for {request.url} returned status {response.status}")
            fetched.append((request, response))
        for request, response in fetched:
            self.put(request, response)
        logger.debug(f"Cached {len(fetched)} responses in '{self.name}'")

    def delete(self, request: RequestLike) -> bool:
        return self._entries.pop(_as_request(request).cache_key, None) is not None

    def keys(self) -> List[str]:
        return list(self._entries.keys())

    def __len__(self):
        return len(self._entries)


class CacheStorage:
    """All cache buckets of one origin."""

    def __init__(self):
        self._buckets: Dict[str, CacheBucket] = OrderedDict()

    def open(self, name: str) -> CacheBucket:
        if name not in self._buckets:
            self._buckets[name] = CacheBucket(name)
        return self._buckets[name]

    def has(self, name: str) -> bool:
        return name in self._buckets

    def delete(self, name: str) -> bool:
        return self._buckets.pop(name, None) is not None

    def keys(self) -> List[str]:
        return list(self._buckets.keys())

    def match(self, request: RequestLike) -> Optional[FetchResponse]:
        for bucket in self._buckets.values():
            response = bucket.match(request)
            if response is not None:
                return response
        return None
