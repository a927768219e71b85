"""
Request/response values exchanged between the offline router, its cache
buckets and the network fetcher.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlsplit, urlunsplit


class NetworkError(Exception):
    """The network could not produce a response (offline, DNS, refused, timeout)."""


@dataclass
class FetchRequest:
    """
    An outgoing request as seen by the router.

    destination mirrors the browser's request destination ('image',
    'style', 'script', 'document' or ''); mode is 'navigate' for page
    navigations.
    """
    url: str
    method: str = 'GET'
    destination: str = ''
    mode: str = 'cors'
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None

    @property
    def scheme(self) -> str:
        return urlsplit(self.url).scheme.lower()

    @property
    def is_http(self) -> bool:
        return self.scheme in ('http', 'https')

    @property
    def path(self) -> str:
        return urlsplit(self.url).path or '/'

    @property
    def cache_key(self) -> str:
        """URL without its fragment, which is how cached entries are matched."""
        parts = urlsplit(self.url)
        return urlunsplit((parts.scheme, parts.netloc, parts.path or '/', parts.query, ''))


@dataclass
class FetchResponse:
    status: int = 200
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b''
    url: str = ''

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        return self.body.decode('utf-8')

    def json(self) -> Any:
        return json.loads(self.text)

    def clone(self) -> 'FetchResponse':
        return replace(self, headers=dict(self.headers))


# A fetcher performs one network round trip or raises NetworkError
Fetcher = Callable[[FetchRequest], FetchResponse]
