"""
Network fetcher backed by a requests session.
"""

from typing import Optional

import requests

from maquirent.buisness.offline.http_types import FetchRequest, FetchResponse, NetworkError
from maquirent.utils.logger import get_logger

logger = get_logger("maquirent.buisness.offline.network")


class RequestsFetcher:
    """
    Callable fetcher for OfflineRequestRouter.

    Connection-level failures (refused, DNS, timeout) raise NetworkError;
    any HTTP status, including 4xx/5xx, is returned as a response.
    """

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 30):
        self.session = session or requests.Session()
        self.timeout = timeout

    def __call__(self, request: FetchRequest) -> FetchResponse:
        try:
            response = self.session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.debug(f"Network request to {request.url} failed: {e}")
            raise NetworkError(str(e)) from e

        return FetchResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.content,
            url=response.url,
        )
