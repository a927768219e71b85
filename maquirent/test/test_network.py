"""
Test the requests-backed network fetcher.
"""

import pytest
import requests

from maquirent.buisness.offline.http_types import FetchRequest, NetworkError
from maquirent.buisness.offline.network import RequestsFetcher


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def _response(status, body, url):
    response = requests.Response()
    response.status_code = status
    response._content = body
    response.url = url
    response.headers['Content-Type'] = 'application/json'
    return response


def test_response_is_converted():
    url = 'http://localhost:8080/api/tools'
    session = FakeSession(_response(200, b'[]', url))
    fetch = RequestsFetcher(session=session, timeout=5)

    result = fetch(FetchRequest(url=url, headers={'Accept': 'application/json'}))
    assert result.status == 200
    assert result.json() == []
    assert result.headers['Content-Type'] == 'application/json'
    method, called_url, kwargs = session.calls[0]
    assert (method, called_url) == ('GET', url)
    assert kwargs['timeout'] == 5


def test_http_errors_are_responses():
    url = 'http://localhost:8080/api/tools/x'
    fetch = RequestsFetcher(session=FakeSession(_response(500, b'{}', url)))
    assert fetch(FetchRequest(url=url)).status == 500


def test_connection_errors_raise_network_error():
    fetch = RequestsFetcher(session=FakeSession(error=requests.exceptions.ConnectionError('refused')))
    with pytest.raises(NetworkError):
        fetch(FetchRequest(url='http://localhost:8080/api/tools'))
