"""
Test the service worker lifecycle, client messages and background sync.
"""

from maquirent.buisness.offline.cache_storage import CacheStorage
from maquirent.buisness.offline.http_types import FetchRequest, FetchResponse, NetworkError
from maquirent.buisness.offline.request_router import STATIC_FILES
from maquirent.buisness.offline.service_worker import ServiceWorker
from maquirent.buisness.offline.sync_queue import PendingWriteQueue

ORIGIN = 'http://localhost:8080'


def static_site():
    """Fetcher that answers 200 for every URL and records what was requested"""
    calls = []

    def fetch(request):
        calls.append((request.method, request.url))
        return FetchResponse(body=f'body of {request.url}'.encode('utf-8'), url=request.url)

    fetch.calls = calls
    return fetch


def offline(request):
    raise NetworkError('offline')


def test_install_precaches_manifest_and_skips_waiting():
    worker = ServiceWorker(static_site(), origin=ORIGIN)
    assert worker.install() is True

    bucket = worker.caches.open('maquirent-static-v1.0.0')
    assert len(bucket) == len(STATIC_FILES)
    assert f'{ORIGIN}/manifest.json' in bucket.keys()
    assert worker.waiting_skipped
    assert worker.state == 'installed'


def test_install_failure_caches_nothing():
    def partly_broken(request):
        if request.url.endswith('icon-512x512.png'):
            return FetchResponse(status=404, url=request.url)
        return FetchResponse(body=b'ok', url=request.url)

    worker = ServiceWorker(partly_broken, origin=ORIGIN)
    assert worker.install() is False
    assert len(worker.caches.open('maquirent-static-v1.0.0')) == 0, "Pre-caching is all or nothing"
    assert not worker.waiting_skipped


def test_activate_deletes_outdated_buckets():
    caches = CacheStorage()
    caches.open('maquirent-static-v0.9.0')
    caches.open('maquirent-dynamic-v0.9.0')
    caches.open('maquirent-static-v1.0.0')
    caches.open('maquirent-dynamic-v1.0.0')

    worker = ServiceWorker(static_site(), caches=caches, origin=ORIGIN)
    deleted = worker.activate()

    assert sorted(deleted) == ['maquirent-dynamic-v0.9.0', 'maquirent-static-v0.9.0']
    assert sorted(caches.keys()) == ['maquirent-dynamic-v1.0.0', 'maquirent-static-v1.0.0']
    assert worker.clients_claimed
    assert worker.state == 'activated'


def test_fetch_uses_precached_shell_when_offline():
    caches = CacheStorage()
    ServiceWorker(static_site(), caches=caches, origin=ORIGIN).install()

    worker = ServiceWorker(offline, caches=caches, origin=ORIGIN)
    response = worker.fetch(FetchRequest(url=f'{ORIGIN}/maquinaria', mode='navigate'))
    assert response.body == f'body of {ORIGIN}/index.html'.encode('utf-8')


def test_messages():
    worker = ServiceWorker(static_site(), origin=ORIGIN)
    assert worker.on_message({'type': 'GET_VERSION'}) == {'version': 'maquirent-v1.0.0'}

    assert worker.on_message({'type': 'SKIP_WAITING'}) is None
    assert worker.waiting_skipped

    assert worker.on_message({'type': 'UNKNOWN'}) is None
    assert worker.on_message(None) is None


def test_background_sync_replays_queue():
    fetch = static_site()
    queue = PendingWriteQueue()
    queue.enqueue(f'{ORIGIN}/api/rentals', 'POST', {'Content-Type': 'application/json'}, b'{"clientName": "Ana"}')
    queue.enqueue(f'{ORIGIN}/api/fuel', 'POST', body=b'{}')

    worker = ServiceWorker(fetch, origin=ORIGIN, queue=queue)
    assert worker.on_sync('background-sync') == 2
    assert len(queue) == 0
    assert fetch.calls == [('POST', f'{ORIGIN}/api/rentals'), ('POST', f'{ORIGIN}/api/fuel')]


def test_background_sync_keeps_entries_when_offline():
    queue = PendingWriteQueue()
    queue.enqueue(f'{ORIGIN}/api/rentals', 'POST', body=b'{}')

    worker = ServiceWorker(offline, origin=ORIGIN, queue=queue)
    assert worker.on_sync('background-sync') == 0
    assert len(queue) == 1


def test_other_sync_tags_are_ignored():
    queue = PendingWriteQueue()
    queue.enqueue(f'{ORIGIN}/api/rentals', 'POST', body=b'{}')
    worker = ServiceWorker(static_site(), origin=ORIGIN, queue=queue)
    assert worker.on_sync('periodic-refresh') == 0
    assert len(queue) == 1


def test_empty_queue_syncs_nothing():
    worker = ServiceWorker(static_site(), origin=ORIGIN)
    assert worker.sync_offline_data() == 0


def test_queue_remove():
    queue = PendingWriteQueue()
    entry_id = queue.enqueue(f'{ORIGIN}/api/tools', body=b'{}')
    assert queue.pending()[0]['method'] == 'POST'
    assert queue.remove(entry_id)
    assert not queue.remove(entry_id)
