"""
Pytest configuration and fixtures for MaquiRent tests
"""
import os
import tempfile

# Keep test logs out of the working tree; read when the root logger is first created
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='maquirent-logs-'))

import pytest  # noqa: E402

from maquirent import create_app  # noqa: E402
from maquirent import db as _db  # noqa: E402
from maquirent.buisness.core.collection_store import CollectionStore  # noqa: E402
from maquirent.data.local_storage import LocalStorage  # noqa: E402
from maquirent.data.storage_slot import StorageSlot  # noqa: E402

INDEX_HTML = '<!doctype html><html><body><div id="root"></div></body></html>'


@pytest.fixture(scope='session')
def app(tmp_path_factory):
    """Create Flask application for testing, backed by a temporary SQLite file"""
    base_dir = tmp_path_factory.mktemp('maquirent')
    build_dir = base_dir / 'dist'
    (build_dir / 'assets').mkdir(parents=True)
    (build_dir / 'index.html').write_text(INDEX_HTML, encoding='utf-8')
    (build_dir / 'assets' / 'app.js').write_text('console.log("maquirent");', encoding='utf-8')

    app = create_app({
        'TESTING': True,
        'APP_ENV': 'test',
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{base_dir / 'test.db'}",
        'STATIC_BUILD_DIR': str(build_dir),
        'RATELIMIT_ENABLED': False,
    })

    with app.app_context():
        yield app


@pytest.fixture(autouse=True)
def reset_storage(app):
    """Every test starts with empty storage and empty caches"""
    _db.session.query(StorageSlot).delete()
    _db.session.commit()
    for cache in app.extensions['maquirent.caches'].all():
        cache.clear()
    yield
    _db.session.rollback()


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def storage(app):
    return LocalStorage()


@pytest.fixture(scope='function')
def store(storage):
    return CollectionStore(storage)


def machinery_payload(**overrides):
    """A machinery record that passes the machinery schema"""
    payload = {
        'name': 'Excavadora CAT 320',
        'category': 'excavadora',
        'brand': 'Caterpillar',
        'model': '320D',
        'serialNumber': 'CAT320D001',
        'year': 2020,
        'hourmeter': 1500,
        'warehouseId': '1',
        'status': 'disponible',
        'purchasePrice': 250000,
        'currentValue': 180000,
    }
    payload.update(overrides)
    return payload
