"""
Test the collection store: seeding, stamping, defaults and alert resolution.
"""

import re

import pytest

from maquirent.buisness.core.collection_store import CollectionStore, generate_id
from maquirent.buisness.core.dates import parse_datetime
from maquirent.data.collections import NOTIFICATIONS_KEY, get_collection


def test_generate_id_format():
    first = generate_id()
    second = generate_id()
    assert re.fullmatch(r'\d{13}[0-9a-z]{9}', first)
    assert first != second


def test_get_collection_by_name_or_route():
    assert get_collection('spareParts').route == 'spareparts'
    assert get_collection('finance').name == 'financialRecords'
    assert get_collection('nothing') is None


def test_warehouses_are_seeded(store):
    warehouses = store.list('warehouses')
    assert [w['id'] for w in warehouses] == ['1']
    assert store.list('machinery') == []


def test_unknown_collection(store):
    with pytest.raises(ValueError):
        store.list('spaceships')
    with pytest.raises(ValueError):
        store.update('spaceships', '1', {})


def test_add_stamps_record(store):
    record = store.add('machinery', {'name': 'Excavadora', 'status': 'disponible'})
    assert record['id']
    assert record['createdBy'] == 'current-user'
    assert parse_datetime(record['createdAt']) is not None
    assert record['createdAt'].endswith('Z')
    assert store.get('machinery', record['id'])['name'] == 'Excavadora'


def test_add_keeps_seed(store):
    store.add('warehouses', {'name': 'Almacén Arequipa', 'address': 'Calle 1', 'city': 'Arequipa'})
    assert len(store.list('warehouses')) == 2


def test_financial_defaults(store):
    record = store.add('financialRecords', {'type': 'ingreso', 'amount': 100, 'currency': 'USD'})
    assert record['currency'] == 'PEN'
    assert record['status'] == 'pagado'


def test_alert_defaults(store):
    alert = store.add('alerts', {'type': 'soat_expiration', 'severity': 'high', 'resolved': True})
    assert alert['resolved'] is False
    assert alert['autoGenerated'] is False
    assert alert['createdBy'] == 'system'


def test_update_merges_and_stamps(store):
    record = store.add('tools', {'name': 'Taladro', 'status': 'disponible'})
    updated = store.update('tools', record['id'], {'status': 'mantenimiento', 'id': 'hijacked'})
    assert updated['id'] == record['id'], "Updates never change the id"
    assert updated['status'] == 'mantenimiento'
    assert updated['name'] == 'Taladro'
    assert updated['updatedBy'] == 'current-user'
    assert 'updatedAt' in updated
    assert store.get('tools', 'hijacked') is None


def test_update_keeps_creation_stamps(store):
    record = store.add('tools', {'name': 'Taladro'})
    updated = store.update('tools', record['id'], {
        'createdAt': '1999-01-01T00:00:00.000Z', 'createdBy': 'mallory', 'name': 'Taladro Bosch',
    })
    assert updated['createdAt'] == record['createdAt'], "Creation time is fixed at add"
    assert updated['createdBy'] == 'current-user'
    assert updated['name'] == 'Taladro Bosch'


def test_update_missing_record(store):
    assert store.update('tools', 'missing', {'status': 'perdido'}) is None


def test_alert_update_is_not_stamped(store):
    alert = store.add('alerts', {'severity': 'low'})
    updated = store.update('alerts', alert['id'], {'severity': 'medium'})
    assert 'updatedAt' not in updated
    assert 'updatedBy' not in updated


def test_resolve_alert(store):
    alert = store.add('alerts', {'severity': 'critical'})
    resolved = store.resolve_alert(alert['id'], 'Revisado en taller')
    assert resolved['resolved'] is True
    assert resolved['resolvedBy'] == 'current-user'
    assert resolved['resolutionNotes'] == 'Revisado en taller'
    assert store.resolve_alert('missing') is None


def test_delete(store):
    record = store.add('vehicles', {'plate': 'ABC-123'})
    assert store.delete('vehicles', record['id'])
    assert not store.delete('vehicles', record['id'])
    assert store.list('vehicles') == []


def test_on_change_called_with_store_name(storage):
    changes = []
    store = CollectionStore(storage, on_change=changes.append)
    record = store.add('fuel', {'liters': 10})
    store.delete('fuelRecords', record['id'])
    assert changes == ['fuelRecords', 'fuelRecords']


def test_clear_all_data_keeps_notifications(store, storage):
    storage.set_item(NOTIFICATIONS_KEY, [{'id': 'n1'}])
    store.add('machinery', {'name': 'Grúa'})
    store.add('warehouses', {'name': 'Almacén Norte'})

    assert store.clear_all_data() == 2
    assert store.list('machinery') == []
    assert [w['id'] for w in store.list('warehouses')] == ['1'], "Cleared warehouses fall back to the seed"
    assert storage.get_item(NOTIFICATIONS_KEY) == [{'id': 'n1'}]


def test_warehouse_map_and_snapshot(store):
    added = store.add('warehouses', {'name': 'Almacén Cusco'})
    mapping = store.warehouse_map()
    assert mapping['1']['name'] == 'Almacén Principal Lima'
    assert mapping[added['id']]['name'] == 'Almacén Cusco'

    snapshot = store.snapshot()
    assert set(snapshot) >= {'warehouses', 'machinery', 'spareParts', 'financialRecords', 'alerts'}


def test_local_storage_round_trip(storage):
    assert storage.get_item('missing', 'default') == 'default'
    storage.set_item('settings', {'theme': 'dark'})
    assert storage.get_item('settings') == {'theme': 'dark'}
    assert 'settings' in storage.keys()
    assert storage.remove_item('settings')
    assert not storage.remove_item('settings')
