"""
Test rental day counting and pricing.
"""

import pytest

from maquirent.buisness.rentals.rental_pricing import calculate_total, price_rental, rental_days


def test_rental_days_round_up():
    assert rental_days('2025-01-01', '2025-01-04') == 3
    assert rental_days('2025-01-01T08:00:00Z', '2025-01-02T09:00:00Z') == 2
    assert rental_days('2025-01-01T08:00:00', '2025-01-01T10:00:00') == 1


def test_rental_days_rejects_bad_ranges():
    with pytest.raises(ValueError, match='posterior'):
        rental_days('2025-01-04', '2025-01-01')
    with pytest.raises(ValueError, match='posterior'):
        rental_days('2025-01-04', '2025-01-04')
    with pytest.raises(ValueError, match='inválidas'):
        rental_days('ayer', '2025-01-01')


def test_calculate_total():
    rental = {
        'startDate': '2025-01-01',
        'endDate': '2025-01-06',
        'dailyRate': 800,
        'operatorIncluded': True,
        'operatorCost': 150,
        'transportCost': 300,
    }
    assert calculate_total(rental) == 5 * 800 + 5 * 150 + 300

    rental['operatorIncluded'] = False
    assert calculate_total(rental) == 5 * 800 + 300


def test_price_rental_defaults():
    priced = price_rental(
        {'startDate': '2025-01-01', 'endDate': '2025-01-03', 'dailyRate': '500'},
        entity={'id': 'v1', 'plate': 'ABC-123'},
    )
    assert priced['totalAmount'] == 1000
    assert priced['entityName'] == 'ABC-123'
    assert priced['status'] == 'cotizado'
    assert priced['paymentStatus'] == 'pendiente'
    assert priced['checkInPhotos'] == []
    assert priced['operatorIncluded'] is False


def test_price_rental_keeps_given_status():
    priced = price_rental({'startDate': '2025-01-01', 'endDate': '2025-01-02', 'dailyRate': 1,
                           'status': 'confirmado'})
    assert priced['status'] == 'confirmado'
    assert priced['entityName'] == ''
