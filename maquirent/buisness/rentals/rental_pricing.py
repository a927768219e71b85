"""
Rental pricing

Turns a rental request into a priced rental record: billable days,
total amount and the initial quote/payment status.
"""

import math
from typing import Any, Dict, Optional

from maquirent.buisness.core.dates import parse_datetime
from maquirent.buisness.core.validation import parse_number

SECONDS_PER_DAY = 24 * 60 * 60


def _number(value: Any) -> float:
    number = parse_number(value)
    return 0.0 if number is None else float(number)


def rental_days(start_date: Any, end_date: Any) -> int:
    """
    Billable days between two dates, rounding partial days up.

    Raises:
        ValueError: If either date is unparseable or end is not after start
    """
    start = parse_datetime(start_date)
    end = parse_datetime(end_date)
    if start is None or end is None:
        raise ValueError('Fechas de alquiler inválidas')
    if start >= end:
        raise ValueError('La fecha de fin debe ser posterior a la fecha de inicio')
    return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)


def calculate_total(rental: Dict[str, Any]) -> float:
    """days * dailyRate, plus days * operatorCost when an operator is included, plus transport."""
    days = rental_days(rental.get('startDate'), rental.get('endDate'))
    base_amount = days * _number(rental.get('dailyRate'))
    operator_amount = days * _number(rental.get('operatorCost')) if rental.get('operatorIncluded') else 0
    return base_amount + operator_amount + _number(rental.get('transportCost'))


def price_rental(rental: Dict[str, Any], entity: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Fill in the derived fields of a new rental.

    Args:
        rental: Submitted rental data
        entity: The rented machinery or vehicle record, if found

    Returns:
        dict: Copy of rental with totalAmount, entityName and default statuses
    """
    priced = dict(rental)
    priced['totalAmount'] = calculate_total(rental)
    if entity is not None:
        priced['entityName'] = entity.get('name') or entity.get('plate') or ''
    priced.setdefault('entityName', '')
    priced.setdefault('status', 'cotizado')
    priced.setdefault('paymentStatus', 'pendiente')
    priced.setdefault('operatorIncluded', False)
    priced.setdefault('fuelIncluded', False)
    priced.setdefault('checkInPhotos', [])
    priced.setdefault('checkOutPhotos', [])
    return priced
