"""
Schema-driven field validation

A validation schema maps field names to a tuple of rules. Each rule is
one of five kinds (required, length, numeric bounds, pattern, custom)
and is interpreted by check_rule(). Rules are evaluated in order and the
first failing rule produces the field's error message.

Handles:
- Rule types and the rule interpreter
- Validator: per-field and whole-form validation with an error map
- Common patterns and the per-entity schemas used by the collection API
"""

import math
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Optional, Pattern, Tuple, Union

from maquirent.data.collections import USER_ROLES

REQUIRED_MESSAGE = 'Este campo es obligatorio'
INVALID_FORMAT_MESSAGE = 'Formato inválido'
NOT_A_NUMBER_MESSAGE = 'Debe ser un número válido'


@dataclass(frozen=True)
class RequiredRule:
    pass


@dataclass(frozen=True)
class LengthRule:
    min: Optional[int] = None
    max: Optional[int] = None


@dataclass(frozen=True)
class BoundsRule:
    min: Optional[float] = None
    max: Optional[float] = None


@dataclass(frozen=True)
class PatternRule:
    regex: Pattern


@dataclass(frozen=True)
class CustomRule:
    check: Callable[[Any], Optional[str]]


Rule = Union[RequiredRule, LengthRule, BoundsRule, PatternRule, CustomRule]
FieldRules = Tuple[Rule, ...]
Schema = Dict[str, FieldRules]


def rules(required=False, min_length=None, max_length=None, pattern=None,
          min=None, max=None, custom=None) -> FieldRules:
    """
    Build a field's rule tuple in canonical order.

    Example:
        >>> rules(required=True, min_length=2, max_length=100)
        (RequiredRule(), LengthRule(min=2, max=100))
    """
    built = []
    if required:
        built.append(RequiredRule())
    if min_length is not None or max_length is not None:
        built.append(LengthRule(min_length, max_length))
    if pattern is not None:
        built.append(PatternRule(re.compile(pattern) if isinstance(pattern, str) else pattern))
    if min is not None or max is not None:
        built.append(BoundsRule(min, max))
    if custom is not None:
        built.append(CustomRule(custom))
    return tuple(built)


def is_empty(value: Any) -> bool:
    """None, False, blank strings and empty collections count as empty."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def _format_number(number) -> str:
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def parse_number(value: Any) -> Optional[float]:
    """Finite int/float, or a string holding one. Anything else gives None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def check_rule(rule: Rule, value: Any) -> Optional[str]:
    """
    Interpret a single rule against a non-empty value.

    Length and pattern rules only apply to strings. Bounds apply to
    finite numbers and to strings that parse as one; any other
    value fails.
    """
    if isinstance(rule, RequiredRule):
        return REQUIRED_MESSAGE if is_empty(value) else None

    if isinstance(rule, LengthRule):
        if not isinstance(value, str):
            return None
        if rule.min is not None and len(value) < rule.min:
            return f'Debe tener al menos {rule.min} caracteres'
        if rule.max is not None and len(value) > rule.max:
            return f'No puede tener más de {rule.max} caracteres'
        return None

    if isinstance(rule, PatternRule):
        if isinstance(value, str) and not rule.regex.search(value):
            return INVALID_FORMAT_MESSAGE
        return None

    if isinstance(rule, BoundsRule):
        if isinstance(value, bool):
            return None
        number = parse_number(value)
        if number is None:
            return NOT_A_NUMBER_MESSAGE
        if rule.min is not None and number < rule.min:
            return f'Debe ser mayor o igual a {_format_number(rule.min)}'
        if rule.max is not None and number > rule.max:
            return f'Debe ser menor o igual a {_format_number(rule.max)}'
        return None

    if isinstance(rule, CustomRule):
        return rule.check(value)

    raise TypeError(f"Unknown validation rule: {rule!r}")


def validate_value(field_rules: FieldRules, value: Any) -> Optional[str]:
    """Return the first error message for value, or None when it passes."""
    if is_empty(value):
        if any(isinstance(rule, RequiredRule) for rule in field_rules):
            return REQUIRED_MESSAGE
        return None

    for rule in field_rules:
        error = check_rule(rule, value)
        if error:
            return error
    return None


def coerce_numbers(schema: Schema, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Copy of data with numeric strings in bounded fields turned into numbers.

    "150" becomes 150 and "12.5" becomes 12.5. Values that do not parse
    are left as they are.
    """
    coerced = dict(data)
    for name, field_rules in schema.items():
        value = coerced.get(name)
        if not isinstance(value, str) or not any(isinstance(rule, BoundsRule) for rule in field_rules):
            continue
        number = parse_number(value)
        if number is not None:
            coerced[name] = int(number) if number.is_integer() else number
    return coerced


class Validator:
    """
    Holds a schema and the current per-field error map.

    Fields absent from the schema never produce errors. A field that
    passes is removed from the error map, so `errors` only ever holds
    real messages.
    """

    def __init__(self, schema: Optional[Schema] = None):
        self.schema: Schema = schema or {}
        self.errors: Dict[str, str] = {}

    def validate_field(self, name: str, value: Any) -> Optional[str]:
        field_rules = self.schema.get(name)
        if not field_rules:
            return None
        return validate_value(field_rules, value)

    def validate_form(self, data: Dict[str, Any]) -> bool:
        new_errors = {}
        for field_name in self.schema:
            error = self.validate_field(field_name, data.get(field_name))
            if error:
                new_errors[field_name] = error
        self.errors = new_errors
        return not new_errors

    def validate_single_field(self, name: str, value: Any) -> bool:
        error = self.validate_field(name, value)
        if error:
            self.errors[name] = error
        else:
            self.errors.pop(name, None)
        return error is None

    def clear_errors(self) -> None:
        self.errors = {}

    def clear_field_error(self, name: str) -> None:
        self.errors.pop(name, None)


VALIDATION_PATTERNS = {
    'email': re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+\Z'),
    'phone': re.compile(r'^\+?[1-9]\d{0,15}\Z'),
    'plate': re.compile(r'^[A-Z]{3}-\d{3}\Z'),
    'serialNumber': re.compile(r'^[A-Z0-9]{6,20}\Z'),
    'code': re.compile(r'^[A-Z0-9\-]{3,20}\Z'),
    'currency': re.compile(r'^\d+(\.\d{1,2})?\Z'),
    'percentage': re.compile(r'^(100|[1-9]?\d)(\.\d{1,2})?\Z'),
}


def _valid_role(value):
    return None if value in USER_ROLES else 'Rol inválido'


def _valid_stock_map(value):
    if not isinstance(value, dict):
        return INVALID_FORMAT_MESSAGE
    for quantity in value.values():
        number = parse_number(quantity)
        if number is None or number < 0:
            return 'Las cantidades deben ser números mayores o iguales a 0'
    return None


def common_schemas(today: Optional[date] = None) -> Dict[str, Schema]:
    """
    Per-entity schemas.

    Built on demand because the upper bound on model years tracks the
    current year.
    """
    max_year = (today or date.today()).year + 1
    p = VALIDATION_PATTERNS
    return {
        'warehouse': {
            'name': rules(required=True, min_length=2, max_length=100),
            'address': rules(required=True, min_length=5, max_length=200),
            'city': rules(required=True, min_length=2, max_length=50),
            'phone': rules(pattern=p['phone']),
            'manager': rules(max_length=100),
        },
        'machinery': {
            'name': rules(required=True, min_length=2, max_length=100),
            'category': rules(required=True),
            'brand': rules(required=True, min_length=2, max_length=50),
            'model': rules(required=True, min_length=1, max_length=50),
            'serialNumber': rules(required=True, pattern=p['serialNumber']),
            'year': rules(required=True, min=1900, max=max_year),
            'hourmeter': rules(min=0),
            'warehouseId': rules(required=True),
            'purchasePrice': rules(min=0),
            'currentValue': rules(min=0),
        },
        'vehicle': {
            'plate': rules(required=True, pattern=p['plate']),
            'brand': rules(required=True, min_length=2, max_length=50),
            'model': rules(required=True, min_length=1, max_length=50),
            'year': rules(required=True, min=1900, max=max_year),
            'mileage': rules(min=0),
            'warehouseId': rules(required=True),
            'soatExpiration': rules(required=True),
            'technicalReviewExpiration': rules(required=True),
        },
        'tool': {
            'name': rules(required=True, min_length=2, max_length=100),
            'internalCode': rules(required=True, pattern=p['code']),
            'warehouseId': rules(required=True),
            'category': rules(max_length=50),
            'brand': rules(max_length=50),
            'model': rules(max_length=50),
        },
        'sparePart': {
            'code': rules(required=True, pattern=p['code']),
            'name': rules(required=True, min_length=2, max_length=100),
            'brand': rules(required=True, min_length=2, max_length=50),
            'unitPrice': rules(required=True, min=0),
            'minStock': rules(required=True, min=0),
            'stockByWarehouse': rules(custom=_valid_stock_map),
        },
        'fuel': {
            'entityId': rules(required=True),
            'date': rules(required=True),
            'liters': rules(required=True, min=0.1),
            'unitCost': rules(required=True, min=0.01),
            'location': rules(required=True, min_length=3, max_length=100),
        },
        'financial': {
            'category': rules(required=True),
            'description': rules(required=True, min_length=3, max_length=200),
            'amount': rules(required=True, min=0.01),
            'date': rules(required=True),
        },
        'user': {
            'name': rules(required=True, min_length=2, max_length=100),
            'email': rules(required=True, pattern=p['email']),
            'role': rules(required=True, custom=_valid_role),
        },
        'rental': {
            'clientName': rules(required=True, min_length=2, max_length=100),
            'clientContact': rules(required=True),
            'clientEmail': rules(pattern=p['email']),
            'startDate': rules(required=True),
            'endDate': rules(required=True),
            'dailyRate': rules(required=True, min=0.01),
            'description': rules(required=True),
        },
        'maintenance': {
            'entityId': rules(required=True),
            'description': rules(required=True, min_length=10),
            'technicianName': rules(required=True, min_length=2),
            'laborHours': rules(required=True, min=0.5),
            'laborCost': rules(required=True, min=0),
            'scheduledDate': rules(required=True),
        },
    }


def get_schema(name: Optional[str]) -> Schema:
    if not name:
        return {}
    return common_schemas().get(name, {})
