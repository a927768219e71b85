"""
Test the rule interpreter, the Validator error map and the entity schemas.
"""

from datetime import date

from maquirent.buisness.core.validation import (
    BoundsRule,
    INVALID_FORMAT_MESSAGE,
    LengthRule,
    NOT_A_NUMBER_MESSAGE,
    REQUIRED_MESSAGE,
    RequiredRule,
    VALIDATION_PATTERNS,
    Validator,
    coerce_numbers,
    common_schemas,
    is_empty,
    parse_number,
    rules,
    validate_value,
)


def test_rules_builder_order():
    """Rules are built in required, length, pattern, bounds, custom order"""
    built = rules(required=True, min_length=2, max_length=10, min=1, max=5)
    assert built[0] == RequiredRule()
    assert built[1] == LengthRule(2, 10)
    assert built[2] == BoundsRule(1, 5)
    assert rules() == (), "No options should give no rules"


def test_is_empty():
    assert is_empty(None)
    assert is_empty('')
    assert is_empty('   '), "Whitespace-only strings are empty"
    assert is_empty([])
    assert is_empty(False)
    assert not is_empty(0), "Zero is a real value"
    assert not is_empty('0')
    assert not is_empty(['x'])


def test_required():
    field_rules = rules(required=True)
    assert validate_value(field_rules, None) == REQUIRED_MESSAGE
    assert validate_value(field_rules, '  \t ') == REQUIRED_MESSAGE
    assert validate_value(field_rules, 'ok') is None
    assert validate_value(field_rules, 0) is None


def test_empty_optional_field_passes_every_rule():
    field_rules = rules(min_length=5, min=10, pattern=r'^\d+$')
    assert validate_value(field_rules, '') is None
    assert validate_value(field_rules, None) is None


def test_length_messages():
    field_rules = rules(min_length=2, max_length=4)
    assert validate_value(field_rules, 'a') == 'Debe tener al menos 2 caracteres'
    assert validate_value(field_rules, 'abcde') == 'No puede tener más de 4 caracteres'
    assert validate_value(field_rules, 'ab') is None
    assert validate_value(field_rules, 'abcd') is None


def test_numeric_bounds_are_inclusive():
    """Boundary values pass, values just outside fail"""
    field_rules = rules(min=1900, max=2026)
    assert validate_value(field_rules, 1900) is None
    assert validate_value(field_rules, 2026) is None
    assert validate_value(field_rules, 1899) == 'Debe ser mayor o igual a 1900'
    assert validate_value(field_rules, 2027) == 'Debe ser menor o igual a 2026'

    fractional = rules(min=0.1)
    assert validate_value(fractional, 0.1) is None
    assert validate_value(fractional, 0.09) == 'Debe ser mayor o igual a 0.1'


def test_numeric_strings():
    field_rules = rules(min=0)
    assert validate_value(field_rules, '12.5') is None
    assert validate_value(field_rules, '-1') == 'Debe ser mayor o igual a 0'
    assert validate_value(field_rules, 'doce') == NOT_A_NUMBER_MESSAGE


def test_non_finite_and_non_numeric_values_fail_bounds():
    field_rules = rules(min=0.01)
    for value in ('nan', 'NaN', 'inf', '-inf', float('nan'), [1], {'amount': 1}):
        assert validate_value(field_rules, value) == NOT_A_NUMBER_MESSAGE, f"{value!r} should fail"
    assert parse_number('nan') is None
    assert parse_number(' 7.5 ') == 7.5
    assert parse_number(True) is None


def test_coerce_numbers():
    schema = {'amount': rules(required=True, min=0.01), 'code': rules(pattern=r'^\d+$')}
    coerced = coerce_numbers(schema, {'amount': '150', 'code': '0042', 'note': '7'})
    assert coerced == {'amount': 150, 'code': '0042', 'note': '7'}, "Only bounded fields are converted"
    assert coerce_numbers(schema, {'amount': '12.5'})['amount'] == 12.5
    assert coerce_numbers(schema, {'amount': 'doce'})['amount'] == 'doce'
    assert coerce_numbers(schema, {}) == {}


def test_pattern():
    field_rules = rules(pattern=VALIDATION_PATTERNS['plate'])
    assert validate_value(field_rules, 'ABC-123') is None
    assert validate_value(field_rules, 'abc-123') == INVALID_FORMAT_MESSAGE
    assert validate_value(field_rules, 'ABC-123\n') == INVALID_FORMAT_MESSAGE, "Trailing newline must not match"


def test_custom_rule():
    field_rules = rules(custom=lambda value: None if value == 'si' else 'Debe ser si')
    assert validate_value(field_rules, 'si') is None
    assert validate_value(field_rules, 'no') == 'Debe ser si'


def test_first_failing_rule_wins():
    field_rules = rules(required=True, min_length=5, pattern=r'^\d+$')
    assert validate_value(field_rules, 'ab') == 'Debe tener al menos 5 caracteres'
    assert validate_value(field_rules, 'abcde') == INVALID_FORMAT_MESSAGE


def test_validator_error_map():
    validator = Validator({
        'name': rules(required=True, min_length=2),
        'year': rules(required=True, min=1900),
    })
    assert not validator.validate_form({'name': '', 'year': 1800})
    assert validator.errors == {
        'name': REQUIRED_MESSAGE,
        'year': 'Debe ser mayor o igual a 1900',
    }

    assert validator.validate_single_field('name', 'Grúa')
    assert 'name' not in validator.errors, "A passing field is removed from the error map"

    validator.clear_field_error('year')
    assert validator.errors == {}

    assert validator.validate_form({'name': 'Grúa', 'year': 2000, 'extra': ''})
    assert validator.errors == {}


def test_validator_ignores_unknown_fields():
    validator = Validator({'name': rules(required=True)})
    assert validator.validate_field('other', None) is None
    assert validator.validate_single_field('other', None)


def test_common_schemas():
    schemas = common_schemas(today=date(2025, 6, 1))
    for name in ('warehouse', 'machinery', 'vehicle', 'tool', 'sparePart', 'fuel',
                 'financial', 'user', 'rental', 'maintenance'):
        assert name in schemas, f"Missing schema {name}"

    year_rules = schemas['machinery']['year']
    assert validate_value(year_rules, 2026) is None, "Next year's models are allowed"
    assert validate_value(year_rules, 2027) == 'Debe ser menor o igual a 2026'

    role_rules = schemas['user']['role']
    assert validate_value(role_rules, 'mechanic') is None
    assert validate_value(role_rules, 'root') == 'Rol inválido'

    email_rules = schemas['user']['email']
    assert validate_value(email_rules, 'ana@maquirent.pe') is None
    assert validate_value(email_rules, 'ana@maquirent') == INVALID_FORMAT_MESSAGE
