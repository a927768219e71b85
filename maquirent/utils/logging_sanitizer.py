"""
Logging Sanitizer Utility

Redacts sensitive values from JSON payloads before they are logged.
Keys are compared case-insensitively and ignoring underscores, so
"confirmPassword", "confirm_password" and "CONFIRM_PASSWORD" all match.
"""

from typing import Any


# Normalized (lowercase, no underscores) keys that should never be logged
SENSITIVE_FIELDS = {
    'password',
    'passwordconfirm',
    'confirmpassword',
    'currentpassword',
    'newpassword',
    'oldpassword',
    'pwd',
    'passwd',
    'secret',
    'token',
    'apikey',
    'authtoken',
    'accesstoken',
    'refreshtoken',
    'sessionid',
    'csrftoken',
    'creditcard',
    'cvv',
    'clientdocument',
}


def normalize_key(key: str) -> str:
    return str(key).replace('_', '').replace('-', '').lower()


def is_sensitive(key: str) -> bool:
    return normalize_key(key) in SENSITIVE_FIELDS


def sanitize_payload(data: Any, redact_text: str = '[REDACTED]') -> Any:
    """
    Sanitize a JSON-like value by replacing sensitive field values.

    Dicts are walked recursively, lists are sanitized item by item and
    scalars are returned unchanged.

    Args:
        data: Value to sanitize
        redact_text: Text to use for redacted values (default: '[REDACTED]')

    Returns:
        Sanitized copy of the value

    Example:
        >>> sanitize_payload({'email': 'ana@maquirent.pe', 'password': 'x'})
        {'email': 'ana@maquirent.pe', 'password': '[REDACTED]'}
    """
    if isinstance(data, dict):
        sanitized = {}
        for key, value in data.items():
            if is_sensitive(key):
                sanitized[key] = redact_text
            else:
                sanitized[key] = sanitize_payload(value, redact_text)
        return sanitized

    if isinstance(data, list):
        return [sanitize_payload(item, redact_text) for item in data]

    return data


def sanitize_exception_message(exception: Exception) -> str:
    """
    Return the exception message, or a placeholder if it mentions a
    sensitive field name.
    """
    message = str(exception)
    lowered = normalize_key(message)
    if any(field in lowered for field in SENSITIVE_FIELDS):
        return f"{type(exception).__name__}: [Message contains sensitive data]"
    return message
