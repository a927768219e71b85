"""
Form Engine
Tracks a form's values against a validation schema and gates submission.

State:
- data: current field values
- errors: per-field error messages
- is_valid: True when there are no errors
- is_dirty: True after any edit, False again after a successful submit or reset
- is_submitting: True only while the submit handler runs
- submit_error: message of the last failed submit, cleared on edit
"""

from copy import deepcopy
from typing import Any, Callable, Dict, Optional

from maquirent.buisness.core.validation import Schema, Validator
from maquirent.utils.logger import get_logger
from maquirent.utils.logging_sanitizer import sanitize_exception_message

logger = get_logger("maquirent.buisness.core.form_engine")

DEFAULT_SUBMIT_ERROR = 'Error al enviar el formulario'


class FormEngine:
    """
    Generic schema-driven form.

    Args:
        initial_data: Starting values (copied, never mutated)
        validation_schema: Field name -> rules; None disables validation
        on_submit: Called with the form data once validation passes
        validate_on_change: Validate a field whenever set_value() changes it
        validate_on_blur: Validate a field when handle_blur() is called
    """

    def __init__(
        self,
        initial_data: Dict[str, Any],
        validation_schema: Optional[Schema] = None,
        on_submit: Optional[Callable[[Dict[str, Any]], Any]] = None,
        validate_on_change: bool = True,
        validate_on_blur: bool = True,
    ):
        self._initial_data = deepcopy(initial_data)
        self.validation_schema = validation_schema
        self.on_submit = on_submit
        self.validate_on_change = validate_on_change
        self.validate_on_blur = validate_on_blur

        self.data: Dict[str, Any] = deepcopy(initial_data)
        self.is_dirty = False
        self.is_submitting = False
        self.submit_error: Optional[str] = None
        self.submit_result: Any = None
        self._validator = Validator(validation_schema or {})

    @property
    def errors(self) -> Dict[str, str]:
        return self._validator.errors

    @property
    def is_valid(self) -> bool:
        return len(self._validator.errors) == 0

    @property
    def form_state(self) -> Dict[str, Any]:
        return {
            'data': self.data,
            'errors': dict(self.errors),
            'isValid': self.is_valid,
            'isDirty': self.is_dirty,
            'isSubmitting': self.is_submitting,
        }

    def set_value(self, name: str, value: Any) -> None:
        self.data[name] = value
        self.is_dirty = True
        self.submit_error = None

        if self.validate_on_change and self.validation_schema:
            self._validator.validate_single_field(name, value)

    def set_values(self, new_data: Dict[str, Any]) -> None:
        """Merge several values at once without validating them."""
        self.data.update(new_data)
        self.is_dirty = True
        self.submit_error = None

    def handle_blur(self, name: str) -> None:
        if self.validate_on_blur and self.validation_schema:
            self._validator.validate_single_field(name, self.data.get(name))

    def reset(self, new_data: Optional[Dict[str, Any]] = None) -> None:
        self.data = deepcopy(new_data if new_data is not None else self._initial_data)
        self.is_dirty = False
        self.is_submitting = False
        self.submit_error = None
        self.submit_result = None
        self._validator.clear_errors()

    def handle_submit(self) -> bool:
        """
        Validate every schema field and run the submit handler.

        Returns:
            bool: True when the handler ran without raising. False when
            validation blocked the submit, no handler is set, or the
            handler raised (its message is kept in submit_error).
        """
        self.submit_error = None

        if self.validation_schema and not self._validator.validate_form(self.data):
            logger.debug(f"Submit blocked by validation errors on {sorted(self.errors)}")
            return False

        if not self.on_submit:
            return False

        self.is_submitting = True
        try:
            self.submit_result = self.on_submit(self.data)
            self.is_dirty = False
            return True
        except Exception as e:
            self.submit_error = str(e) or DEFAULT_SUBMIT_ERROR
            logger.warning(f"Form submit failed: {sanitize_exception_message(e)}")
            return False
        finally:
            self.is_submitting = False
