"""Reusable answer validators.

A validator turns a raw answer (what the user typed, what was passed on the
command line, or a cached value) into the value stored in the parameter map,
or raises ``ValidationError`` with a message suitable for showing next to the
prompt.
"""

from __future__ import annotations

from typing import Any

from easy_cfhighlander.exceptions import ValidationError


class Validator:
    """Identity validator; base class for the concrete ones below."""

    def validate(self, answer: Any) -> Any:
        return answer

    def as_answer(self, value: Any) -> str | None:
        """Present a stored value as a default answer for the prompt."""
        if value is None:
            return None
        return str(value)

    def __call__(self, answer: Any) -> Any:
        return self.validate(answer)


class RequiredValidator(Validator):
    """Rejects empty or whitespace-only input; strips every space."""

    message = "A value is required"

    def validate(self, answer: Any) -> str:
        if answer is None:
            raise ValidationError(self.message)
        text = str(answer)
        if not text.strip():
            raise ValidationError(self.message)
        return text.strip().replace(" ", "")


class AlphaValidator(RequiredValidator):
    """Required, and strictly alphabetic (ASCII letters only)."""

    alpha_message = "Value must be strictly alphabetic"

    def validate(self, answer: Any) -> str:
        value = super().validate(answer)
        raw = str(answer).strip()
        if not (raw.isascii() and raw.isalpha()):
            raise ValidationError(self.alpha_message)
        return value


class BooleanValidator(Validator):
    """Empty means ``False``; otherwise ``true``/``false`` in any case."""

    message = 'The value must be either empty, or a string "true" or "false"'

    def validate(self, answer: Any) -> bool:
        if isinstance(answer, bool):
            return answer
        if answer is None or not str(answer).strip():
            return False
        text = str(answer).strip().lower()
        if text not in ("true", "false"):
            raise ValidationError(self.message)
        return text == "true"

    def as_answer(self, value: Any) -> str:
        if isinstance(value, str):
            try:
                value = self.validate(value)
            except ValidationError:
                value = False
        return "true" if value else "false"


required = RequiredValidator()
alpha = AlphaValidator()
boolean = BooleanValidator()
