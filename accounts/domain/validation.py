"""Field rules shared by the user and category schemas."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class FieldRule:
    required_message: str = ""
    trim: bool = True
    min_length: Optional[int] = None
    min_message: str = ""
    max_length: Optional[int] = None
    max_message: str = ""
    pattern: Optional[re.Pattern] = None
    pattern_message: str = ""

    @property
    def required(self) -> bool:
        return bool(self.required_message)

    def clean(self, field: str, value: Any) -> tuple[Any, Optional[dict]]:
        """Return the normalized value and the first violation, if any."""
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif isinstance(value, (int, float)):
            value = str(value)
        if value is None or (isinstance(value, str) and not (value.strip() if self.trim else value)):
            if self.required:
                return None, _violation(self.required_message, "required")
            return None, None
        if not isinstance(value, str):
            return value, _violation(f"{field} must be a string", "type")
        if self.trim:
            value = value.strip()
        if self.min_length is not None and len(value) < self.min_length:
            return value, _violation(self.min_message, "minlength")
        if self.max_length is not None and len(value) > self.max_length:
            return value, _violation(self.max_message, "maxlength")
        if self.pattern is not None and not self.pattern.fullmatch(value):
            return value, _violation(self.pattern_message, "regexp")
        return value, None


def _violation(message: str, kind: str) -> dict:
    return {"message": message, "kind": kind}


def check_fields(
    payload: Mapping[str, Any],
    rules: Mapping[str, FieldRule],
    *,
    partial: bool = False,
) -> tuple[dict, dict]:
    """
    Validate ``payload`` against ``rules``.

    Returns ``(values, errors)``. With ``partial`` only the supplied fields are
    checked and any key without a rule is reported as forbidden; otherwise every
    rule runs and unknown keys are ignored.
    """
    values: dict = {}
    errors: dict = {}
    if partial:
        for key in payload:
            if key not in rules:
                errors[key] = _violation(f"{key} cannot be modified", "forbidden")
    names = [k for k in rules if k in payload] if partial else list(rules)
    for name in names:
        value, error = rules[name].clean(name, payload.get(name))
        if error:
            errors[name] = error
        else:
            values[name] = value
    return values, errors
