"""
Form Validation - uniform rule checks over keyed form state.

Rules per field:
- required: value present and not empty
- min_length: string values at least N characters
- email: looks like name@domain.tld
- url: starts with http:// or https://
"""

import re
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
URL_PATTERN = re.compile(r"^https?://.+")


class FieldRule(BaseModel):
    required: bool = False
    min_length: Optional[int] = Field(None, alias="minLength", ge=0)
    email: bool = False
    url: bool = False

    model_config = {"populate_by_name": True}


class ValidationResult(BaseModel):
    is_valid: bool
    errors: List[str] = []


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value is False


def validate_form(data: Mapping[str, Any], rules: Mapping[str, Any]) -> ValidationResult:
    """
    Check every ruled field of `data` and collect messages.

    `rules` values may be FieldRule instances or plain dicts
    (e.g. {"required": True, "minLength": 2}).
    """
    errors: List[str] = []

    for field, raw_rule in rules.items():
        rule = raw_rule if isinstance(raw_rule, FieldRule) else FieldRule.model_validate(raw_rule)
        value = data.get(field)

        if rule.required and _is_empty(value):
            errors.append(f"{field} is required")

        if isinstance(value, str):
            if rule.min_length is not None and len(value) < rule.min_length:
                errors.append(f"{field} must be at least {rule.min_length} characters")
            if rule.email and not EMAIL_PATTERN.search(value):
                errors.append(f"{field} must be a valid email")
            if rule.url and not URL_PATTERN.match(value):
                errors.append(f"{field} must be a valid URL")

    return ValidationResult(is_valid=not errors, errors=errors)


PROFILE_RULES: Dict[str, FieldRule] = {
    "email": FieldRule(required=True, email=True),
    "fullName": FieldRule(required=True, min_length=2),
}
