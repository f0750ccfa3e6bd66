from __future__ import annotations

import re
from typing import Any, Optional

from ..core.constants import EMAIL_PATTERN
from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(EMAIL_PATTERN)


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value or ""))


def humanize_field(field_name: str) -> str:
    """``firstName`` -> ``First Name``."""
    spaced = re.sub(r"([A-Z])", r" \1", field_name)
    return spaced[:1].upper() + spaced[1:]


def require_json_object(payload: Any) -> dict[str, Any]:
    """Request bodies must be JSON objects; a missing body counts as ``{}``."""
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object", {"body": "Must be a JSON object"})
    return payload
