"""Caller-side checks run before ``add_student``/``update_student``.

The engine itself trusts its input; forms and API handlers call into here
first. Duplicate e-mails are only rejected on creation, an edit that changes
the address to one already in use is accepted.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from ..common.validators import humanize_field, is_blank, is_valid_email
from ..core.constants import REQUIRED_STUDENT_FIELDS
from ..core.exceptions import ValidationError
from .model import Student


def validate_student_form(
    data: Mapping[str, Any],
    existing: Iterable[Student],
    *,
    editing_id: Optional[str] = None,
    partial: bool = False,
) -> dict[str, str]:
    """Return ``{field: message}`` for every problem found (empty when valid).

    ``data`` uses the wire (camelCase) keys. With ``partial=True`` only the
    fields present in ``data`` are checked for emptiness.
    """
    errors: dict[str, str] = {}

    for name in REQUIRED_STUDENT_FIELDS:
        if partial and name not in data:
            continue
        if is_blank(data.get(name)):
            errors[name] = f"{humanize_field(name)} is required"

    email = data.get("email")
    if email and not is_valid_email(str(email)):
        errors["email"] = "Please enter a valid email address"

    if email and editing_id is None:
        if any(s.email == email for s in existing):
            errors["email"] = "A student with this email already exists"

    return errors


def ensure_valid_student(
    data: Mapping[str, Any],
    existing: Iterable[Student],
    *,
    editing_id: Optional[str] = None,
    partial: bool = False,
) -> None:
    errors = validate_student_form(data, existing, editing_id=editing_id, partial=partial)
    if errors:
        raise ValidationError("Student data is invalid", errors)
