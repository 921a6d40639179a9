from __future__ import annotations

import re
from typing import Any, Mapping

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_fields(data: Mapping[str, Any], fields: Mapping[str, str]) -> None:
    """Check every ``key -> label`` pair in ``fields`` is present and non-blank."""
    for key, label in fields.items():
        require_non_empty(data.get(key), label)


def require_email(value: Any, field_name: str = "Email") -> str:
    email = require_non_empty(value, field_name)
    if not _EMAIL_RE.match(email):
        raise ValidationError(f"{field_name} is not a valid email address")
    return email
