from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Any, Dict, List, Optional

from tasktrack.schemas.common import FieldError

MISSING = object()


@dataclass
class ValidationResult:
    """Cleaned data plus the field errors found while cleaning it."""

    data: Dict[str, Any] = field(default_factory=dict)
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, name: str, message: str) -> None:
        self.errors.append(FieldError(field=name, message=message))


def require_object(payload: Any, result: ValidationResult) -> Optional[dict]:
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        result.add_error("body", "Request body must be a JSON object")
        return None
    return payload


def clean_string(
    payload: dict,
    name: str,
    result: ValidationResult,
    *,
    label: str,
    required: bool = False,
    allow_empty: bool = True,
    allow_null: bool = False,
    trim: bool = True,
    min_length: int = 0,
    max_length: Optional[int] = None,
) -> Any:
    """Check a string field and store the cleaned value in ``result.data``.

    Returns the cleaned value, or ``MISSING`` when the field is absent or invalid.
    """
    value = payload.get(name, MISSING)
    if value is MISSING or (value is None and (allow_null or required)):
        if required:
            result.add_error(name, f"{label} is required")
        return MISSING
    if not isinstance(value, str):
        result.add_error(name, f"{label} must be a string")
        return MISSING
    if trim:
        value = value.strip()
    if not value:
        if required:
            result.add_error(name, f"{label} is required")
            return MISSING
        if not allow_empty:
            result.add_error(name, f"{label} cannot be empty")
            return MISSING
    elif len(value) < min_length:
        result.add_error(name, f"{label} must be at least {min_length} characters long")
        return MISSING
    if max_length is not None and len(value) > max_length:
        result.add_error(name, f"{label} must not exceed {max_length} characters")
        return MISSING
    result.data[name] = value
    return value


def clean_choice(payload: dict, name: str, result: ValidationResult, *, label: str, choices) -> Any:
    value = payload.get(name, MISSING)
    if value is MISSING:
        return MISSING
    if value not in choices:
        result.add_error(name, f"{label} must be one of: {', '.join(choices)}")
        return MISSING
    result.data[name] = value
    return value


def parse_iso_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 date or datetime string; naive values are taken as UTC."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = datetime.combine(date.fromisoformat(text), datetime.min.time())
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None
