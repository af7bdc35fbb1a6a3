from typing import Any, Mapping

from tasktrack.models.task import PRIORITIES, STATUSES
from tasktrack.services.task_query import SORT_FIELDS, TaskFilters
from tasktrack.validators.base import (
    MISSING,
    ValidationResult,
    clean_choice,
    clean_string,
    parse_int,
    parse_iso_datetime,
    require_object,
)

TITLE_MAX = 200
DESCRIPTION_MAX = 1000
SEARCH_MAX = 100


def _clean_due_date(payload: dict, result: ValidationResult, *, allow_clear: bool) -> None:
    value = payload.get("dueDate", MISSING)
    if value is MISSING:
        return
    if value is None:
        if allow_clear:
            result.data["due_date"] = None
        return
    parsed = parse_iso_datetime(value)
    if parsed is None:
        result.add_error("dueDate", "Due date must be a valid ISO 8601 date")
        return
    result.data["due_date"] = parsed


def _clean_enums(payload: dict, result: ValidationResult) -> None:
    clean_choice(payload, "status", result, label="Status", choices=STATUSES)
    clean_choice(payload, "priority", result, label="Priority", choices=PRIORITIES)


def validate_task_create(payload: Any) -> ValidationResult:
    """Check a new task body. Only ``title`` is required."""
    result = ValidationResult()
    payload = require_object(payload, result)
    if payload is None:
        return result

    clean_string(payload, "title", result, label="Title", required=True, max_length=TITLE_MAX)
    clean_string(payload, "description", result, label="Description", allow_null=True, max_length=DESCRIPTION_MAX)
    _clean_enums(payload, result)
    _clean_due_date(payload, result, allow_clear=False)
    return result


def validate_task_update(payload: Any) -> ValidationResult:
    """Check a partial update; only the fields present end up in ``data``."""
    result = ValidationResult()
    payload = require_object(payload, result)
    if payload is None:
        return result

    clean_string(payload, "title", result, label="Title", allow_empty=False, max_length=TITLE_MAX)
    clean_string(payload, "description", result, label="Description", max_length=DESCRIPTION_MAX)
    _clean_enums(payload, result)
    _clean_due_date(payload, result, allow_clear=True)
    return result


def validate_task_query(params: Mapping[str, Any]) -> ValidationResult:
    """Check list query parameters and build ``TaskFilters`` into ``data["filters"]``.

    Out-of-range page/limit values and unknown sort keys are left for the
    query builder to clamp or default.
    """
    result = ValidationResult()
    params = dict(params)

    search = clean_string(params, "q", result, label="Search query", max_length=SEARCH_MAX)
    status = clean_choice(params, "status", result, label="Status", choices=STATUSES)
    priority = clean_choice(params, "priority", result, label="Priority", choices=PRIORITIES)

    numbers = {}
    for name, label in (("page", "Page"), ("limit", "Limit")):
        raw = params.get(name)
        if raw is None or raw == "":
            continue
        number = parse_int(raw)
        if number is None:
            result.add_error(name, f"{label} must be an integer")
        else:
            numbers[name] = number

    sort_by = params.get("sortBy")
    result.data = {
        "filters": TaskFilters(
            search=search if search not in (MISSING, "") else None,
            status=None if status is MISSING else status,
            priority=None if priority is MISSING else priority,
            page=numbers.get("page"),
            limit=numbers.get("limit"),
            sort_by=sort_by if sort_by in SORT_FIELDS else None,
        )
    }
    return result
