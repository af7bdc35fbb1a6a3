from datetime import UTC, datetime

from tasktrack.validators.auth import validate_login, validate_register
from tasktrack.validators.task import validate_task_create, validate_task_query, validate_task_update


def errors_of(result):
    return {e.field: e.message for e in result.errors}


def test_register_cleans_and_lowercases():
    result = validate_register({"name": "  Ada ", "email": " ADA@Example.com ", "password": "Secret123", "role": "admin"})
    assert result.ok
    assert result.data == {"name": "Ada", "email": "ada@example.com", "password": "Secret123"}


def test_register_password_is_not_trimmed():
    result = validate_register({"name": "Ada", "email": "ada@example.com", "password": " Secret123 "})
    assert result.data["password"] == " Secret123 "


def test_register_rejects_non_object():
    result = validate_register("name=ada")
    assert errors_of(result) == {"body": "Request body must be a JSON object"}


def test_register_length_rules():
    result = validate_register({"name": "A" * 51, "email": "ada@example.com", "password": "Ab1"})
    assert errors_of(result) == {
        "name": "Name must not exceed 50 characters",
        "password": "Password must be at least 6 characters long",
    }


def test_login_only_needs_non_empty_password():
    result = validate_login({"email": "Ada@Example.com", "password": "x"})
    assert result.ok
    assert result.data == {"email": "ada@example.com", "password": "x"}

    assert errors_of(validate_login({"email": "ada@example.com", "password": ""})) == {"password": "Password is required"}


def test_task_create_minimal():
    result = validate_task_create({"title": "Task", "description": None, "dueDate": None})
    assert result.ok
    assert result.data == {"title": "Task"}


def test_task_create_parses_due_date_to_utc():
    result = validate_task_create({"title": "Task", "dueDate": "2030-01-01T12:00:00+02:00"})
    assert result.data["due_date"] == datetime(2030, 1, 1, 10, 0, tzinfo=UTC)

    result = validate_task_create({"title": "Task", "dueDate": "2030-01-01"})
    assert result.data["due_date"] == datetime(2030, 1, 1, tzinfo=UTC)


def test_task_create_allows_empty_description():
    result = validate_task_create({"title": "Task", "description": "  "})
    assert result.data["description"] == ""


def test_task_update_keeps_only_present_fields():
    result = validate_task_update({"priority": "high"})
    assert result.ok
    assert result.data == {"priority": "high"}

    assert validate_task_update({}).data == {}
    assert validate_task_update({"dueDate": None}).data == {"due_date": None}


def test_task_update_rejects_wrong_types():
    result = validate_task_update({"title": 12, "status": None})
    assert errors_of(result) == {
        "title": "Title must be a string",
        "status": "Status must be one of: todo, in-progress, done",
    }


def test_task_query_builds_filters():
    result = validate_task_query({"q": " milk ", "status": "done", "page": "2", "limit": "5", "sortBy": "title"})
    assert result.ok
    filters = result.data["filters"]
    assert (filters.search, filters.status, filters.priority) == ("milk", "done", None)
    assert (filters.page, filters.limit, filters.sort_by) == (2, 5, "title")


def test_task_query_leaves_ranges_and_sort_to_builder():
    result = validate_task_query({"page": "0", "limit": "1000", "sortBy": "colour", "q": ""})
    assert result.ok
    filters = result.data["filters"]
    assert (filters.page, filters.limit, filters.sort_by, filters.search) == (0, 1000, None, None)


def test_task_query_rejects_non_integers():
    result = validate_task_query({"page": "1.5", "limit": "ten"})
    assert errors_of(result) == {"page": "Page must be an integer", "limit": "Limit must be an integer"}
