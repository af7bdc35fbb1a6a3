import pytest

from tasktrack.client import ApiError, ApiSession, TaskTrackClient


@pytest.fixture
def api(client):
    # TestClient is an httpx.Client, so it can stand in for a real connection
    return TaskTrackClient(client)


def test_session_is_returned_not_stored(api):
    ada = api.register("Ada", "ada@example.com", "SecurePass123")
    bob = api.register("Bob", "bob@example.com", "SecurePass123")

    assert isinstance(ada, ApiSession)
    assert ada.user["email"] == "ada@example.com"
    assert ada.headers == {"Authorization": f"Bearer {ada.token}"}

    api.create_task(ada, title="Ada's task", priority="high")
    assert api.list_tasks(bob)["data"] == []
    assert [t["title"] for t in api.list_tasks(ada, priority="high")["data"]] == ["Ada's task"]


def test_full_task_lifecycle(api):
    session = api.register("Ada", "ada@example.com", "SecurePass123")
    again = api.login("ada@example.com", "SecurePass123")
    assert again.user == session.user

    task = api.create_task(session, title="Write client", description="httpx wrapper")
    assert api.get_task(again, task["id"])["title"] == "Write client"

    updated = api.update_task(session, task["id"], status="done")
    assert updated["status"] == "done"

    page = api.list_tasks(session, page=1, limit=5, q=None)
    assert page["meta"] == {"total": 1, "page": 1, "limit": 5, "pages": 1}

    assert api.delete_task(session, task["id"])["id"] == task["id"]
    with pytest.raises(ApiError) as exc:
        api.get_task(session, task["id"])
    assert exc.value.status_code == 404
    assert exc.value.message == "Task not found"


def test_errors_carry_field_details(api):
    with pytest.raises(ApiError) as exc:
        api.register("A", "bad", "weak")
    assert exc.value.status_code == 400
    assert {e["field"] for e in exc.value.errors} == {"name", "email", "password"}

    with pytest.raises(ApiError) as exc:
        api.login("nobody@example.com", "SecurePass123")
    assert exc.value.status_code == 401
