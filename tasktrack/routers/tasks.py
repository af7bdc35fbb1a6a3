from fastapi import APIRouter, Depends, Request

from tasktrack.errors import NotFoundError, ValidationError
from tasktrack.routers.deps import Identity, get_current_user, get_task_repository, read_json_body
from tasktrack.schemas.common import PageMeta
from tasktrack.schemas.task import TaskListResponse, TaskOut, TaskResponse
from tasktrack.services.task_repository import TaskRepository
from tasktrack.validators.task import validate_task_create, validate_task_query, validate_task_update

# every route below sits behind the bearer-token gate
router = APIRouter(prefix="/tasks", tags=["tasks"], dependencies=[Depends(get_current_user)])


def _found(task, message=None) -> TaskResponse:
    if task is None:
        raise NotFoundError("Task not found")
    return TaskResponse(message=message, data=TaskOut.model_validate(task))


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    request: Request,
    user: Identity = Depends(get_current_user),
    repo: TaskRepository = Depends(get_task_repository),
):
    """List the caller's tasks.

    Query parameters: q, status, priority, page, limit, sortBy.
    """
    checked = validate_task_query(request.query_params)
    if not checked.ok:
        raise ValidationError(errors=checked.errors)

    page = await repo.list(checked.data["filters"], user.id)
    return TaskListResponse(
        data=[TaskOut.model_validate(t) for t in page.items],
        meta=PageMeta(**page.meta),
    )


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    request: Request,
    user: Identity = Depends(get_current_user),
    repo: TaskRepository = Depends(get_task_repository),
):
    checked = validate_task_create(await read_json_body(request))
    if not checked.ok:
        raise ValidationError(errors=checked.errors)
    task = await repo.create(checked.data, user.id)
    return _found(task, "Task created successfully")


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    user: Identity = Depends(get_current_user),
    repo: TaskRepository = Depends(get_task_repository),
):
    return _found(await repo.get_by_id(task_id, user.id))


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    request: Request,
    user: Identity = Depends(get_current_user),
    repo: TaskRepository = Depends(get_task_repository),
):
    checked = validate_task_update(await read_json_body(request))
    if not checked.ok:
        raise ValidationError(errors=checked.errors)
    return _found(await repo.update(task_id, checked.data, user.id), "Task updated successfully")


@router.delete("/{task_id}", response_model=TaskResponse)
async def delete_task(
    task_id: str,
    user: Identity = Depends(get_current_user),
    repo: TaskRepository = Depends(get_task_repository),
):
    return _found(await repo.delete(task_id, user.id), "Task deleted successfully")
