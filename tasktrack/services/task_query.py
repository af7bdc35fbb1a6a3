"""Turn list filters into owner-scoped SELECT and COUNT statements."""
from dataclasses import dataclass
from math import ceil
from typing import List, Optional

from sqlalchemy import case, func, or_, select

from tasktrack.models.task import PRIORITIES, STATUSES, Task

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

SORT_FIELDS = ("createdAt", "dueDate", "title", "priority", "status")
DEFAULT_SORT = "createdAt"

_PRIORITY_RANK = case((Task.priority == "high", 0), (Task.priority == "med", 1), else_=2)

_SORTS = {
    "createdAt": (Task.created_at.desc(),),
    # tasks without a due date go last
    "dueDate": (Task.due_date.is_(None), Task.due_date.asc()),
    "title": (Task.title.asc(),),
    "priority": (_PRIORITY_RANK.asc(),),
    "status": (Task.status.asc(),),
}


@dataclass
class TaskFilters:
    search: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None
    sort_by: Optional[str] = None


@dataclass
class TaskQuery:
    statement: object
    count_statement: object
    page: int
    limit: int


def pagination_params(page: Optional[int], limit: Optional[int]):
    """Clamp page to >= 1 and limit to [1, MAX_LIMIT]; return (page, limit, skip)."""
    page = max(DEFAULT_PAGE, page or DEFAULT_PAGE)
    limit = min(MAX_LIMIT, max(1, limit or DEFAULT_LIMIT))
    return page, limit, (page - 1) * limit


def pagination_meta(total: int, page: int, limit: int) -> dict:
    pages = ceil(total / limit) if total > 0 else 1
    return {"total": total, "page": page, "limit": limit, "pages": pages}


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_predicate(search: str):
    """Match any whitespace-separated term in title or description, ignoring case."""
    clauses = []
    for term in search.split():
        pattern = f"%{_escape_like(term)}%"
        clauses.append(Task.title.ilike(pattern, escape="\\"))
        clauses.append(Task.description.ilike(pattern, escape="\\"))
    return or_(*clauses) if clauses else None


def build_filter(filters: TaskFilters, owner_id: str) -> List:
    predicates = [Task.owner_id == owner_id]
    if filters.status in STATUSES:
        predicates.append(Task.status == filters.status)
    if filters.priority in PRIORITIES:
        predicates.append(Task.priority == filters.priority)
    if filters.search:
        predicate = search_predicate(filters.search)
        if predicate is not None:
            predicates.append(predicate)
    return predicates


def build_sort(sort_by: Optional[str]) -> tuple:
    return _SORTS.get(sort_by, _SORTS[DEFAULT_SORT]) + (Task.id.asc(),)


def build_task_query(filters: TaskFilters, owner_id: str) -> TaskQuery:
    page, limit, skip = pagination_params(filters.page, filters.limit)
    predicates = build_filter(filters, owner_id)
    statement = select(Task).where(*predicates).order_by(*build_sort(filters.sort_by)).offset(skip).limit(limit)
    count_statement = select(func.count()).select_from(Task).where(*predicates)
    return TaskQuery(statement=statement, count_statement=count_statement, page=page, limit=limit)
