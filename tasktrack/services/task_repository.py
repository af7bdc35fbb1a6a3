import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import select

from tasktrack.errors import InvalidIdError
from tasktrack.models.columns import is_valid_id
from tasktrack.models.task import Task
from tasktrack.services.task_query import TaskFilters, build_task_query, pagination_meta

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "status", "priority", "due_date")


@dataclass
class TaskPage:
    items: List[Task]
    total: int
    page: int
    limit: int

    @property
    def meta(self) -> dict:
        return pagination_meta(self.total, self.page, self.limit)


class TaskRepository:
    """Task persistence where every lookup is keyed on (id, owner).

    Lookups that miss, including ones for another user's task, return None.
    """

    def __init__(self, session_factory):
        self._session_factory = session_factory

    @staticmethod
    def _owned(task_id: str, owner_id: str):
        if not is_valid_id(task_id):
            raise InvalidIdError()
        return select(Task).where(Task.id == task_id, Task.owner_id == owner_id)

    async def create(self, data: dict, owner_id: str) -> Task:
        async with self._session_factory() as session:
            task = Task(**data, owner_id=owner_id)
            session.add(task)
            await session.commit()
            await session.refresh(task)
            logger.debug("created task %s for %s", task.id, owner_id)
            return task

    async def get_by_id(self, task_id: str, owner_id: str) -> Optional[Task]:
        statement = self._owned(task_id, owner_id)
        async with self._session_factory() as session:
            return await session.scalar(statement)

    async def update(self, task_id: str, data: dict, owner_id: str) -> Optional[Task]:
        statement = self._owned(task_id, owner_id)
        async with self._session_factory() as session:
            task = await session.scalar(statement)
            if task is None:
                return None
            for key in UPDATABLE_FIELDS:
                if key in data:
                    setattr(task, key, data[key])
            await session.commit()
            await session.refresh(task)
            return task

    async def delete(self, task_id: str, owner_id: str) -> Optional[Task]:
        statement = self._owned(task_id, owner_id)
        async with self._session_factory() as session:
            task = await session.scalar(statement)
            if task is None:
                return None
            await session.delete(task)
            await session.commit()
            logger.debug("deleted task %s for %s", task_id, owner_id)
            return task

    async def list(self, filters: TaskFilters, owner_id: str) -> TaskPage:
        query = build_task_query(filters, owner_id)

        # page and count are independent reads; each gets its own session
        async def fetch_items():
            async with self._session_factory() as session:
                return list(await session.scalars(query.statement))

        async def fetch_total():
            async with self._session_factory() as session:
                return await session.scalar(query.count_statement)

        # a failure in either read cancels the other and fails the whole listing
        try:
            async with asyncio.TaskGroup() as tg:
                items = tg.create_task(fetch_items())
                total = tg.create_task(fetch_total())
        except ExceptionGroup as group:
            raise group.exceptions[0] from None
        return TaskPage(items=items.result(), total=total.result() or 0, page=query.page, limit=query.limit)
