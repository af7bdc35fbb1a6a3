from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from tasktrack.schemas.common import PageMeta


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    title: str
    description: str = ""
    status: str
    priority: str
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    owner_id: str = Field(alias="owner")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class TaskResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: TaskOut


class TaskListResponse(BaseModel):
    success: bool = True
    data: List[TaskOut]
    meta: PageMeta
