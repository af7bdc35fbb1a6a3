from typing import List, Optional

from pydantic import BaseModel


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: Optional[List[FieldError]] = None


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    pages: int
