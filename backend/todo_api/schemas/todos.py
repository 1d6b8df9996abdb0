from datetime import datetime
from typing import Optional
from pydantic import BaseModel

# Length bounds are enforced by the handlers (ValidationError), not here,
# so direct callers and HTTP callers fail the same way.

class TodoCreate(BaseModel):
    title: str

class TodoFilter(BaseModel):
    completed: Optional[bool] = None

class TodoPatch(BaseModel):
    """Fields to change; None means "leave as is"."""
    title: Optional[str] = None
    completed: Optional[bool] = None

    def is_empty(self) -> bool:
        return self.title is None and self.completed is None

class TodoUpdate(TodoPatch):
    id: int

    def patch(self) -> TodoPatch:
        return TodoPatch(title=self.title, completed=self.completed)

class TodoDelete(BaseModel):
    id: int

class TodoOut(BaseModel):
    id: int
    title: str
    completed: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class DeleteResult(BaseModel):
    success: bool
