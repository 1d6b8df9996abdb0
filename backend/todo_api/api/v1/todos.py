from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session
from ...core.errors import NotFound, ValidationError
from ...db.session import get_session
from ...schemas.todos import DeleteResult, TodoCreate, TodoDelete, TodoFilter, TodoOut, TodoPatch, TodoUpdate
from ...services import todos as handlers
from typing import List, Optional

router = APIRouter(tags=["todos"])

@router.post("/todos", response_model=TodoOut, status_code=status.HTTP_201_CREATED)
def create(body: TodoCreate, session: Session = Depends(get_session)):
    try:
        return handlers.create_todo(session, body)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

@router.get("/todos", response_model=List[TodoOut])
def list_all(completed: Optional[bool] = None, session: Session = Depends(get_session)):
    return handlers.get_todos(session, TodoFilter(completed=completed))

@router.patch("/todos/{todo_id}", response_model=TodoOut)
def update(todo_id: int, body: TodoPatch, session: Session = Depends(get_session)):
    try:
        return handlers.update_todo(session, TodoUpdate(id=todo_id, **body.model_dump()))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.delete("/todos/{todo_id}", response_model=DeleteResult)
def delete(todo_id: int, session: Session = Depends(get_session)):
    return handlers.delete_todo(session, TodoDelete(id=todo_id))
