"""Todos API routes."""

from fastapi import APIRouter, Depends, status

from ..deps import get_todo_service
from ..middleware.auth import CurrentUser, get_current_user
from ...models import TodoCompletion, TodoCreate, TodoUpdate
from ...services.todo_service import TodoService, TodosView


router = APIRouter(prefix="/todos", tags=["todos"])


@router.get("", response_model=TodosView)
def list_todos(
    current_user: CurrentUser = Depends(get_current_user),
    service: TodoService = Depends(get_todo_service),
) -> TodosView:
    """Todos ordered by due date."""
    return service.get_view(current_user.id)


@router.post("", response_model=TodosView, status_code=status.HTTP_201_CREATED)
def create_todo(
    request: TodoCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: TodoService = Depends(get_todo_service),
) -> TodosView:
    service.create(current_user.id, request)
    return service.get_view(current_user.id)


@router.patch("/{todo_id}", response_model=TodosView)
def update_todo(
    todo_id: str,
    request: TodoUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: TodoService = Depends(get_todo_service),
) -> TodosView:
    service.update(current_user.id, todo_id, request)
    return service.get_view(current_user.id)


@router.put("/{todo_id}/completion", response_model=TodosView)
def set_todo_completion(
    todo_id: str,
    request: TodoCompletion,
    current_user: CurrentUser = Depends(get_current_user),
    service: TodoService = Depends(get_todo_service),
) -> TodosView:
    """Set the completion state explicitly; repeating the request is harmless."""
    service.set_completed(current_user.id, todo_id, request.completed)
    return service.get_view(current_user.id)


@router.delete("/{todo_id}", response_model=TodosView)
def delete_todo(
    todo_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: TodoService = Depends(get_todo_service),
) -> TodosView:
    service.delete(current_user.id, todo_id)
    return service.get_view(current_user.id)
