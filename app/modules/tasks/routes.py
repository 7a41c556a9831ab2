from fastapi import APIRouter, Depends
from app.modules.tasks.schemas import TaskCreate, TaskCompletionUpdate, TaskResponse, TaskUpdateResult
from app.modules.tasks.service import TaskService
from app.core.dependencies import get_current_user_id, get_user_supabase
from supabase import Client
from typing import Dict, List
from uuid import UUID

# Plain def routes: the supabase client is synchronous, FastAPI runs these in its threadpool
router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_task_service(
    user_data: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_user_supabase)
) -> TaskService:
    return TaskService(supabase, user_data["id"])


@router.get("", response_model=List[TaskResponse])
def list_tasks(service: TaskService = Depends(get_task_service)):
    """List the current user's tasks, earliest due date first"""
    return service.list_tasks()


@router.post("", response_model=TaskResponse, status_code=201)
def create_task(
    task_data: TaskCreate,
    service: TaskService = Depends(get_task_service)
):
    """Create a task owned by the current user"""
    return service.create_task(task_data)


@router.patch("/{task_id}", response_model=TaskUpdateResult)
def set_task_completion(
    task_id: UUID,
    update: TaskCompletionUpdate,
    service: TaskService = Depends(get_task_service)
):
    """Set a task's completed flag. Unknown or foreign ids update nothing."""
    return TaskUpdateResult(updated=service.set_completion(str(task_id), update.completed))


@router.delete("/{task_id}", status_code=204)
def delete_task(
    task_id: UUID,
    service: TaskService = Depends(get_task_service)
):
    """Delete a task. Unknown or foreign ids delete nothing."""
    service.delete_task(str(task_id))
    return None
