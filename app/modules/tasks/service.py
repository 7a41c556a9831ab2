from supabase import Client
from app.core.errors import FetchError, RequestError
from app.modules.tasks.schemas import TaskCreate, TaskResponse
from typing import List
import logging

logger = logging.getLogger(__name__)


class TaskService:
    """
    CRUD on the tasks table.

    The client must carry the caller's JWT: ownership filtering is done by the
    row-level security policies, not here. Updates and deletes that touch no
    row (absent id, or a task owned by someone else) are not errors.
    """

    def __init__(self, supabase: Client, user_id: str):
        self.supabase = supabase
        self.user_id = user_id

    def list_tasks(self) -> List[TaskResponse]:
        """All of the caller's tasks, earliest due date first"""
        try:
            result = self.supabase.table("tasks")\
                .select("*")\
                .order("due_date", desc=False)\
                .execute()
        except Exception as e:
            logger.error(f"Error listing tasks for {self.user_id}: {e}")
            raise FetchError(str(e))
        return [TaskResponse(**task) for task in result.data or []]

    def create_task(self, task_data: TaskCreate) -> TaskResponse:
        try:
            result = self.supabase.table("tasks").insert({
                "user_id": self.user_id,
                "description": task_data.description,
                "due_date": task_data.due_date.isoformat(),
                "completed": False
            }).execute()
        except Exception as e:
            logger.error(f"Error creating task for {self.user_id}: {e}")
            raise RequestError(str(e))

        if not result.data:
            raise RequestError("Failed to create task")

        return TaskResponse(**result.data[0])

    def set_completion(self, task_id: str, completed: bool) -> int:
        """Set the completed flag; returns the number of rows changed"""
        try:
            result = self.supabase.table("tasks")\
                .update({"completed": completed})\
                .eq("id", task_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error updating task {task_id}: {e}")
            raise RequestError(str(e))
        return len(result.data or [])

    def delete_task(self, task_id: str) -> int:
        try:
            result = self.supabase.table("tasks")\
                .delete()\
                .eq("id", task_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error deleting task {task_id}: {e}")
            raise RequestError(str(e))
        return len(result.data or [])
