from enum import Enum
from fastapi.concurrency import run_in_threadpool
from app.core.errors import RequestError
from app.core.guard import AuthRedirectGuard
from app.core.notifications import Notifier
from app.modules.tasks.schemas import TaskCreate, TaskResponse
from app.modules.tasks.service import TaskService
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class ViewState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    LOADING = "loading"
    READY = "ready"


class TaskListController:
    """
    Drives the task list view: session check, fetch, mutate, refetch.

    Mutations are never applied locally; each successful one is followed by a
    fresh list_tasks(), unless the caller reloads the view itself
    (refetch=False). Failures become destructive toasts and leave the list as
    it was.
    """

    def __init__(self, guard: AuthRedirectGuard, notifier: Optional[Notifier] = None):
        self.guard = guard
        self.notifier = notifier or Notifier()
        self.state = ViewState.UNAUTHENTICATED
        self.tasks: List[TaskResponse] = []
        self.service: Optional[TaskService] = None

    async def mount(self, fetch: bool = True) -> ViewState:
        try:
            session_present = await run_in_threadpool(self.guard.check)
        except RequestError as e:
            # auth service unreachable: not a logout, just nothing to show yet
            self.notifier.error(e.detail)
            self.state = ViewState.READY
            return self.state
        if not session_present:
            self.state = ViewState.UNAUTHENTICATED
            return self.state

        context = self.guard.context
        self.service = TaskService(context.client, context.user_id)
        if fetch:
            await self.refresh()
        else:
            self.state = ViewState.READY
        return self.state

    async def refresh(self) -> None:
        if not self._active():
            return
        self.state = ViewState.LOADING
        try:
            self.tasks = await run_in_threadpool(self.service.list_tasks)
        except RequestError as e:
            self.notifier.error(e.detail)
        finally:
            self.state = ViewState.UNAUTHENTICATED if self.guard.redirected else ViewState.READY

    async def add_task(self, task_data: TaskCreate, refetch: bool = True) -> bool:
        if not self._active():
            return False
        try:
            await run_in_threadpool(self.service.create_task, task_data)
        except RequestError as e:
            self.notifier.error(e.detail)
            return False
        self.notifier.success("Task added successfully")
        if refetch:
            await self.refresh()
        return True

    async def toggle_task(self, task_id: str, current_status: bool, refetch: bool = True) -> bool:
        if not self._active():
            return False
        try:
            await run_in_threadpool(self.service.set_completion, task_id, not current_status)
        except RequestError as e:
            self.notifier.error(e.detail)
            return False
        if refetch:
            await self.refresh()
        return True

    async def remove_task(self, task_id: str, refetch: bool = True) -> bool:
        if not self._active():
            return False
        try:
            await run_in_threadpool(self.service.delete_task, task_id)
        except RequestError as e:
            self.notifier.error(e.detail)
            return False
        self.notifier.success("Task deleted successfully")
        if refetch:
            await self.refresh()
        return True

    async def logout(self) -> None:
        try:
            await run_in_threadpool(self.guard.context.sign_out)
        except Exception as e:
            logger.error(f"Sign out failed: {e}")
        # sign_out normally notifies the guard; make sure the view leaves either way
        self.guard.redirect()
        self.state = ViewState.UNAUTHENTICATED

    def _active(self) -> bool:
        if self.guard.redirected:
            self.state = ViewState.UNAUTHENTICATED
            return False
        return self.service is not None
