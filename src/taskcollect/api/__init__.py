"""API routers for TaskCollect."""

from taskcollect.api.tasks import router as tasks_router

__all__ = ["tasks_router"]
