import logging

from typing import Any

from taskstore.server.request_handlers.request_handler import RequestHandler
from taskstore.server.tasks import TaskStore
from taskstore.types import Task
from taskstore.utils.errors import NotFoundError
from taskstore.utils.telemetry import SpanKind, trace_class
from taskstore.utils.validation import (
    parse_create_body,
    parse_patch_body,
    parse_task_id,
)


logger = logging.getLogger(__name__)


@trace_class(kind=SpanKind.SERVER)
class DefaultRequestHandler(RequestHandler):
    """Default request handler for all incoming requests.

    Validates ids and bodies, then delegates to the `TaskStore` it was
    constructed with.
    """

    def __init__(self, task_store: TaskStore) -> None:
        """Initializes the DefaultRequestHandler.

        Args:
            task_store: The `TaskStore` instance holding this server's tasks.
        """
        self.task_store = task_store

    async def on_list_tasks(self) -> list[Task]:
        """Default handler for `GET /tasks`."""
        return await self.task_store.list_all()

    async def on_get_task(self, raw_id: str) -> Task:
        """Default handler for `GET /tasks/{id}`."""
        task_id = parse_task_id(raw_id)
        task = await self.task_store.get(task_id)
        if not task:
            raise NotFoundError()
        return task

    async def on_create_task(self, body: Any) -> Task:
        """Default handler for `POST /tasks`."""
        params = parse_create_body(body)
        return await self.task_store.insert(params)

    async def on_update_task(self, raw_id: str, body: Any) -> Task:
        """Default handler for `PUT /tasks/{id}`.

        Existence is checked before the body so an unknown id reports 404
        even when the body is also invalid.
        """
        task_id = parse_task_id(raw_id)
        if not await self.task_store.get(task_id):
            raise NotFoundError()

        patch = parse_patch_body(body)
        task = await self.task_store.update(task_id, patch)
        if not task:
            # Deleted between the lookup and the update.
            raise NotFoundError()
        return task

    async def on_delete_task(self, raw_id: str) -> None:
        """Default handler for `DELETE /tasks/{id}`."""
        task_id = parse_task_id(raw_id)
        if not await self.task_store.delete(task_id):
            raise NotFoundError()
