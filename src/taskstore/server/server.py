import logging

from typing import Any

from starlette.applications import Starlette

from taskstore.server.apps import TaskStarletteApplication
from taskstore.server.request_handlers import DefaultRequestHandler
from taskstore.server.tasks import InMemoryTaskStore, TaskStore


logger = logging.getLogger(__name__)


class TaskServer:
    """Task server that runs a Starlette application.

    Each server owns one task store. Two servers never share tasks.
    """

    def __init__(self, task_store: TaskStore | None = None):
        """Initializes the TaskServer.

        Args:
            task_store: The store backing this server. A fresh
              `InMemoryTaskStore` is created when omitted.
        """
        self.task_store = task_store or InMemoryTaskStore()
        self.request_handler = DefaultRequestHandler(task_store=self.task_store)

    def app(self, **kwargs: Any) -> Starlette:
        """Builds and returns the Starlette application instance."""
        logger.info('Building task application instance')
        return TaskStarletteApplication(http_handler=self.request_handler).build(
            **kwargs
        )

    def start(self, host: str, port: int, **kwargs: Any) -> None:
        """Starts the server using Uvicorn."""
        logger.info(f'Starting task server on {host}:{port}')
        import uvicorn

        uvicorn.run(self.app(), host=host, port=port, **kwargs)


def create_app(**kwargs: Any) -> Starlette:
    """Returns a Starlette app backed by a new, empty in-memory store."""
    return TaskServer().app(**kwargs)
