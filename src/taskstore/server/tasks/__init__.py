"""Components for storing tasks within the task server."""

from taskstore.server.tasks.inmemory_task_store import InMemoryTaskStore
from taskstore.server.tasks.task_store import TaskStore


__all__ = [
    'InMemoryTaskStore',
    'TaskStore',
]
