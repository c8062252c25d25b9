import asyncio
import logging

from taskstore.server.tasks.task_store import TaskStore
from taskstore.types import Task, TaskCreate, TaskPatch


logger = logging.getLogger(__name__)


class InMemoryTaskStore(TaskStore):
    """In-memory implementation of TaskStore.

    Each instance owns its own tasks and id counter. Dict insertion order is
    the listing order; updates replace the value in place and keep it.
    """

    def __init__(self) -> None:
        logger.debug('Initializing InMemoryTaskStore')
        self.tasks: dict[int, Task] = {}
        self.lock = asyncio.Lock()
        self._last_id = 0

    def allocate_id(self) -> int:
        """Returns the next task id. Ids start at 1 and are never reused."""
        self._last_id += 1
        return self._last_id

    async def list_all(self) -> list[Task]:
        async with self.lock:
            return list(self.tasks.values())

    async def get(self, task_id: int) -> Task | None:
        async with self.lock:
            logger.debug('Attempting to get task with id: %s', task_id)
            task = self.tasks.get(task_id)
            if task:
                logger.debug('Task %s retrieved successfully.', task_id)
            else:
                logger.debug('Task %s not found in store.', task_id)
            return task

    async def insert(self, params: TaskCreate) -> Task:
        async with self.lock:
            task = Task(id=self.allocate_id(), **params.model_dump())
            self.tasks[task.id] = task
            logger.info('Task %s saved successfully.', task.id)
            return task

    async def update(self, task_id: int, patch: TaskPatch) -> Task | None:
        async with self.lock:
            task = self.tasks.get(task_id)
            if task is None:
                logger.debug('Task %s not found, nothing to update.', task_id)
                return None
            task = task.model_copy(update=patch.model_dump(exclude_unset=True))
            self.tasks[task_id] = task
            logger.info(
                'Task %s updated fields: %s',
                task_id,
                sorted(patch.model_fields_set),
            )
            return task

    async def delete(self, task_id: int) -> bool:
        async with self.lock:
            logger.debug('Attempting to delete task with id: %s', task_id)
            if task_id not in self.tasks:
                logger.warning(
                    'Attempted to delete nonexistent task with id: %s', task_id
                )
                return False
            del self.tasks[task_id]
            logger.info('Task %s deleted successfully.', task_id)
            return True
