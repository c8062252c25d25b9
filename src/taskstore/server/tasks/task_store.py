from abc import ABC, abstractmethod

from taskstore.types import Task, TaskCreate, TaskPatch


class TaskStore(ABC):
    """Task Store interface.

    Defines the methods for creating, retrieving, modifying and removing
    `Task` objects. A store allocates task ids itself.
    """

    @abstractmethod
    async def list_all(self) -> list[Task]:
        """Returns every task in insertion order."""

    @abstractmethod
    async def get(self, task_id: int) -> Task | None:
        """Retrieves a task from the store by ID."""

    @abstractmethod
    async def insert(self, params: TaskCreate) -> Task:
        """Stores a new task under a freshly allocated ID and returns it."""

    @abstractmethod
    async def update(self, task_id: int, patch: TaskPatch) -> Task | None:
        """Applies the fields set in `patch`, returns None if the ID is unknown."""

    @abstractmethod
    async def delete(self, task_id: int) -> bool:
        """Deletes a task by ID, returns False if the ID is unknown."""
