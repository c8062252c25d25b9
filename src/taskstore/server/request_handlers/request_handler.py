from abc import ABC, abstractmethod
from typing import Any

from taskstore.types import Task


class RequestHandler(ABC):
    """Task request handler interface.

    This interface defines the methods that a task server implementation must
    provide to handle incoming HTTP requests. Path ids arrive as raw strings
    and bodies as decoded JSON values; validating them is the handler's job.
    """

    @abstractmethod
    async def on_list_tasks(self) -> list[Task]:
        """Handles `GET /tasks`.

        Returns:
            Every stored task in insertion order.
        """

    @abstractmethod
    async def on_get_task(self, raw_id: str) -> Task:
        """Handles `GET /tasks/{id}`.

        Args:
            raw_id: The id path segment as received.

        Returns:
            The stored `Task`.

        Raises:
            ValidationError: If `raw_id` is not a positive integer.
            NotFoundError: If no task has that id.
        """

    @abstractmethod
    async def on_create_task(self, body: Any) -> Task:
        """Handles `POST /tasks`.

        Args:
            body: The decoded JSON body, `{}` when the request had none.

        Returns:
            The newly created `Task`.

        Raises:
            ValidationError: If the body does not describe a valid task.
        """

    @abstractmethod
    async def on_update_task(self, raw_id: str, body: Any) -> Task:
        """Handles `PUT /tasks/{id}`.

        The id is checked, then its existence, then the body. A body with
        any invalid field changes nothing.

        Args:
            raw_id: The id path segment as received.
            body: The decoded JSON body.

        Returns:
            The updated `Task`.

        Raises:
            ValidationError: If the id or the body is invalid.
            NotFoundError: If no task has that id.
        """

    @abstractmethod
    async def on_delete_task(self, raw_id: str) -> None:
        """Handles `DELETE /tasks/{id}`.

        Raises:
            ValidationError: If `raw_id` is not a positive integer.
            NotFoundError: If no task has that id.
        """
