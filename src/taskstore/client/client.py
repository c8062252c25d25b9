import json

from typing import Any

import httpx

from pydantic import ValidationError

from taskstore.client.errors import TaskClientHTTPError, TaskClientJSONError
from taskstore.types import ErrorResponse, Task
from taskstore.utils.telemetry import SpanKind, trace_class


def _error_message(response: httpx.Response) -> str:
    """Returns the server's `error` message, or the raw body without one."""
    try:
        return ErrorResponse.model_validate(response.json()).error
    except (json.JSONDecodeError, ValidationError):
        return response.text or response.reason_phrase


@trace_class(kind=SpanKind.CLIENT)
class TaskClient:
    """Task Client for interacting with a task service."""

    def __init__(
        self,
        httpx_client: httpx.AsyncClient,
        base_url: str,
        tasks_path: str = '/tasks',
    ):
        """Initializes the TaskClient.

        Args:
            httpx_client: An async HTTP client instance (e.g., httpx.AsyncClient).
            base_url: The base URL of the service.
            tasks_path: The path of the task collection, relative to `base_url`.
        """
        self.url = f'{base_url.rstrip("/")}/{tasks_path.strip("/")}'
        self.httpx_client = httpx_client

    async def list_tasks(
        self, *, http_kwargs: dict[str, Any] | None = None
    ) -> list[Task]:
        """Fetches every task the service holds."""
        data = await self._send_request('GET', self.url, None, http_kwargs)
        try:
            return [Task.model_validate(item) for item in data]
        except (TypeError, ValidationError) as e:
            raise TaskClientJSONError(str(e)) from e

    async def get_task(
        self, task_id: int, *, http_kwargs: dict[str, Any] | None = None
    ) -> Task:
        """Fetches one task by id."""
        return await self._task_request(
            'GET', f'{self.url}/{task_id}', None, http_kwargs
        )

    async def create_task(
        self,
        title: str,
        description: str | None = None,
        completed: bool | None = None,
        *,
        http_kwargs: dict[str, Any] | None = None,
    ) -> Task:
        """Creates a task. Omitted fields take the server's defaults."""
        payload: dict[str, Any] = {'title': title}
        if description is not None:
            payload['description'] = description
        if completed is not None:
            payload['completed'] = completed
        return await self._task_request('POST', self.url, payload, http_kwargs)

    async def update_task(
        self,
        task_id: int,
        *,
        http_kwargs: dict[str, Any] | None = None,
        **fields: Any,
    ) -> Task:
        """Updates the given fields of a task.

        Args:
            task_id: The task to update.
            http_kwargs: Extra keyword arguments for the httpx request.
            **fields: Any of `title`, `description`, `completed`.
        """
        return await self._task_request(
            'PUT', f'{self.url}/{task_id}', fields, http_kwargs
        )

    async def delete_task(
        self, task_id: int, *, http_kwargs: dict[str, Any] | None = None
    ) -> None:
        """Deletes a task by id."""
        await self._send_request(
            'DELETE', f'{self.url}/{task_id}', None, http_kwargs
        )

    async def _task_request(
        self,
        method: str,
        url: str,
        payload: dict[str, Any] | None,
        http_kwargs: dict[str, Any] | None,
    ) -> Task:
        data = await self._send_request(method, url, payload, http_kwargs)
        try:
            return Task.model_validate(data)
        except ValidationError as e:
            raise TaskClientJSONError(str(e)) from e

    async def _send_request(
        self,
        method: str,
        url: str,
        payload: dict[str, Any] | None,
        http_kwargs: dict[str, Any] | None,
    ) -> Any:
        """Sends a request and returns the decoded JSON body.

        Returns None for empty (204) responses.

        Raises:
            TaskClientHTTPError: If the server answers with a non-2xx status
              or the request cannot be sent.
            TaskClientJSONError: If the response body is not valid JSON.
        """
        try:
            response = await self.httpx_client.request(
                method, url, json=payload, **(http_kwargs or {})
            )
        except httpx.RequestError as e:
            raise TaskClientHTTPError(
                503, f'Network communication error: {e}'
            ) from e

        if response.is_error:
            raise TaskClientHTTPError(
                response.status_code, _error_message(response)
            )
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise TaskClientJSONError(str(e)) from e
