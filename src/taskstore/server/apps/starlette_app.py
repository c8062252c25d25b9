import json
import logging

from collections.abc import Awaitable
from typing import Any

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from taskstore.server.request_handlers.request_handler import RequestHandler
from taskstore.types import ErrorResponse, Task
from taskstore.utils.errors import ServerError, ValidationError
from taskstore.utils.validation import INVALID_JSON_MESSAGE


logger = logging.getLogger(__name__)


class TaskStarletteApplication:
    """A Starlette application exposing the task CRUD endpoints.

    Decodes request bodies, routes each request to the matching handler
    method and turns `ServerError`s into JSON error responses.
    """

    def __init__(self, http_handler: RequestHandler):
        """Initializes the TaskStarletteApplication.

        Args:
            http_handler: The handler instance responsible for processing
              task requests via http.
        """
        self.handler = http_handler

    def _generate_error_response(self, error: ServerError) -> JSONResponse:
        """Creates a JSONResponse carrying `error` and logs it.

        Client errors are logged as warnings, anything else as an error.
        """
        log_level = (
            logging.WARNING if error.status_code < 500 else logging.ERROR
        )
        logger.log(
            log_level,
            f'Request Error: Status={error.status_code}, '
            f"Message='{error.message}'",
        )
        return JSONResponse(
            ErrorResponse(error=error.message).model_dump(mode='json'),
            status_code=error.status_code,
        )

    @staticmethod
    def _task_response(task: Task, status_code: int = 200) -> JSONResponse:
        return JSONResponse(task.model_dump(mode='json'), status_code=status_code)

    @staticmethod
    async def _read_json_body(request: Request) -> Any:
        """Decodes the request body, an empty body decodes to `{}`."""
        body = await request.body()
        if not body.strip():
            return {}
        try:
            return json.loads(body)
        except ValueError as e:
            raise ValidationError(INVALID_JSON_MESSAGE) from e

    async def _respond(self, operation: Awaitable[Response]) -> Response:
        """Awaits `operation` and converts raised errors into responses.

        A failed request never propagates an exception to the server, so
        later requests are served normally.
        """
        try:
            return await operation
        except ServerError as e:
            return self._generate_error_response(e)
        except Exception as e:
            logger.exception(f'Unhandled exception: {e}')
            return self._generate_error_response(
                ServerError('Internal server error.')
            )

    async def _process_collection_request(self, request: Request) -> Response:
        match request.method:
            case 'POST':
                body = await self._read_json_body(request)
                task = await self.handler.on_create_task(body)
                return self._task_response(task, status_code=201)
            case _:
                tasks = await self.handler.on_list_tasks()
                return JSONResponse(
                    [task.model_dump(mode='json') for task in tasks]
                )

    async def _process_item_request(self, request: Request) -> Response:
        raw_id: str = request.path_params['task_id']
        match request.method:
            case 'PUT':
                body = await self._read_json_body(request)
                task = await self.handler.on_update_task(raw_id, body)
                return self._task_response(task)
            case 'DELETE':
                await self.handler.on_delete_task(raw_id)
                return Response(status_code=204)
            case _:
                task = await self.handler.on_get_task(raw_id)
                return self._task_response(task)

    async def _handle_tasks(self, request: Request) -> Response:
        """Handles `GET` and `POST` on the task collection."""
        return await self._respond(self._process_collection_request(request))

    async def _handle_task(self, request: Request) -> Response:
        """Handles `GET`, `PUT` and `DELETE` on a single task."""
        return await self._respond(self._process_item_request(request))

    def routes(self, tasks_url: str = '/tasks') -> list[Route]:
        """Returns the Starlette Routes for handling task requests.

        Args:
            tasks_url: The URL path of the task collection. Single tasks
              live at `{tasks_url}/{id}`.

        Returns:
            A list of Starlette Route objects.
        """
        tasks_url = tasks_url.rstrip('/')
        return [
            Route(
                tasks_url,
                self._handle_tasks,
                methods=['GET', 'POST'],
                name='tasks',
            ),
            Route(
                f'{tasks_url}/{{task_id}}',
                self._handle_task,
                methods=['GET', 'PUT', 'DELETE'],
                name='task',
            ),
        ]

    def build(self, tasks_url: str = '/tasks', **kwargs: Any) -> Starlette:
        """Builds and returns the Starlette application instance.

        Args:
            tasks_url: The URL path of the task collection.
            **kwargs: Additional keyword arguments to pass to the Starlette
              constructor.

        Returns:
            A configured Starlette application instance.
        """
        app_routes = self.routes(tasks_url)
        if 'routes' in kwargs:
            kwargs['routes'].extend(app_routes)
        else:
            kwargs['routes'] = app_routes

        return Starlette(**kwargs)
