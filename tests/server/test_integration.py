from typing import Any
from unittest import mock

import pytest

from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from taskstore.server import TaskServer, create_app
from taskstore.server.apps import TaskStarletteApplication
from taskstore.server.request_handlers import DefaultRequestHandler
from taskstore.server.tasks import InMemoryTaskStore
from taskstore.types import Task


# === TEST SETUP ===

FIRST_TASK: dict[str, Any] = {
    'id': 1,
    'title': 'First task',
    'description': '',
    'completed': False,
}


@pytest.fixture
def client() -> TestClient:
    """Create a test client with a fresh app."""
    return TestClient(create_app())


def create_task(client: TestClient, **fields: Any) -> dict[str, Any]:
    response = client.post('/tasks', json=fields)
    assert response.status_code == 201
    return response.json()


# === BASIC FUNCTIONALITY TESTS ===


def test_full_lifecycle(client: TestClient):
    """Create, list, update, delete and then miss a task."""
    response = client.post('/tasks', json={'title': 'First task'})
    assert response.status_code == 201
    assert response.json() == FIRST_TASK

    response = client.get('/tasks')
    assert response.status_code == 200
    assert response.json() == [FIRST_TASK]

    response = client.put('/tasks/1', json={'completed': True})
    assert response.status_code == 200
    assert response.json() == {**FIRST_TASK, 'completed': True}

    response = client.delete('/tasks/1')
    assert response.status_code == 204
    assert response.content == b''

    response = client.get('/tasks/1')
    assert response.status_code == 404
    assert response.json() == {'error': 'Task not found.'}


def test_list_empty(client: TestClient):
    response = client.get('/tasks')
    assert response.status_code == 200
    assert response.json() == []


def test_get_returns_created_task(client: TestClient):
    created = create_task(client, title='Lookup', description='Find me')
    response = client.get(f'/tasks/{created["id"]}')
    assert response.status_code == 200
    assert response.json() == created


def test_list_preserves_insertion_order(client: TestClient):
    ids = [create_task(client, title=f'task {i}')['id'] for i in range(3)]
    client.put(f'/tasks/{ids[0]}', json={'title': 'renamed'})
    assert [task['id'] for task in client.get('/tasks').json()] == ids


# === VALIDATION TESTS ===


@pytest.mark.parametrize(
    'body',
    [{}, {'title': ''}, {'title': 'Valid', 'completed': 'yes'}],
)
def test_create_validation(client: TestClient, body: dict[str, Any]):
    response = client.post('/tasks', json=body)
    assert response.status_code == 400
    assert 'error' in response.json()


def test_create_without_body(client: TestClient):
    response = client.post('/tasks')
    assert response.status_code == 400
    assert response.json() == {'error': 'Task title is required.'}


def test_create_with_malformed_json(client: TestClient):
    response = client.post(
        '/tasks',
        content=b'{"title": ',
        headers={'content-type': 'application/json'},
    )
    assert response.status_code == 400
    assert response.json() == {'error': 'Request body must be valid JSON.'}


def test_create_with_non_object_body(client: TestClient):
    response = client.post('/tasks', json=['title'])
    assert response.status_code == 400
    assert response.json() == {'error': 'Request body must be a JSON object.'}


@pytest.mark.parametrize('raw_id', ['abc', '0', '-4', '2.5'])
def test_invalid_ids(client: TestClient, raw_id: str):
    for method in ('get', 'delete'):
        response = getattr(client, method)(f'/tasks/{raw_id}')
        assert response.status_code == 400
        assert response.json() == {
            'error': 'Task id must be a positive integer.'
        }
    response = client.put(f'/tasks/{raw_id}', json={'title': 'x'})
    assert response.status_code == 400


def test_create_with_lone_surrogate_keeps_list_working(client: TestClient):
    response = client.post(
        '/tasks',
        content=b'{"title": "a\\ud800"}',
        headers={'content-type': 'application/json'},
    )
    assert response.status_code == 400
    assert response.json() == {'error': 'Task title is required.'}

    response = client.get('/tasks')
    assert response.status_code == 200
    assert response.json() == []


def test_update_with_lone_surrogate_changes_nothing(client: TestClient):
    created = create_task(client, title='Clean')
    url = f'/tasks/{created["id"]}'
    response = client.put(
        url,
        content=b'{"description": "\\udfff"}',
        headers={'content-type': 'application/json'},
    )
    assert response.status_code == 400
    assert response.json() == {'error': 'Task description must be a string.'}
    assert client.get(url).json() == created


def test_id_beyond_int_conversion_limit(client: TestClient):
    response = client.get('/tasks/' + '9' * 5000)
    assert response.status_code == 400
    assert response.json() == {'error': 'Task id must be a positive integer.'}


def test_body_parsed_regardless_of_content_type(client: TestClient):
    response = client.post(
        '/tasks',
        content=b'{"title": "plain"}',
        headers={'content-type': 'text/plain'},
    )
    assert response.status_code == 201
    assert response.json()['title'] == 'plain'


def test_unknown_id(client: TestClient):
    assert client.get('/tasks/999').status_code == 404
    assert client.put('/tasks/999', json={'title': 'x'}).status_code == 404
    assert client.delete('/tasks/999').status_code == 404


def test_update_validation(client: TestClient):
    created = create_task(client, title='No-op')
    url = f'/tasks/{created["id"]}'

    response = client.put(url, json={})
    assert response.status_code == 400
    assert response.json() == {
        'error': 'Provide at least one field to update.'
    }

    response = client.put(url, json={'completed': 'yes'})
    assert response.status_code == 400
    assert response.json() == {
        'error': 'Task completed flag must be boolean.'
    }

    assert client.get(url).json() == created


def test_update_unknown_id_reported_before_body(client: TestClient):
    response = client.put('/tasks/7', json={})
    assert response.status_code == 404


def test_ids_not_reused_after_delete(client: TestClient):
    first = create_task(client, title='a')
    client.delete(f'/tasks/{first["id"]}')
    second = create_task(client, title='b')
    assert second['id'] > first['id']


def test_apps_do_not_share_tasks():
    client_a = TestClient(create_app())
    client_b = TestClient(create_app())
    create_task(client_a, title='only in a')
    assert client_b.get('/tasks').json() == []


def test_method_not_allowed(client: TestClient):
    assert client.patch('/tasks/1', json={'title': 'x'}).status_code == 405
    assert client.delete('/tasks').status_code == 405


# === APPLICATION BUILD TESTS ===


def test_custom_tasks_url():
    app = TaskStarletteApplication(
        DefaultRequestHandler(task_store=InMemoryTaskStore())
    )
    client = TestClient(app.build(tasks_url='/api/todo/'))
    response = client.post('/api/todo', json={'title': 'x'})
    assert response.status_code == 201
    assert client.get('/api/todo/1').json()['title'] == 'x'


def test_build_with_extra_routes():
    def health(request):
        return JSONResponse({'status': 'ok'})

    app = TaskServer().app(routes=[Route('/health', health, methods=['GET'])])
    client = TestClient(app)

    assert client.get('/health').json() == {'status': 'ok'}
    assert client.get('/tasks').status_code == 200


def test_server_uses_given_store():
    store = InMemoryTaskStore()
    client = TestClient(TaskServer(task_store=store).app())
    create_task(client, title='stored')
    assert list(store.tasks.values()) == [Task(id=1, title='stored')]


# === ERROR HANDLING TESTS ===


def test_unhandled_exception_returns_500():
    handler = mock.AsyncMock()
    handler.on_list_tasks.side_effect = RuntimeError('boom')
    client = TestClient(TaskStarletteApplication(handler).build())

    response = client.get('/tasks')
    assert response.status_code == 500
    assert response.json() == {'error': 'Internal server error.'}


def test_server_keeps_serving_after_errors(client: TestClient):
    client.get('/tasks/abc')
    client.post('/tasks', json={})
    client.get('/tasks/5')
    assert client.post('/tasks', json={'title': 'still up'}).status_code == 201
