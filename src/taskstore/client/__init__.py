"""Client for talking to a task service."""

from taskstore.client.client import TaskClient
from taskstore.client.errors import (
    TaskClientError,
    TaskClientHTTPError,
    TaskClientJSONError,
)


__all__ = [
    'TaskClient',
    'TaskClientError',
    'TaskClientHTTPError',
    'TaskClientJSONError',
]
