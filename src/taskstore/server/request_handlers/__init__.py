"""Request handler components for the task server."""

from taskstore.server.request_handlers.default_request_handler import (
    DefaultRequestHandler,
)
from taskstore.server.request_handlers.request_handler import RequestHandler


__all__ = [
    'DefaultRequestHandler',
    'RequestHandler',
]
