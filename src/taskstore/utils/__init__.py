"""Utility functions for the task service."""

from taskstore.utils.errors import NotFoundError, ServerError, ValidationError
from taskstore.utils.validation import (
    parse_create_body,
    parse_patch_body,
    parse_task_id,
)


__all__ = [
    'NotFoundError',
    'ServerError',
    'ValidationError',
    'parse_create_body',
    'parse_patch_body',
    'parse_task_id',
]
