"""Input parsing helpers shared by the request handlers."""

import logging
import re

from collections.abc import Mapping
from typing import Any, TypeVar

import pydantic

from pydantic import BaseModel

from taskstore.types import TaskCreate, TaskPatch
from taskstore.utils.errors import ValidationError


logger = logging.getLogger(__name__)

ModelT = TypeVar('ModelT', bound=BaseModel)

INVALID_ID_MESSAGE = 'Task id must be a positive integer.'
NOT_AN_OBJECT_MESSAGE = 'Request body must be a JSON object.'
INVALID_JSON_MESSAGE = 'Request body must be valid JSON.'

# Keyed by the first field pydantic reports; None covers model level errors.
CREATE_ERROR_MESSAGES: Mapping[str | None, str] = {
    'title': 'Task title is required.',
    'description': 'Task description must be a string when provided.',
    'completed': 'Task completed flag must be boolean when provided.',
    None: NOT_AN_OBJECT_MESSAGE,
}

UPDATE_ERROR_MESSAGES: Mapping[str | None, str] = {
    'title': 'Task title must be a non-empty string.',
    'description': 'Task description must be a string.',
    'completed': 'Task completed flag must be boolean.',
    None: 'Provide at least one field to update.',
}

_TASK_ID_PATTERN = re.compile(r'[0-9]+')


def parse_task_id(raw_id: str) -> int:
    """Parses a task id taken from a request path.

    Args:
        raw_id: The raw path segment.

    Returns:
        The id as a positive integer.

    Raises:
        ValidationError: If `raw_id` is not a base-10 integer greater than 0.
    """
    if not _TASK_ID_PATTERN.fullmatch(raw_id):
        raise ValidationError(INVALID_ID_MESSAGE)
    try:
        task_id = int(raw_id)
    except ValueError:
        # Beyond the interpreter's int string conversion limit.
        raise ValidationError(INVALID_ID_MESSAGE) from None
    if task_id <= 0:
        raise ValidationError(INVALID_ID_MESSAGE)
    return task_id


def validate_body(
    model: type[ModelT], body: Any, messages: Mapping[str | None, str]
) -> ModelT:
    """Validates a decoded JSON body against `model`.

    Only the first error is reported. pydantic lists field errors in field
    declaration order, so the order of the model's fields decides which
    violation wins.

    Args:
        model: The pydantic model to validate against.
        body: The decoded JSON body.
        messages: Error message per field name.

    Raises:
        ValidationError: With the message of the first failing field.
    """
    if not isinstance(body, dict):
        raise ValidationError(NOT_AN_OBJECT_MESSAGE)
    try:
        return model.model_validate(body)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = first['loc'][0] if first['loc'] else None
        logger.debug(
            f'{model.__name__} rejected: field={field}, type={first["type"]}'
        )
        message = messages.get(field, messages[None])
        raise ValidationError(message) from e


def parse_create_body(body: Any) -> TaskCreate:
    """Validates the body of a create request."""
    return validate_body(TaskCreate, body, CREATE_ERROR_MESSAGES)


def parse_patch_body(body: Any) -> TaskPatch:
    """Validates the body of an update request."""
    return validate_body(TaskPatch, body, UPDATE_ERROR_MESSAGES)
