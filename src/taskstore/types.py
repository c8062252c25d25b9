"""Pydantic models for tasks and the request bodies that create or modify them."""

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    StrictBool,
    StrictStr,
    field_validator,
    model_validator,
)


def _clean_text(value: str, *, allow_blank: bool) -> str:
    """Trims `value` and checks it can be sent back as UTF-8.

    JSON escapes can smuggle in lone surrogates, which decode fine but fail
    when the task is rendered.
    """
    try:
        value.encode('utf-8')
    except UnicodeEncodeError as e:
        raise ValueError('text must be valid unicode') from e
    value = value.strip()
    if not value and not allow_blank:
        raise ValueError('must not be blank')
    return value


class Task(BaseModel):
    """A single task held by a task store."""

    id: int
    """Store-assigned identifier, positive and never reused."""
    title: str
    description: str = ''
    completed: bool = False


class TaskCreate(BaseModel):
    """Body of a create request.

    Fields are declared in the order they are checked, so the first error
    pydantic reports is the one the caller sees.
    """

    model_config = ConfigDict(extra='ignore')

    title: StrictStr
    description: StrictStr = ''
    completed: StrictBool = False

    @field_validator('title')
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        return _clean_text(value, allow_blank=False)

    @field_validator('description')
    @classmethod
    def strip_description(cls, value: str) -> str:
        return _clean_text(value, allow_blank=True)


class TaskPatch(BaseModel):
    """Body of an update request.

    Only the keys present in the body end up in `model_fields_set`; the
    store applies exactly those.
    """

    model_config = ConfigDict(extra='ignore')

    title: StrictStr | None = None
    description: StrictStr | None = None
    completed: StrictBool | None = None

    @model_validator(mode='before')
    @classmethod
    def require_one_field(cls, data: Any) -> Any:
        if isinstance(data, dict) and not any(
            name in data for name in cls.model_fields
        ):
            raise ValueError('no updatable field present')
        return data

    @field_validator('title', 'description', 'completed', mode='before')
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        # An explicit null is a present field with the wrong type.
        if value is None:
            raise ValueError('must not be null')
        return value

    @field_validator('title')
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        return _clean_text(value, allow_blank=False)

    @field_validator('description')
    @classmethod
    def strip_description(cls, value: str) -> str:
        return _clean_text(value, allow_blank=True)


class ErrorResponse(BaseModel):
    """JSON body returned for every failed request."""

    error: str
