"""OpenTelemetry tracing decorators for the task service.

`trace_function` wraps a sync or async callable in a span, `trace_class`
applies it to the public methods of a class. Spans record raised exceptions
and set their status to ERROR; successful calls end with status OK.

Nothing is exported unless the host process configures an OpenTelemetry
SDK, so the decorators are safe to leave on in tests.

Usage:
    ```python
    @trace_function(span_name='tasks.reindex')
    async def reindex(): ...


    @trace_class(kind=SpanKind.SERVER)
    class Handler: ...
    ```
"""

import functools
import inspect
import logging

from collections.abc import Callable
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import SpanKind as _SpanKind
from opentelemetry.trace import StatusCode


SpanKind = _SpanKind
__all__ = ['SpanKind', 'trace_class', 'trace_function']
INSTRUMENTING_MODULE_NAME = 'taskstore'
INSTRUMENTING_MODULE_VERSION = '0.1.0'

logger = logging.getLogger(__name__)


def _start_span(name: str, kind: SpanKind, attributes: dict[str, Any] | None):
    tracer = trace.get_tracer(
        INSTRUMENTING_MODULE_NAME, INSTRUMENTING_MODULE_VERSION
    )
    return tracer.start_as_current_span(
        name, kind=kind, attributes=attributes
    )


def _record_failure(span, error: Exception) -> None:
    span.record_exception(error)
    span.set_status(StatusCode.ERROR, description=str(error))


def trace_function(
    func: Callable | None = None,
    *,
    span_name: str | None = None,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: dict[str, Any] | None = None,
):
    """Traces each call of the decorated function in its own span.

    Works bare (`@trace_function`) or with arguments
    (`@trace_function(span_name='x')`).

    Args:
        func: The function to wrap. None when used with arguments.
        span_name: Span name, defaults to `module.qualname` of `func`.
        kind: The span kind.
        attributes: Static attributes set on every span.
    """
    if func is None:
        return functools.partial(
            trace_function,
            span_name=span_name,
            kind=kind,
            attributes=attributes,
        )

    name = span_name or f'{func.__module__}.{func.__qualname__}'

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            with _start_span(name, kind, attributes) as span:
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    _record_failure(span, e)
                    raise
                span.set_status(StatusCode.OK)
                return result

        return async_wrapper

    @functools.wraps(func)
    def sync_wrapper(*args, **kwargs):
        with _start_span(name, kind, attributes) as span:
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _record_failure(span, e)
                raise
            span.set_status(StatusCode.OK)
            return result

    return sync_wrapper


def trace_class(
    include_list: list[str] | None = None,
    exclude_list: list[str] | None = None,
    kind: SpanKind = SpanKind.INTERNAL,
):
    """Class decorator applying `trace_function` to methods of a class.

    Dunder, static and class methods are never traced. When `include_list` is given only those
    methods are traced, otherwise every method not in `exclude_list` is.
    Span names are `module.Class.method`.
    """
    exclude_list = exclude_list or []

    def decorator(cls):
        for name, method in inspect.getmembers(cls, inspect.isfunction):
            if name.startswith('__') and name.endswith('__'):
                continue
            # Rebinding would turn these into instance methods.
            if isinstance(
                inspect.getattr_static(cls, name), staticmethod | classmethod
            ):
                continue
            if include_list and name not in include_list:
                continue
            if not include_list and name in exclude_list:
                continue
            logger.debug(f'Tracing {cls.__name__}.{name}')
            setattr(
                cls,
                name,
                trace_function(
                    span_name=f'{cls.__module__}.{cls.__name__}.{name}',
                    kind=kind,
                )(method),
            )
        return cls

    return decorator
