import functools
from typing import Any, Callable, Optional, TypeVar

from opentelemetry.trace import Status, StatusCode

from ldes_snapshot.telemetry import get_tracer


F = TypeVar('F', bound=Callable[..., Any])


def traced(span_name: Optional[str] = None) -> Callable[[F], F]:
    """Run the decorated function inside an OpenTelemetry span.

    Failures are recorded on the span and re-raised.

    Args:
        span_name: Span name, defaults to the module-qualified function name.
    """

    def decorator(func: F) -> F:
        name = span_name or f"{func.__module__}.{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with get_tracer(func.__module__).start_as_current_span(name) as span:
                try:
                    return func(*args, **kwargs)
                except Exception as exc:
                    span.record_exception(exc)
                    span.set_status(Status(StatusCode.ERROR, str(exc)))
                    raise

        return wrapper  # type: ignore[return-value]

    return decorator
