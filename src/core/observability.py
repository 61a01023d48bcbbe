"""Observability for the analytics engine.

Configures structlog and provides the analysis_trace_wrapper decorator that
logs entry, duration and failures of the engine's public entry points.
Match lists are summarised (type and length), never dumped.
"""

import functools
import sys
import time
import traceback
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar, cast

import structlog
from pydantic import BaseModel, Field
from structlog.contextvars import bind_contextvars, unbind_contextvars

from src.config.settings import get_settings


def configure_logging() -> None:
    """Configure structlog; JSON output unless stderr is a terminal."""
    settings = get_settings()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ],
            ),
            structlog.processors.dict_tracebacks,
            structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer(),  # type: ignore[list-item]
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Cached loggers bypass structlog.testing.capture_logs
        cache_logger_on_first_use=settings.is_production,
    )


configure_logging()

logger = structlog.get_logger()

F = TypeVar("F", bound=Callable[..., Any])


class AnalysisTrace(BaseModel):
    """Execution record for one traced engine call."""

    function_name: str = Field(description="Fully qualified function name")
    execution_id: str = Field(description="Unique execution ID")
    duration_ms: float | None = Field(default=None, description="Execution duration in milliseconds")
    inputs: list[Any] = Field(default_factory=list, description="Summarised positional arguments")
    options: dict[str, Any] = Field(default_factory=dict, description="Summarised keyword arguments")
    result: Any | None = Field(default=None, description="Summarised return value")
    is_success: bool = Field(default=True)
    error_type: str | None = Field(default=None)
    error_message: str | None = Field(default=None)
    metadata: dict[str, Any] = Field(default_factory=dict)


def summarize_value(value: Any, max_length: int = 200) -> Any:
    """Compact, log-safe representation of an argument or result.

    Args:
        value: Value to summarise
        max_length: Maximum string length before truncation

    Returns:
        Scalars unchanged, sequences and models as ``{"type", "len"}`` or
        their class name, anything else as a truncated string
    """
    if value is None or isinstance(value, bool | int | float):
        return value
    if isinstance(value, str):
        return value if len(value) <= max_length else value[:max_length] + "..."
    if isinstance(value, BaseModel):
        return type(value).__name__
    if isinstance(value, Sequence | Mapping):
        return {"type": type(value).__name__, "len": len(value)}
    text = str(value)
    return text if len(text) <= max_length else text[:max_length] + "..."


def analysis_trace_wrapper(
    *,
    capture_result: bool = True,
    capture_args: bool = True,
    log_level: str = "INFO",
    add_metadata: dict[str, Any] | None = None,
) -> Callable[[F], F]:
    """Decorator that traces a synchronous engine function.

    Logs an entry event, a completion event with ``duration_ms`` and, on
    failure, an error event with the traceback before re-raising. The
    execution id is bound through ``structlog.contextvars`` for the duration
    of the call so nested log lines correlate.

    Example:
        >>> @analysis_trace_wrapper(capture_result=False)
        ... def score(matches, puuid): ...
    """
    level_name = log_level.lower()

    def decorator(func: F) -> F:
        function_name = f"{func.__module__}.{func.__name__}"

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            execution_id = f"{function_name}_{int(time.time() * 1000000)}"
            trace = AnalysisTrace(
                function_name=function_name,
                execution_id=execution_id,
                metadata=add_metadata or {},
            )
            if capture_args:
                trace.inputs = [summarize_value(a) for a in args]
                trace.options = {k: summarize_value(v) for k, v in kwargs.items()}

            bind_contextvars(execution_id=execution_id)
            emit = getattr(logger, level_name)
            emit(
                f"Executing function: {function_name}",
                execution_id=execution_id,
                inputs=trace.inputs if capture_args else None,
                options=trace.options if capture_args else None,
                **trace.metadata,
            )

            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                trace.duration_ms = (time.perf_counter() - start_time) * 1000
                trace.is_success = False
                trace.error_type = type(e).__name__
                trace.error_message = str(e)
                logger.error(
                    f"Error in function: {function_name}",
                    execution_id=execution_id,
                    duration_ms=trace.duration_ms,
                    error_type=trace.error_type,
                    error_message=trace.error_message,
                    traceback=traceback.format_exc(),
                )
                raise
            finally:
                unbind_contextvars("execution_id")

            trace.duration_ms = (time.perf_counter() - start_time) * 1000
            if capture_result:
                trace.result = summarize_value(result)
            emit(
                f"Successfully executed: {function_name}",
                execution_id=execution_id,
                duration_ms=trace.duration_ms,
                result=trace.result if capture_result else None,
            )
            return result

        return cast(F, wrapper)

    return decorator


def trace_critical(func: F) -> F:
    """Full tracing for entry points whose inputs matter when debugging."""
    return analysis_trace_wrapper(capture_result=True, capture_args=True, log_level="INFO")(func)


def trace_performance(func: F) -> F:
    """Timing-only tracing at DEBUG level."""
    return analysis_trace_wrapper(capture_result=False, capture_args=False, log_level="DEBUG")(func)
