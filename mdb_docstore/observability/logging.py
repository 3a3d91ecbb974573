"""
Contextual logging for MDB_DOCSTORE.

Log records emitted through :func:`get_logger` carry the current correlation
ID and the database/collection the calling task is working on, both held in
context variables so concurrent tasks never see each other's values.
"""

import contextvars
import logging
import uuid
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)

_store_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar(
    "store_context", default=None
)


def get_correlation_id() -> str | None:
    """Get the current correlation ID from context."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Set a correlation ID in the current context.

    Args:
        correlation_id: Optional correlation ID (generates new one if None)

    Returns:
        The correlation ID that was set
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())
    _correlation_id.set(correlation_id)
    return correlation_id


def clear_correlation_id() -> None:
    _correlation_id.set(None)


@contextmanager
def store_context(
    database: str | None = None, collection: str | None = None, **extra: Any
) -> Iterator[dict[str, Any]]:
    """
    Attach database/collection names to every log record inside the block.

    Nested blocks inherit the outer values and may override them; the outer
    context is restored on exit.

    Example:
        with store_context(database="shop", collection="orders"):
            logger.info("Replacing order")
    """
    parent = _store_context.get() or {}
    context = dict(parent)
    if database is not None:
        context["database"] = database
    if collection is not None:
        context["collection"] = collection
    context.update(extra)

    token = _store_context.set(context)
    try:
        yield context
    finally:
        _store_context.reset(token)


def get_logging_context() -> dict[str, Any]:
    """
    Get current logging context (timestamp, correlation ID and store context).
    """
    context: dict[str, Any] = {"timestamp": datetime.now().isoformat()}

    correlation_id = get_correlation_id()
    if correlation_id:
        context["correlation_id"] = correlation_id

    current = _store_context.get()
    if current:
        context.update(current)

    return context


class ContextualLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that merges the logging context into ``extra``.

    Explicit ``extra`` values passed at the call site take precedence.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        context = get_logging_context()
        context.update(kwargs.get("extra") or {})
        kwargs["extra"] = context
        return msg, kwargs


def get_logger(name: str) -> ContextualLoggerAdapter:
    """
    Get a contextual logger for ``name`` (typically ``__name__``).
    """
    return ContextualLoggerAdapter(logging.getLogger(name), {})
