"""
In-process operation metrics for MDB_DOCSTORE.

Every facade call is timed and counted here so that callers can inspect
latency and error rates without an external metrics backend.
"""

import functools
import inspect
import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, TypeVar

from ..constants import MAX_TRACKED_OPERATIONS
from .logging import get_logger

contextual_logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


@dataclass
class OperationMetrics:
    """Running totals for one operation key."""

    operation_name: str
    count: int = 0
    total_duration_ms: float = 0.0
    min_duration_ms: float = float("inf")
    max_duration_ms: float = 0.0
    error_count: int = 0
    last_execution: datetime | None = None

    @property
    def avg_duration_ms(self) -> float:
        return self.total_duration_ms / self.count if self.count > 0 else 0.0

    @property
    def error_rate(self) -> float:
        """Error rate as a percentage of executions."""
        return (self.error_count / self.count * 100) if self.count > 0 else 0.0

    def record(self, duration_ms: float, success: bool = True) -> None:
        self.count += 1
        self.total_duration_ms += duration_ms
        self.min_duration_ms = min(self.min_duration_ms, duration_ms)
        self.max_duration_ms = max(self.max_duration_ms, duration_ms)
        if not success:
            self.error_count += 1
        self.last_execution = datetime.now()

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation_name,
            "count": self.count,
            "avg_duration_ms": round(self.avg_duration_ms, 2),
            "min_duration_ms": (
                round(self.min_duration_ms, 2) if self.min_duration_ms != float("inf") else 0.0
            ),
            "max_duration_ms": round(self.max_duration_ms, 2),
            "error_count": self.error_count,
            "error_rate_percent": round(self.error_rate, 2),
            "last_execution": (self.last_execution.isoformat() if self.last_execution else None),
        }


class MetricsCollector:
    """
    Thread-safe collector keyed by operation name plus optional tags.

    Motor completes driver calls on its worker threads, so recording is
    guarded by a lock. Once ``max_metrics`` distinct keys exist the least
    recently recorded key is evicted.
    """

    def __init__(self, max_metrics: int = MAX_TRACKED_OPERATIONS):
        self._metrics: OrderedDict[str, OperationMetrics] = OrderedDict()
        self._lock = threading.Lock()
        self._max_metrics = max_metrics

    @staticmethod
    def _key(operation_name: str, tags: dict[str, Any]) -> str:
        if not tags:
            return operation_name
        tag_str = ",".join(f"{k}={v}" for k, v in sorted(tags.items()))
        return f"{operation_name}[{tag_str}]"

    def record_operation(
        self, operation_name: str, duration_ms: float, success: bool = True, **tags: Any
    ) -> None:
        """
        Record one execution of ``operation_name``.

        Args:
            operation_name: Dotted operation name (e.g., "documents.create")
            duration_ms: Duration in milliseconds
            success: Whether the operation succeeded
            **tags: Extra dimensions (collection, database, ...)
        """
        key = self._key(operation_name, tags)

        with self._lock:
            metric = self._metrics.get(key)
            if metric is None:
                if len(self._metrics) >= self._max_metrics:
                    self._metrics.popitem(last=False)
                metric = self._metrics[key] = OperationMetrics(operation_name=operation_name)
            else:
                self._metrics.move_to_end(key)
            metric.record(duration_ms, success)

    def get_metrics(self, operation_name: str | None = None) -> dict[str, Any]:
        """
        Snapshot of recorded metrics, optionally limited to keys starting
        with ``operation_name``.
        """
        with self._lock:
            metrics = {
                key: metric.to_dict()
                for key, metric in self._metrics.items()
                if operation_name is None or key.startswith(operation_name)
            }
            total_operations = len(self._metrics)

        return {
            "timestamp": datetime.now().isoformat(),
            "metrics": metrics,
            "total_operations": total_operations,
        }

    def get_operation_count(self, operation_name: str) -> int:
        """Total executions of ``operation_name`` across all tag sets."""
        with self._lock:
            return sum(
                metric.count
                for metric in self._metrics.values()
                if metric.operation_name == operation_name
            )

    def reset(self) -> None:
        with self._lock:
            self._metrics.clear()


_metrics_collector: MetricsCollector | None = None
_collector_lock = threading.Lock()


def get_metrics_collector() -> MetricsCollector:
    """Get or create the process-wide metrics collector."""
    global _metrics_collector
    if _metrics_collector is None:
        with _collector_lock:
            if _metrics_collector is None:
                _metrics_collector = MetricsCollector()
    return _metrics_collector


def record_operation(
    operation_name: str, duration_ms: float, success: bool = True, **tags: Any
) -> None:
    """Record an operation in the process-wide collector."""
    get_metrics_collector().record_operation(operation_name, duration_ms, success, **tags)


def timed_operation(operation_name: str, **tags: Any) -> Callable[[F], F]:
    """
    Decorator that times a coroutine function, records the result and logs it.

    Exceptions are recorded as failures and re-raised untouched.

    Usage:
        @timed_operation("documents.get")
        async def get_document(collection, document_id):
            ...
    """

    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"timed_operation requires a coroutine function, got {func!r}")

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            start_time = time.perf_counter()
            success = False
            try:
                result = await func(*args, **kwargs)
                success = True
                return result
            finally:
                duration_ms = (time.perf_counter() - start_time) * 1000
                record_operation(operation_name, duration_ms, success, **tags)
                contextual_logger.log(
                    logging.DEBUG if success else logging.WARNING,
                    f"{operation_name} {'completed' if success else 'failed'} "
                    f"in {duration_ms:.2f}ms",
                    extra={"operation": operation_name, "duration_ms": round(duration_ms, 2)},
                )

        return wrapper  # type: ignore[return-value]

    return decorator
