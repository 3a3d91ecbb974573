"""
Unit tests for MetricsCollector.

Tests metrics collection functionality including:
- Thread-safety under concurrent access
- Bounded storage with LRU eviction
- The timed_operation decorator
"""

import threading

import pytest

from mdb_docstore.observability.metrics import (
    MetricsCollector,
    OperationMetrics,
    get_metrics_collector,
    record_operation,
    timed_operation,
)


class TestOperationMetrics:
    def test_empty(self):
        metric = OperationMetrics(operation_name="documents.get")
        data = metric.to_dict()

        assert data["count"] == 0
        assert data["min_duration_ms"] == 0.0
        assert data["avg_duration_ms"] == 0.0
        assert data["last_execution"] is None

    def test_record(self):
        metric = OperationMetrics(operation_name="documents.get")
        metric.record(10.0)
        metric.record(30.0, success=False)

        assert metric.count == 2
        assert metric.avg_duration_ms == 20.0
        assert metric.min_duration_ms == 10.0
        assert metric.max_duration_ms == 30.0
        assert metric.error_rate == 50.0


class TestMetricsCollectorThreadSafety:
    """Test thread-safety of metrics collection."""

    def test_concurrent_record_operation(self):
        collector = MetricsCollector()
        num_threads = 10
        operations_per_thread = 100
        barrier = threading.Barrier(num_threads)

        def record_operations(thread_id: int):
            barrier.wait()
            for i in range(operations_per_thread):
                collector.record_operation(
                    "documents.create", duration_ms=1.0 + i, collection=f"c{thread_id}"
                )

        threads = [
            threading.Thread(target=record_operations, args=(i,)) for i in range(num_threads)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert collector.get_operation_count("documents.create") == (
            num_threads * operations_per_thread
        )
        assert collector.get_metrics()["total_operations"] == num_threads


class TestMetricsCollectorStorage:
    def test_tags_split_keys(self):
        collector = MetricsCollector()
        collector.record_operation("documents.get", 1.0, collection="users")
        collector.record_operation("documents.get", 1.0, collection="orders")

        metrics = collector.get_metrics()["metrics"]

        assert set(metrics) == {
            "documents.get[collection=users]",
            "documents.get[collection=orders]",
        }

    def test_prefix_filter(self):
        collector = MetricsCollector()
        collector.record_operation("documents.get", 1.0)
        collector.record_operation("connection.verify", 1.0)

        metrics = collector.get_metrics("documents")["metrics"]

        assert list(metrics) == ["documents.get"]

    def test_lru_eviction(self):
        collector = MetricsCollector(max_metrics=2)
        collector.record_operation("a", 1.0)
        collector.record_operation("b", 1.0)
        collector.record_operation("a", 1.0)  # "b" is now least recently used
        collector.record_operation("c", 1.0)

        assert set(collector.get_metrics()["metrics"]) == {"a", "c"}

    def test_reset(self):
        collector = MetricsCollector()
        collector.record_operation("a", 1.0)
        collector.reset()

        assert collector.get_metrics()["total_operations"] == 0


class TestGlobalCollector:
    def test_singleton(self):
        assert get_metrics_collector() is get_metrics_collector()

    def test_record_operation(self):
        record_operation("documents.update", 5.0, success=False)

        metrics = get_metrics_collector().get_metrics("documents.update")["metrics"]
        assert metrics["documents.update"]["error_count"] == 1


class TestTimedOperation:
    @pytest.mark.asyncio
    async def test_records_success(self):
        @timed_operation("test.op")
        async def op(value):
            return value * 2

        assert await op(21) == 42
        metrics = get_metrics_collector().get_metrics("test.op")["metrics"]
        assert metrics["test.op"]["count"] == 1
        assert metrics["test.op"]["error_count"] == 0

    @pytest.mark.asyncio
    async def test_records_failure_and_reraises(self):
        @timed_operation("test.failing")
        async def op():
            raise KeyError("boom")

        with pytest.raises(KeyError):
            await op()

        metrics = get_metrics_collector().get_metrics("test.failing")["metrics"]
        assert metrics["test.failing"]["error_count"] == 1

    def test_preserves_metadata(self):
        @timed_operation("test.op")
        async def documented():
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."

    def test_rejects_sync_functions(self):
        with pytest.raises(TypeError):

            @timed_operation("test.sync")
            def op():
                return None
