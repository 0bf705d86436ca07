"""Tests for metrics collection, tracing and the operation scope."""

from unittest.mock import MagicMock, patch

import pytest

from ldes_snapshot.logging import clear_snapshot_context, get_snapshot_context, set_snapshot_context
from ldes_snapshot.monitoring import MetricsCollector, SelectionStats
from ldes_snapshot.observability import snapshot_operation_scope
from ldes_snapshot.utils import traced


class TestMetricsCollector:
    @pytest.fixture
    def meter(self):
        with patch("ldes_snapshot.monitoring.metrics.get_meter") as get_meter:
            meter = get_meter.return_value
            meter.create_counter.side_effect = lambda *args, **kwargs: MagicMock()
            yield meter

    def test_record_selection_exports_counters(self, meter):
        collector = MetricsCollector()
        stats = SelectionStats(
            operation="create_snapshot",
            members_seen=4,
            accepted=2,
            rejected=1,
            too_recent=1,
            objects_selected=2,
            duration_seconds=0.5,
        )

        collector.record_selection(stats)

        collector.pass_counter.add.assert_called_once_with(1, {"operation": "create_snapshot"})
        collector.member_counter.add.assert_any_call(2, {"operation": "create_snapshot", "outcome": "accepted"})
        collector.object_counter.add.assert_called_once_with(2, {"operation": "create_snapshot"})
        collector.duration_histogram.record.assert_called_once_with(0.5, {"operation": "create_snapshot"})
        assert collector.history == [stats]

    def test_summary(self, meter):
        collector = MetricsCollector()
        assert collector.get_metrics_summary()["total_passes"] == 0

        collector.record_selection(SelectionStats(operation="a", members_seen=3, objects_selected=1))
        collector.record_selection(SelectionStats(operation="b", members_seen=2, rejected=1))
        summary = collector.get_metrics_summary()
        assert summary["total_passes"] == 2
        assert summary["members_seen"] == 5
        assert summary["rejected"] == 1
        assert summary["passes_by_operation"] == {"a": 1, "b": 1}

    def test_works_with_default_meter(self):
        MetricsCollector().record_selection(SelectionStats())

    def test_stats_to_dict(self):
        data = SelectionStats(stream_id="s").to_dict()
        assert data["stream_id"] == "s"
        assert isinstance(data["timestamp"], str)


class TestSnapshotOperationScope:
    def test_sets_and_restores_context(self):
        set_snapshot_context(stream_id="outer", operation="outer_op")
        try:
            with snapshot_operation_scope("inner_op", stream_id="inner", snapshot_id="snap"):
                assert get_snapshot_context() == {
                    "stream_id": "inner",
                    "snapshot_id": "snap",
                    "operation": "inner_op",
                }
            assert get_snapshot_context() == {"stream_id": "outer", "snapshot_id": None, "operation": "outer_op"}
        finally:
            clear_snapshot_context()

    def test_reraises_and_records_failure(self):
        with patch("ldes_snapshot.observability.context.get_tracer") as get_tracer:
            span = MagicMock()
            get_tracer.return_value.start_as_current_span.return_value.__enter__.return_value = span
            with pytest.raises(RuntimeError):
                with snapshot_operation_scope("failing"):
                    raise RuntimeError("boom")
        span.record_exception.assert_called_once()
        span.set_attribute.assert_any_call("ldes_snapshot.operation.name", "failing")
        assert get_snapshot_context()["operation"] is None


class TestTraced:
    def test_records_exception_and_reraises(self):
        with patch("ldes_snapshot.utils.decorators.get_tracer") as get_tracer:
            span = MagicMock()
            get_tracer.return_value.start_as_current_span.return_value.__enter__.return_value = span

            @traced("unit.fail")
            def fail():
                raise ValueError("nope")

            with pytest.raises(ValueError):
                fail()

        get_tracer.return_value.start_as_current_span.assert_called_once_with("unit.fail")
        span.record_exception.assert_called_once()
        span.set_status.assert_called_once()

    def test_default_span_name_is_qualified_function_name(self):
        with patch("ldes_snapshot.utils.decorators.get_tracer") as get_tracer:
            @traced()
            def add(a, b):
                return a + b

            assert add(1, 2) == 3

        get_tracer.return_value.start_as_current_span.assert_called_once_with(
            f"{__name__}.TestTraced.test_default_span_name_is_qualified_function_name.<locals>.add"
        )

    def test_returns_result(self):
        @traced()
        def add(a, b):
            return a + b

        assert add(1, 2) == 3
