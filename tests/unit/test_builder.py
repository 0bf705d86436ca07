"""End-to-end tests for SnapshotBuilder."""

from unittest.mock import Mock

import pytest
from rdflib import Literal, URIRef

from ldes_snapshot.common import ErrorCode, SnapshotError, StructuralError
from ldes_snapshot.constants import (
    COLLECTION,
    EVENT_STREAM,
    HAS_VERSION,
    RDF_TYPE,
    SNAPSHOT_OF,
    TREE_MEMBER,
    VERSION_MATERIALIZATION_OF,
)
from ldes_snapshot.graph import turtle_to_graph
from ldes_snapshot.snapshot import SnapshotBuilder
from ldes_snapshot.snapshot import builder as builder_module
from ldes_snapshot.types import SelectionConfig
from tests.helpers import DCT, EX, utc

SNAPSHOT_ID = URIRef("http://example.org/snapshot")


@pytest.fixture
def builder(stream_graph, settings, fixed_clock):
    return SnapshotBuilder(stream_graph, settings=settings, clock=fixed_clock, metrics=Mock())


class TestCreate:
    def test_defaults(self, builder):
        snapshot = builder.create()
        assert snapshot.id == URIRef("http://example.org/ESSnapshot")
        assert snapshot.source_stream_id == EX.ES
        assert snapshot.cutoff == utc(2022, 1, 1)
        assert snapshot.timestamp_path == DCT.issued
        assert [m.id for m in snapshot.members] == [EX.resource1v1]

    def test_non_materialized_graph(self, builder):
        graph = builder.create(SelectionConfig(snapshot_id=SNAPSHOT_ID)).to_graph()
        assert (SNAPSHOT_ID, RDF_TYPE, EVENT_STREAM) in graph
        assert (SNAPSHOT_ID, SNAPSHOT_OF, EX.ES) in graph
        assert (SNAPSHOT_ID, TREE_MEMBER, EX.resource1v1) in graph
        assert (EX.resource1v1, DCT.isVersionOf, EX.resource1) in graph
        assert len(list(graph.objects(EX.resource1v1, DCT.issued))) == 1
        assert len(list(graph.objects(EX.resource1v1, DCT.title))) == 1

    def test_materialized_graph(self, builder):
        graph = builder.create(SelectionConfig(snapshot_id=SNAPSHOT_ID, materialized=True)).to_graph()
        assert (SNAPSHOT_ID, RDF_TYPE, COLLECTION) in graph
        assert (SNAPSHOT_ID, VERSION_MATERIALIZATION_OF, EX.ES) in graph
        assert (SNAPSHOT_ID, TREE_MEMBER, EX.resource1) in graph
        assert (EX.resource1, HAS_VERSION, EX.resource1v1) in graph
        assert len(list(graph.objects(EX.resource1, DCT.issued))) == 1
        assert graph.value(EX.resource1, DCT.title) == Literal("Title has been updated once")

    @pytest.mark.parametrize(
        "hour, minute, second, title",
        [
            (10, 0, 0, "First version of the title"),
            (10, 0, 1, "First version of the title"),
            (12, 0, 0, "Title has been updated once"),
        ],
    )
    def test_cutoff_scenario(self, builder, hour, minute, second, title):
        config = SelectionConfig(cutoff=utc(2021, 12, 15, hour, minute, second), materialized=True)
        graph = builder.create(config).to_graph()
        assert graph.value(EX.resource1, DCT.title) == Literal(title)

    def test_before_first_version_is_empty(self, builder):
        snapshot = builder.create(SelectionConfig(cutoff=utc(2021, 12, 15, 9)))
        assert snapshot.members == ()
        assert len(snapshot.to_graph()) == 5

    def test_blank_node_members(self, blank_node_stream_graph, settings, fixed_clock):
        builder = SnapshotBuilder(blank_node_stream_graph, settings=settings, clock=fixed_clock, metrics=Mock())
        graph = builder.create(SelectionConfig(snapshot_id=SNAPSHOT_ID, materialized=True)).to_graph()
        assert (SNAPSHOT_ID, TREE_MEMBER, EX.A) in graph
        assert len(list(graph.objects(EX.A, HAS_VERSION))) == 1
        assert len(list(graph.objects(EX.A, DCT.created))) == 1
        assert graph.value(EX.A, URIRef("http://www.w3.org/2002/07/owl#versionInfo")) == Literal("v0.0.2")

    def test_idempotent_over_own_output(self, builder, settings, fixed_clock):
        first = builder.create()
        again = SnapshotBuilder(first.to_graph(), settings=settings, clock=fixed_clock, metrics=Mock()).create()
        assert [(m.id, set(m.statements)) for m in again.members] == [
            (m.id, set(m.statements)) for m in first.members
        ]

    def test_records_metrics(self, stream_graph, settings, fixed_clock):
        metrics = Mock()
        SnapshotBuilder(stream_graph, settings=settings, clock=fixed_clock, metrics=metrics).create()
        (stats,), _ = metrics.record_selection.call_args
        assert stats.members_seen == 2
        assert stats.objects_selected == 1


class TestStructuralValidation:
    def test_missing_stream(self, settings):
        builder = SnapshotBuilder(turtle_to_graph("<http://example.org/x> <http://example.org/p> 1 ."), settings=settings)
        with pytest.raises(StructuralError) as exc_info:
            builder.create()
        assert exc_info.value.error_code == ErrorCode.STREAM_NOT_FOUND

    def test_missing_paths_abort_before_members(self, stream_graph, settings):
        stream_graph.remove((EX.ES, None, DCT.issued))
        metrics = Mock()
        with pytest.raises(StructuralError):
            SnapshotBuilder(stream_graph, settings=settings, metrics=metrics).create()
        metrics.record_selection.assert_not_called()

    def test_override_skips_declared_paths(self, stream_graph, settings, fixed_clock):
        stream_graph.remove((EX.ES, None, DCT.issued))
        builder = SnapshotBuilder(stream_graph, settings=settings, clock=fixed_clock, metrics=Mock())
        snapshot = builder.create(SelectionConfig(timestamp_path=DCT.issued))
        assert len(snapshot.members) == 1


class TestIncremental:
    def test_combines_with_base(self, builder):
        base = builder.create(SelectionConfig(cutoff=utc(2021, 12, 15, 11)))
        snapshot = builder.create(SelectionConfig(cutoff=utc(2021, 12, 15, 13)), base=base)
        assert snapshot.cutoff == utc(2021, 12, 15, 13)
        assert [m.id for m in snapshot.members] == [EX.resource1v1]

    def test_base_as_graph(self, builder):
        base = builder.create(SelectionConfig(cutoff=utc(2021, 12, 15, 11))).to_graph()
        snapshot = builder.create(base=base)
        assert snapshot.cutoff == utc(2022, 1, 1)
        assert [m.id for m in snapshot.members] == [EX.resource1v1]

    def test_materialized_with_base_is_rejected(self, builder):
        base = builder.create(SelectionConfig(cutoff=utc(2021, 12, 15, 11)))
        with pytest.raises(SnapshotError) as exc_info:
            builder.create(SelectionConfig(materialized=True), base=base)
        assert exc_info.value.error_code == ErrorCode.INVALID_ARGUMENT


class TestCreateGraph:
    def test_header_fires_before_extraction(self, builder, monkeypatch):
        events = []
        original = builder_module.iter_members

        def tracking(graph, collection_id):
            for member in original(graph, collection_id):
                events.append("member")
                yield member

        monkeypatch.setattr(builder_module, "iter_members", tracking)
        graph = builder.create_graph(
            SelectionConfig(snapshot_id=SNAPSHOT_ID),
            on_header=lambda header: events.append("header"),
        )
        assert events == ["header", "member", "member"]
        assert (SNAPSHOT_ID, TREE_MEMBER, EX.resource1v1) in graph

    def test_with_base(self, builder):
        headers = []
        base = builder.create(SelectionConfig(cutoff=utc(2021, 12, 15, 11)))
        graph = builder.create_graph(SelectionConfig(snapshot_id=SNAPSHOT_ID), base=base, on_header=headers.append)
        assert len(headers) == 1
        assert (SNAPSHOT_ID, TREE_MEMBER, EX.resource1v1) in graph
