"""Shared fixtures: small event streams and fixed settings."""

import pytest

from ldes_snapshot.graph import turtle_to_graph
from ldes_snapshot.settings import SnapshotSettings
from tests.helpers import BLANK_NODE_STREAM_TTL, STREAM_TTL, utc


@pytest.fixture
def settings():
    return SnapshotSettings(_env_file=None)


@pytest.fixture
def stream_graph():
    return turtle_to_graph(STREAM_TTL)


@pytest.fixture
def blank_node_stream_graph():
    return turtle_to_graph(BLANK_NODE_STREAM_TTL)


@pytest.fixture
def fixed_clock():
    now = utc(2022, 1, 1)
    return lambda: now
