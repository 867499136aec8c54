"""Shared fixtures for layout engine tests."""

import pytest

from forcegraph.graph_engine import GraphEngine
from forcegraph.interaction import InteractionController
from forcegraph.loaders import from_records
from forcegraph.model import Link, Node
from forcegraph.samples import SAMPLE_LINKS, SAMPLE_NODES


@pytest.fixture
def engine():
    """Fresh engine with nothing loaded."""
    return GraphEngine()


@pytest.fixture
def triangle():
    """Three linked nodes plus one isolated node."""
    nodes = [
        Node("a", "Alpha", "concept", 10),
        Node("b", "Beta", "person", 10),
        Node("c", "Gamma", "project", 12),
        Node("d", "Delta", "event", 8),
    ]
    links = [
        Link("a", "b", 1.0, "contains"),
        Link("b", "c", 0.5, "collaborates"),
        Link("c", "a", 0.8, "mentions"),
    ]
    return nodes, links


@pytest.fixture
def loaded(engine, triangle):
    engine.load(*triangle)
    return engine


@pytest.fixture
def controller(loaded):
    return InteractionController(loaded)


@pytest.fixture
def sample_engine(engine):
    """Engine loaded with the ten-node demo dataset."""
    engine.load(*from_records(SAMPLE_NODES, SAMPLE_LINKS))
    return engine


@pytest.fixture(scope="session")
def qapp():
    from PyQt6.QtCore import QCoreApplication

    return QCoreApplication.instance() or QCoreApplication([])
