"""
forcegraph - force-directed layout engine for knowledge graphs.

Usage:
    from forcegraph import GraphEngine, InteractionController

    engine = GraphEngine()
    engine.load(nodes, links)
    snapshot = engine.run()           # tick until converged
    snapshot.positions["node-id"]     # -> (x, y)

    controller = InteractionController(engine)
    controller.drag_start("node-id")  # applied at the next tick
"""

from .config import LayoutConfig
from .errors import ConfigurationError, DataIntegrityError, LayoutError, NumericInstabilityError
from .graph_engine import GraphEngine
from .interaction import InteractionController, ViewTransform
from .loaders import from_networkx, from_records, to_networkx
from .model import Link, LinkCategory, Node, NodeCategory, NodeRecord, SimulationStatus, Snapshot
from .query import Connection, Selection, select

__version__ = "0.1.0"
__all__ = [
    "GraphEngine",
    "InteractionController",
    "ViewTransform",
    "LayoutConfig",
    "Node",
    "Link",
    "NodeCategory",
    "LinkCategory",
    "NodeRecord",
    "Snapshot",
    "SimulationStatus",
    "Selection",
    "Connection",
    "select",
    "from_networkx",
    "from_records",
    "to_networkx",
    "LayoutError",
    "DataIntegrityError",
    "ConfigurationError",
    "NumericInstabilityError",
]
