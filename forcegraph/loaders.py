"""Adapters from external graph representations to engine nodes and links.

The engine does not care where a dataset comes from; these helpers only
translate field names and shapes before ``GraphEngine.load`` validates them.
"""

import logging

import networkx as nx

from .errors import DataIntegrityError
from .model import Link, Node

logger = logging.getLogger(__name__)

# Field names used by the web front-end records.
NODE_ALIASES = {"name": "label", "type": "category", "size": "radius"}
LINK_ALIASES = {"type": "category", "weight": "strength"}

NODE_FIELDS = ("id", "label", "category", "radius", "x", "y")
LINK_FIELDS = ("source", "target", "strength", "category")


def _normalise(record, aliases, fields):
    out = {}
    for key, value in record.items():
        key = aliases.get(key, key)
        if key in fields and value is not None:
            out[key] = value
    return out


def from_records(node_records, link_records):
    """Nodes and links from plain dicts (JSON-style records).

    Accepts both engine field names and the web front-end ones
    (``name``, ``type``, ``size``). Unknown keys are ignored.
    """
    nodes = []
    for record in node_records:
        fields = _normalise(record, NODE_ALIASES, NODE_FIELDS)
        if "id" not in fields:
            raise DataIntegrityError(f"node record without id: {record!r}")
        nodes.append(Node(**fields))

    links = []
    for record in link_records:
        fields = _normalise(record, LINK_ALIASES, LINK_FIELDS)
        if "source" not in fields or "target" not in fields:
            raise DataIntegrityError(f"link record without source/target: {record!r}")
        links.append(Link(**fields))
    return nodes, links


def from_networkx(graph):
    """Nodes and links from a networkx graph.

    Node and edge attribute dicts are read with the same aliases as
    ``from_records``; multigraph parallel edges become duplicate links.
    """
    node_records = []
    for n, data in graph.nodes(data=True):
        record = dict(data)
        record["id"] = n
        node_records.append(record)

    link_records = []
    for u, v, data in graph.edges(data=True):
        record = dict(data)
        record["source"] = u
        record["target"] = v
        link_records.append(record)

    logger.debug(f"Converted networkx graph with {graph.number_of_nodes()} nodes, "
                 f"{graph.number_of_edges()} edges")
    return from_records(node_records, link_records)


def to_networkx(engine):
    """The engine's current node/link set as a networkx MultiDiGraph with positions."""
    graph = nx.MultiDiGraph()
    for node in engine.nodes.values():
        graph.add_node(node.id, label=node.label, category=node.category.value,
                       radius=node.radius, x=node.x, y=node.y)
    for link in engine.links:
        graph.add_edge(link.source, link.target, strength=link.strength, category=link.category.value)
    return graph
