"""Read-only lookups over the engine's current node/link set."""

from dataclasses import dataclass

from .model import Link, NodeRecord


@dataclass(frozen=True)
class Connection:
    link: Link
    neighbour: NodeRecord


@dataclass(frozen=True)
class Selection:
    node: NodeRecord = None
    connections: tuple = ()

    @classmethod
    def empty(cls):
        return cls()

    def __bool__(self):
        return self.node is not None

    @property
    def links(self):
        return tuple(c.link for c in self.connections)

    @property
    def neighbours(self):
        return tuple(c.neighbour for c in self.connections)


def select(engine, node_id):
    """The node with its incident links, each resolved to the far endpoint.

    Unknown ids give an empty selection: a consumer may still hold an id from
    a dataset that has since been replaced.
    """
    node = engine.node(node_id)
    if node is None:
        return Selection.empty()
    connections = []
    for link in incident_links(engine, node_id):
        other = node if link.is_self_link else engine.node(link.other(node_id))
        connections.append(Connection(link, other))
    return Selection(node, tuple(connections))


def incident_links(engine, node_id):
    return tuple(link for link in engine.links if node_id in (link.source, link.target))


def neighbours(engine, node_id):
    """Distinct ids connected to *node_id*, in link order."""
    seen = []
    for link in incident_links(engine, node_id):
        other = link.other(node_id)
        if other not in seen:
            seen.append(other)
    return seen


def incoming(engine, node_id):
    return list(engine.incoming.get(node_id, ()))


def outgoing(engine, node_id):
    return list(engine.outgoing.get(node_id, ()))
