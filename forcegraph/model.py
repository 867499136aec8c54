import enum
import math
from dataclasses import dataclass, field
from types import MappingProxyType

from .errors import ConfigurationError, DataIntegrityError


class NodeCategory(str, enum.Enum):
    PERSON = "person"
    PROJECT = "project"
    CONCEPT = "concept"
    DOCUMENT = "document"
    EVENT = "event"


class LinkCategory(str, enum.Enum):
    MENTIONS = "mentions"
    COLLABORATES = "collaborates"
    CONTAINS = "contains"
    PRECEDES = "precedes"


class SimulationStatus(str, enum.Enum):
    RUNNING = "running"
    CONVERGED = "converged"
    STOPPED = "stopped"


def _category(enum_cls, value, what):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        allowed = ", ".join(c.value for c in enum_cls)
        raise DataIntegrityError(f"unknown {what} category {value!r} (expected one of: {allowed})") from None


@dataclass
class Node:
    """A graph node as owned and mutated by the engine.

    ``fx``/``fy`` hold the fixed position while the node is pinned.
    """

    id: str
    label: str = ""
    category: NodeCategory = NodeCategory.CONCEPT
    radius: float = 10.0
    x: float = None
    y: float = None
    vx: float = 0.0
    vy: float = 0.0
    fx: float = None
    fy: float = None

    def __post_init__(self):
        self.id = str(self.id)
        if not self.label:
            self.label = self.id
        self.category = _category(NodeCategory, self.category, "node")
        if isinstance(self.radius, bool) or not isinstance(self.radius, (int, float)) \
                or not math.isfinite(self.radius) or self.radius <= 0:
            raise ConfigurationError(f"node {self.id!r}: radius must be a positive finite number, got {self.radius!r}")
        for axis in ("x", "y"):
            value = getattr(self, axis)
            if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
                raise DataIntegrityError(f"node {self.id!r}: {axis} must be a number, got {value!r}")

    @property
    def pinned(self):
        return self.fx is not None

    def has_position(self):
        return (self.x is not None and self.y is not None
                and math.isfinite(self.x) and math.isfinite(self.y))


@dataclass(frozen=True)
class Link:
    source: str
    target: str
    strength: float = 1.0
    category: LinkCategory = LinkCategory.MENTIONS

    def __post_init__(self):
        object.__setattr__(self, "source", str(self.source))
        object.__setattr__(self, "target", str(self.target))
        object.__setattr__(self, "category", _category(LinkCategory, self.category, "link"))
        s = self.strength
        if isinstance(s, bool) or not isinstance(s, (int, float)) or not (0 < s <= 1):
            raise ConfigurationError(
                f"link {self.source!r}->{self.target!r}: strength must be in (0, 1], got {s!r}")

    @property
    def is_self_link(self):
        return self.source == self.target

    def other(self, node_id):
        """Return the endpoint opposite *node_id*."""
        return self.target if self.source == node_id else self.source


@dataclass(frozen=True)
class NodeRecord:
    """Read-only copy of a node handed out to consumers."""

    id: str
    label: str
    category: NodeCategory
    radius: float
    x: float
    y: float
    pinned: bool

    @classmethod
    def of(cls, node):
        return cls(node.id, node.label, node.category, node.radius, node.x, node.y, node.pinned)


@dataclass(frozen=True)
class Snapshot:
    """Positions after a completed tick, keyed and ordered by node id."""

    tick: int
    alpha: float
    status: SimulationStatus
    positions: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def capture(cls, tick, alpha, status, nodes):
        positions = {node_id: (nodes[node_id].x, nodes[node_id].y) for node_id in sorted(nodes)}
        return cls(tick, alpha, status, MappingProxyType(positions))

    def distance(self, a, b):
        (ax, ay), (bx, by) = self.positions[a], self.positions[b]
        return math.hypot(bx - ax, by - ay)
