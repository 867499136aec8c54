import logging
import math
import random
from collections import deque

from .config import LayoutConfig
from .errors import DataIntegrityError, NumericInstabilityError
from .forces import centering_forces, charge_forces, link_degrees, link_forces, resolve_collisions
from .model import Link, Node, NodeRecord, SimulationStatus, Snapshot
from .quadtree import QuadTree

logger = logging.getLogger(__name__)

# Phyllotaxis placement for nodes loaded without a position.
INITIAL_RADIUS = 10.0
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))

# Scatter radius around the center for nodes recovered from a numeric blow-up.
RECOVERY_SPREAD = 10.0


class GraphEngine:
    """Force-directed layout simulation.

    Owns the node/link set and every simulation scalar. Mutations coming from
    outside (drags, pause, reset) are posted to a command queue and applied
    between ticks, so a tick always sees a consistent state.
    """

    def __init__(self, config=None):
        self.config = config or LayoutConfig()
        self._nodes = {}  # id -> Node
        self._links = ()
        self._degree = {}
        self.incoming = {}  # id -> [source ids]
        self.outgoing = {}  # id -> [target ids]

        self.alpha = 0.0
        self.alpha_target = self.config.alpha_target
        self.tick_count = 0
        self.loaded = False
        self._paused = False
        self._converged = True
        self._dragging = set()
        self._rng = random.Random(self.config.seed)

        self._commands = deque()
        self._listeners = []
        self._wake_listeners = []
        self._snapshot = Snapshot(0, 0.0, SimulationStatus.CONVERGED)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, nodes, links, config=None, **overrides):
        """Install a new node/link set and restart the layout from alpha = 1.

        Everything is validated before any state is touched: on error the
        previous dataset (if any) stays active.
        """
        config = (config or self.config).replace(**overrides)

        new_nodes = {}
        for item in nodes:
            node = _copy_node(item)
            if node.id in new_nodes:
                raise DataIntegrityError(f"duplicate node id {node.id!r}")
            new_nodes[node.id] = node

        new_links = []
        for item in links:
            link = _make_link(item)
            for end in (link.source, link.target):
                if end not in new_nodes:
                    raise DataIntegrityError(
                        f"link {link.source!r}->{link.target!r} references unknown node {end!r}")
            new_links.append(link)

        self.config = config
        self._nodes = new_nodes
        self._links = tuple(new_links)
        self._degree = link_degrees(self._links)
        self.incoming = {uid: [] for uid in new_nodes}
        self.outgoing = {uid: [] for uid in new_nodes}
        for link in self._links:
            self.outgoing[link.source].append(link.target)
            self.incoming[link.target].append(link.source)

        self._rng = random.Random(config.seed)
        cx, cy = config.center
        for i, node in enumerate(new_nodes.values()):
            if not node.has_position():
                radius = INITIAL_RADIUS * math.sqrt(0.5 + i)
                angle = i * INITIAL_ANGLE
                node.x = cx + radius * math.cos(angle)
                node.y = cy + radius * math.sin(angle)
            node.vx = node.vy = 0.0
            node.fx = node.fy = None

        self.alpha = 1.0
        self.alpha_target = config.alpha_target
        self.tick_count = 0
        self.loaded = True
        self._converged = False
        self._dragging.clear()
        self._commands.clear()

        logger.info(f"Loaded {len(self._nodes)} nodes and {len(self._links)} links")
        self._publish()
        return self._snapshot

    def detach(self):
        """Drop the current dataset; the engine goes back to its empty state."""
        self._nodes = {}
        self._links = ()
        self._degree = {}
        self.incoming = {}
        self.outgoing = {}
        self.alpha = 0.0
        self.tick_count = 0
        self.loaded = False
        self._converged = True
        self._dragging.clear()
        self._commands.clear()
        self._snapshot = Snapshot(0, 0.0, SimulationStatus.CONVERGED)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def nodes(self):
        return self._nodes

    @property
    def links(self):
        return self._links

    def node(self, node_id):
        node = self._nodes.get(node_id)
        return NodeRecord.of(node) if node is not None else None

    def degree(self, node_id):
        return self._degree.get(node_id, 0)

    @property
    def status(self):
        if self._paused:
            return SimulationStatus.STOPPED
        if self._converged:
            return SimulationStatus.CONVERGED
        return SimulationStatus.RUNNING

    @property
    def is_running(self):
        return self.status is SimulationStatus.RUNNING

    @property
    def dragging(self):
        return frozenset(self._dragging)

    def snapshot(self):
        return self._snapshot

    # ------------------------------------------------------------------
    # Listeners and command queue
    # ------------------------------------------------------------------

    def add_listener(self, callback):
        """Call *callback(snapshot)* after every completed tick."""
        self._listeners.append(callback)

    def remove_listener(self, callback):
        self._listeners.remove(callback)

    def add_wake_listener(self, callback):
        """Call *callback()* whenever a command is queued (schedulers re-arm here)."""
        self._wake_listeners.append(callback)

    def post(self, command, *args):
        self._commands.append((command, args))
        for callback in list(self._wake_listeners):
            callback()

    @property
    def pending(self):
        return len(self._commands)

    def process_pending(self):
        """Apply queued commands in order. Never called from inside a tick."""
        applied = 0
        while self._commands:
            command, args = self._commands.popleft()
            command(*args)
            applied += 1
        return applied

    # ------------------------------------------------------------------
    # State changes (applied between ticks through the queue)
    # ------------------------------------------------------------------

    def pin(self, node_id, x=None, y=None):
        node = self._nodes.get(node_id)
        if node is None:
            logger.debug(f"pin ignored, unknown node {node_id!r}")
            return False
        node.fx = node.x if x is None else x
        node.fy = node.y if y is None else y
        return True

    def unpin(self, node_id):
        node = self._nodes.get(node_id)
        if node is None:
            logger.debug(f"unpin ignored, unknown node {node_id!r}")
            return False
        node.fx = node.fy = None
        return True

    def begin_drag(self, node_id):
        if not self.pin(node_id):
            return
        self._dragging.add(node_id)
        self.alpha_target = self.config.drag_alpha_target
        self._converged = False

    def move_drag(self, node_id, x, y):
        if not (math.isfinite(x) and math.isfinite(y)):
            logger.warning(f"Ignoring non-finite drag position ({x}, {y}) for {node_id!r}")
            return
        if node_id not in self._dragging:
            logger.debug(f"drag move ignored, {node_id!r} is not being dragged")
            return
        self.pin(node_id, x, y)

    def end_drag(self, node_id):
        if node_id not in self._dragging:
            logger.debug(f"drag end ignored, {node_id!r} is not being dragged")
            return
        self._dragging.discard(node_id)
        self.unpin(node_id)
        if not self._dragging:
            self.alpha_target = self.config.alpha_target

    def pause(self):
        self._paused = True

    def resume(self):
        self._paused = False

    def restart(self, alpha=1.0):
        """Reheat to *alpha* without reloading data."""
        if not self.loaded:
            return
        self.alpha = min(max(alpha, 0.0), 1.0)
        self._converged = False

    # ------------------------------------------------------------------
    # Integration
    # ------------------------------------------------------------------

    def tick(self):
        """Apply pending commands and advance one step if running.

        Returns the snapshot of the completed tick, or the held snapshot when
        the simulation is converged, stopped or empty.
        """
        self.process_pending()
        if not self.loaded or not self.is_running:
            return self._snapshot

        config = self.config
        nodes = list(self._nodes.values())

        # 1. Alpha approaches its target exponentially
        self.alpha += (self.alpha_target - self.alpha) * config.alpha_decay

        # Nodes handed in broken by a consumer are recovered before they can
        # poison the centroid or the tree.
        self._recover_non_finite(nodes)

        # 2. Forces (velocity increments)
        tree = QuadTree.build(nodes)
        contributions = (
            link_forces(self._nodes, self._links, self.alpha, config, self._degree),
            charge_forces(nodes, self.alpha, config, tree=tree, jitter=self._jitter),
            centering_forces(nodes, config),
        )

        # 3. Velocity and position
        for n in nodes:
            if n.pinned:
                n.x, n.y = n.fx, n.fy
                n.vx = n.vy = 0.0
                continue
            fx = sum(c[n.id][0] for c in contributions)
            fy = sum(c[n.id][1] for c in contributions)
            n.vx = n.vx * config.velocity_decay + fx
            n.vy = n.vy * config.velocity_decay + fy
            n.x += n.vx
            n.y += n.vy

        # 4. Local recovery of blown-up nodes
        self._recover_non_finite(nodes)

        # 5. Collision correction
        if resolve_collisions(nodes, config, direction=self._angle):
            self._recover_non_finite(nodes)

        self.tick_count += 1
        if self.alpha <= config.alpha_min:
            self._converged = True
            logger.info(f"Layout converged after {self.tick_count} ticks")
        self._publish()
        return self._snapshot

    def run(self, max_ticks=None):
        """Tick until the simulation stops running (or *max_ticks* is reached)."""
        self.process_pending()
        ticks = 0
        while self.is_running and (max_ticks is None or ticks < max_ticks):
            self.tick()
            ticks += 1
        return self._snapshot

    def _recover_non_finite(self, nodes):
        for n in nodes:
            try:
                _check_finite(n)
            except NumericInstabilityError as e:
                self._recover(n, e)

    def _recover(self, node, error):
        cx, cy = self.config.center
        node.x = cx + (self._rng.random() - 0.5) * RECOVERY_SPREAD
        node.y = cy + (self._rng.random() - 0.5) * RECOVERY_SPREAD
        node.vx = node.vy = 0.0
        if node.pinned:
            node.fx, node.fy = node.x, node.y
        logger.warning(f"{error}; reset to ({node.x:.2f}, {node.y:.2f})")

    def _jitter(self):
        return (self._rng.random() - 0.5) * 1e-6

    def _angle(self):
        return self._rng.random() * 2 * math.pi

    def _publish(self):
        self._snapshot = Snapshot.capture(self.tick_count, self.alpha, self.status, self._nodes)
        for callback in list(self._listeners):
            callback(self._snapshot)


def _copy_node(item):
    """Engine-owned copy of a Node (or a mapping of Node fields)."""
    if isinstance(item, Node):
        return Node(item.id, item.label, item.category, item.radius, item.x, item.y)
    fields = {k: item[k] for k in ("id", "label", "category", "radius", "x", "y") if k in item}
    if "id" not in fields:
        raise DataIntegrityError(f"node record without id: {item!r}")
    return Node(**fields)


def _make_link(item):
    if isinstance(item, Link):
        return item
    try:
        return Link(**item)
    except TypeError as e:
        raise DataIntegrityError(f"malformed link record {item!r}: {e}") from None


def _check_finite(node):
    for value in (node.x, node.y, node.vx, node.vy):
        if not math.isfinite(value):
            raise NumericInstabilityError(node.id)
