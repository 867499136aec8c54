"""Force contributions summed by the integrator.

``link_forces``, ``charge_forces`` and ``centering_forces`` return a mapping
``node id -> [fx, fy]`` of velocity increments and never mutate nodes.
``resolve_collisions`` is a position-correction pass run after integration.
"""

import math
from collections import Counter

from .quadtree import QuadTree


def zero_forces(nodes):
    return {node.id: [0.0, 0.0] for node in nodes}


def link_degrees(links):
    """Number of (non self-) links touching each node id; duplicates count."""
    degree = Counter()
    for link in links:
        if link.is_self_link:
            continue
        degree[link.source] += 1
        degree[link.target] += 1
    return degree


def link_forces(nodes_by_id, links, alpha, config, degree=None):
    """Spring pull/push of every link towards its target distance.

    Stiffness is the link strength divided by the smaller endpoint degree so
    hubs are not over-constrained; the correction is split between the
    endpoints in proportion to their degrees (the lighter end moves more).
    """
    forces = zero_forces(nodes_by_id.values())
    if degree is None:
        degree = link_degrees(links)

    for link in links:
        if link.is_self_link:
            continue
        source = nodes_by_id[link.source]
        target = nodes_by_id[link.target]
        dx = target.x - source.x
        dy = target.y - source.y
        dist = math.hypot(dx, dy)
        if dist == 0:
            continue

        ds, dt = degree[link.source], degree[link.target]
        stiffness = link.strength / min(ds, dt)
        bias = ds / (ds + dt)

        k = (dist - config.link_distance(link.strength)) / dist * alpha * stiffness
        dx *= k
        dy *= k
        forces[target.id][0] -= dx * bias
        forces[target.id][1] -= dy * bias
        forces[source.id][0] += dx * (1 - bias)
        forces[source.id][1] += dy * (1 - bias)
    return forces


def charge_forces(nodes, alpha, config, tree=None, jitter=None):
    """Many-body repulsion through the Barnes-Hut quadtree."""
    nodes = list(nodes)
    forces = zero_forces(nodes)
    if config.charge_strength == 0 or len(nodes) < 2:
        return forces
    if tree is None:
        tree = QuadTree.build(nodes)

    scale = config.charge_strength * alpha
    for node in nodes:
        fx, fy = tree.net_force(
            node,
            theta=config.theta,
            distance_min=config.charge_distance_min,
            distance_max=config.charge_distance_max,
            jitter=jitter,
        )
        forces[node.id][0] = fx * scale
        forces[node.id][1] = fy * scale
    return forces


def centering_forces(nodes, config):
    """Shift free nodes so their centroid moves onto the configured center.

    Pinned nodes are ignored so a dragged node does not drag the rest of the
    layout to the opposite side of the canvas.
    """
    nodes = list(nodes)
    forces = zero_forces(nodes)
    free = [n for n in nodes if not n.pinned]
    if not free or config.center_strength == 0:
        return forces

    cx, cy = config.center
    mx = sum(n.x for n in free) / len(free)
    my = sum(n.y for n in free) / len(free)
    sx = (cx - mx) * config.center_strength
    sy = (cy - my) * config.center_strength
    for node in free:
        forces[node.id][0] = sx
        forces[node.id][1] = sy
    return forces


def resolve_collisions(nodes, config, direction=None):
    """Push overlapping nodes apart along their connecting axis.

    Mutates positions in place. *direction* supplies a random angle for
    coincident pairs; without it such pairs are left alone. Returns the
    number of overlapping pairs seen in the last iteration.
    """
    nodes = list(nodes)
    if len(nodes) < 2:
        return 0

    padding = config.collision_padding
    strength = config.collision_strength
    max_radius = max(n.radius for n in nodes)
    overlaps = 0

    for _ in range(config.collision_iterations):
        tree = QuadTree.build(nodes)
        overlaps = 0
        for node in nodes:
            reach = node.radius + max_radius + padding
            for other in tree.neighbours(node.x, node.y, reach):
                # Each unordered pair once.
                if other is node or other.id <= node.id:
                    continue
                min_dist = node.radius + other.radius + padding
                dx = node.x - other.x
                dy = node.y - other.y
                dist = math.hypot(dx, dy)
                if dist >= min_dist:
                    continue
                if node.pinned and other.pinned:
                    continue
                overlaps += 1

                if dist == 0:
                    if direction is None:
                        continue
                    angle = direction()
                    ux, uy = math.cos(angle), math.sin(angle)
                else:
                    ux, uy = dx / dist, dy / dist
                push = (min_dist - dist) * strength

                if node.pinned:
                    share = 0.0
                elif other.pinned:
                    share = 1.0
                else:
                    r2, o2 = node.radius ** 2, other.radius ** 2
                    share = o2 / (r2 + o2)

                node.x += ux * push * share
                node.y += uy * push * share
                other.x -= ux * push * (1 - share)
                other.y -= uy * push * (1 - share)
    return overlaps
