"""Barnes-Hut quadtree over node positions.

The tree is rebuilt from scratch every tick. Bodies are any objects with
``x`` and ``y`` attributes; coincident bodies share a leaf. Every cell keeps
its body count (``mass``) and center of mass so that distant clusters can be
approximated as a single point when computing repulsion.
"""

import math


class Cell:
    __slots__ = ("x0", "y0", "x1", "y1", "children", "bodies", "mass", "cx", "cy")

    def __init__(self, x0, y0, x1, y1):
        self.x0 = x0
        self.y0 = y0
        self.x1 = x1
        self.y1 = y1
        self.children = None  # [sw, se, nw, ne] once split
        self.bodies = []
        self.mass = 0
        self.cx = 0.0
        self.cy = 0.0

    @property
    def width(self):
        return self.x1 - self.x0

    def is_leaf(self):
        return self.children is None

    def contains(self, x, y):
        return self.x0 <= x <= self.x1 and self.y0 <= y <= self.y1

    def quadrant(self, x, y):
        mx = (self.x0 + self.x1) / 2
        my = (self.y0 + self.y1) / 2
        return int(x >= mx) | (int(y >= my) << 1)

    def split(self):
        mx = (self.x0 + self.x1) / 2
        my = (self.y0 + self.y1) / 2
        self.children = [
            Cell(self.x0, self.y0, mx, my),
            Cell(mx, self.y0, self.x1, my),
            Cell(self.x0, my, mx, self.y1),
            Cell(mx, my, self.x1, self.y1),
        ]


class QuadTree:
    # Below this width a cell is not split any further; bodies closer than
    # this end up in the same leaf even if not exactly coincident.
    MIN_CELL = 1e-9

    def __init__(self, root):
        self.root = root
        self.size = 0

    @classmethod
    def build(cls, bodies):
        bodies = list(bodies)
        if not bodies:
            return cls(None)

        xs = [b.x for b in bodies]
        ys = [b.y for b in bodies]
        x0, x1 = min(xs), max(xs)
        y0, y1 = min(ys), max(ys)
        # Square root cell, padded so bodies on the boundary stay inside.
        side = max(x1 - x0, y1 - y0, 1.0) * 1.01
        cx = (x0 + x1) / 2
        cy = (y0 + y1) / 2
        tree = cls(Cell(cx - side / 2, cy - side / 2, cx + side / 2, cy + side / 2))
        for body in bodies:
            tree.insert(body)
        tree._accumulate(tree.root)
        return tree

    def insert(self, body):
        cell = self.root
        self.size += 1
        while True:
            if cell.is_leaf():
                if not cell.bodies:
                    cell.bodies.append(body)
                    return
                first = cell.bodies[0]
                if (first.x == body.x and first.y == body.y) or cell.width < self.MIN_CELL:
                    cell.bodies.append(body)
                    return
                # Occupied leaf: push its bodies one level down and keep going.
                cell.split()
                resident, cell.bodies = cell.bodies, []
                child = cell.children[cell.quadrant(first.x, first.y)]
                child.bodies = resident
            cell = cell.children[cell.quadrant(body.x, body.y)]

    def _accumulate(self, cell):
        if cell.is_leaf():
            cell.mass = len(cell.bodies)
            if cell.mass:
                cell.cx = cell.bodies[0].x
                cell.cy = cell.bodies[0].y
            return
        mass = 0
        sx = sy = 0.0
        for child in cell.children:
            self._accumulate(child)
            if child.mass:
                mass += child.mass
                sx += child.cx * child.mass
                sy += child.cy * child.mass
        cell.mass = mass
        if mass:
            cell.cx = sx / mass
            cell.cy = sy / mass

    def visit(self, callback):
        """Pre-order traversal; children are skipped when *callback* returns True."""
        if self.root is None:
            return
        stack = [self.root]
        while stack:
            cell = stack.pop()
            if not callback(cell) and not cell.is_leaf():
                stack.extend(reversed(cell.children))

    def net_force(self, body, theta=0.9, distance_min=1.0, distance_max=math.inf, jitter=None):
        """Unit-charge repulsion acting on *body* from every other body.

        Returns the Barnes-Hut estimate of the sum of ``d / |d|^2`` where
        ``d`` points from *body* to each source. Callers scale it by the
        charge strength (negative for repulsion) and alpha.
        """
        if self.root is None:
            return 0.0, 0.0
        theta2 = theta * theta
        dmin2 = distance_min * distance_min
        dmax2 = distance_max * distance_max
        fx = fy = 0.0
        stack = [self.root]
        while stack:
            cell = stack.pop()
            if not cell.mass:
                continue
            dx = cell.cx - body.x
            dy = cell.cy - body.y
            l = dx * dx + dy * dy
            w = cell.width

            if not cell.is_leaf():
                if w * w / theta2 < l and not cell.contains(body.x, body.y):
                    if l < dmax2:
                        l = max(l, dmin2)
                        fx += dx * cell.mass / l
                        fy += dy * cell.mass / l
                else:
                    stack.extend(cell.children)
                continue

            for other in cell.bodies:
                if other is body:
                    continue
                dx = other.x - body.x
                dy = other.y - body.y
                if dx == 0 and dy == 0:
                    if jitter is None:
                        continue
                    dx, dy = jitter(), jitter()
                l = dx * dx + dy * dy
                if l >= dmax2:
                    continue
                l = max(l, dmin2)
                fx += dx / l
                fy += dy / l
        return fx, fy

    def neighbours(self, x, y, radius):
        """Bodies whose position lies within the box of half-size *radius* around (x, y)."""
        found = []

        def check(cell):
            if cell.x0 > x + radius or cell.x1 < x - radius or cell.y0 > y + radius or cell.y1 < y - radius:
                return True
            if cell.is_leaf():
                for b in cell.bodies:
                    if abs(b.x - x) <= radius and abs(b.y - y) <= radius:
                        found.append(b)
            return False

        self.visit(check)
        return found
