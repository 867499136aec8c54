from . import query
from .model import SimulationStatus

ZOOM_STEP = 1.1


class ViewTransform:
    """Pan/zoom of the rendered view.

    Kept apart from simulation coordinates: screen = world * scale + (x, y).
    """

    def __init__(self, zoom_extent=(0.1, 4.0)):
        self.min_scale, self.max_scale = zoom_extent
        self.scale = 1.0
        self.x = 0.0
        self.y = 0.0

    def set_extent(self, zoom_extent):
        """Change the allowed scale range, re-clamping the current scale."""
        self.min_scale, self.max_scale = zoom_extent
        self.scale = self._clamp(self.scale)

    def _clamp(self, scale):
        return min(max(scale, self.min_scale), self.max_scale)

    def zoom_to(self, scale, anchor=None):
        """Set the scale, keeping the screen point *anchor* over the same world point."""
        new_scale = self._clamp(scale)
        if anchor is not None:
            ax, ay = anchor
            wx, wy = self.screen_to_world(ax, ay)
            self.x = ax - wx * new_scale
            self.y = ay - wy * new_scale
        self.scale = new_scale
        return self.scale

    def zoom_by(self, factor, anchor=None):
        return self.zoom_to(self.scale * factor, anchor)

    def zoom_in(self, anchor=None):
        return self.zoom_by(ZOOM_STEP, anchor)

    def zoom_out(self, anchor=None):
        return self.zoom_by(1 / ZOOM_STEP, anchor)

    def pan(self, dx, dy):
        self.x += dx
        self.y += dy

    def reset(self):
        self.scale = 1.0
        self.x = 0.0
        self.y = 0.0

    def screen_to_world(self, sx, sy):
        # screen = world * scale + offset  =>  world = (screen - offset) / scale
        return (sx - self.x) / self.scale, (sy - self.y) / self.scale

    def world_to_screen(self, wx, wy):
        return wx * self.scale + self.x, wy * self.scale + self.y


class InteractionController:
    """Drag, pause/resume/reset and selection on top of a GraphEngine.

    Every simulation mutation is posted to the engine's command queue and
    takes effect at the start of the next tick.
    """

    def __init__(self, engine):
        self.engine = engine
        self.view = ViewTransform(engine.config.zoom_extent)
        # a reload may carry a different zoom_extent
        engine.add_listener(self._sync_view)

    def _sync_view(self, snapshot):
        extent = self.engine.config.zoom_extent
        if (self.view.min_scale, self.view.max_scale) != tuple(extent):
            self.view.set_extent(extent)

    def drag_start(self, node_id):
        self.engine.post(self.engine.begin_drag, node_id)

    def drag_move(self, node_id, point):
        x, y = point
        self.engine.post(self.engine.move_drag, node_id, float(x), float(y))

    def drag_end(self, node_id):
        self.engine.post(self.engine.end_drag, node_id)

    def drag_move_screen(self, node_id, screen_point):
        """drag_move with a point given in view (screen) coordinates."""
        self.drag_move(node_id, self.view.screen_to_world(*screen_point))

    def pause(self):
        self.engine.post(self.engine.pause)

    def resume(self):
        self.engine.post(self.engine.resume)

    def toggle(self):
        """Play/pause button semantics: pause when running, resume otherwise."""
        if self.engine.status is SimulationStatus.STOPPED:
            self.resume()
        else:
            self.pause()

    def reset(self):
        self.engine.post(self.engine.restart, 1.0)

    def select(self, node_id):
        return query.select(self.engine, node_id)

    def node_at(self, sx, sy):
        """Id of the node under the screen point (sx, sy), or None."""
        wx, wy = self.view.screen_to_world(sx, sy)
        for node in self.engine.nodes.values():
            dx = wx - node.x
            dy = wy - node.y
            if dx * dx + dy * dy <= node.radius * node.radius:
                return node.id
        return None
