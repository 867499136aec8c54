"""Tests for drag, pause/resume/reset and the view transform."""

import math

import pytest

from forcegraph.interaction import InteractionController, ViewTransform
from forcegraph.model import SimulationStatus


# -----------------------------------------------------------------------
# Dragging
# -----------------------------------------------------------------------


class TestDrag:
    def test_commands_wait_for_next_tick(self, loaded, controller):
        controller.drag_start("a")
        assert loaded.pending == 1
        assert not loaded.nodes["a"].pinned
        loaded.tick()
        assert loaded.pending == 0
        assert loaded.nodes["a"].pinned
        assert loaded.dragging == {"a"}

    def test_pinned_node_does_not_move(self, loaded, controller):
        loaded.run(max_ticks=3)
        held = loaded.snapshot().positions["a"]
        controller.drag_start("a")
        for _ in range(50):
            assert loaded.tick().positions["a"] == held

    def test_drag_move_sets_position(self, loaded, controller):
        controller.drag_start("a")
        controller.drag_move("a", (100, 100))
        snap = loaded.tick()
        assert snap.positions["a"] == (100.0, 100.0)
        assert loaded.nodes["a"].vx == 0.0
        for _ in range(10):
            assert loaded.tick().positions["a"] == (100.0, 100.0)

    def test_release_resumes_motion(self, loaded, controller):
        controller.drag_start("a")
        controller.drag_move("a", (100, 100))
        loaded.run(max_ticks=5)
        controller.drag_end("a")
        snap = loaded.tick()
        assert not loaded.nodes["a"].pinned
        assert snap.positions["a"] != (100.0, 100.0)

    def test_drag_reheats_converged_layout(self, loaded, controller):
        loaded.run()
        assert loaded.status is SimulationStatus.CONVERGED
        cold = loaded.alpha
        controller.drag_start("b")
        loaded.tick()
        assert loaded.status is SimulationStatus.RUNNING
        assert loaded.alpha_target == pytest.approx(0.3)
        assert loaded.alpha > cold

    def test_drag_end_lets_alpha_decay_again(self, loaded, controller):
        loaded.run()
        controller.drag_start("b")
        loaded.run(max_ticks=40)
        warm = loaded.alpha
        controller.drag_end("b")
        loaded.tick()
        assert loaded.alpha_target == loaded.config.alpha_target
        assert loaded.alpha < warm
        loaded.run()
        assert loaded.status is SimulationStatus.CONVERGED

    def test_drag_move_does_not_touch_alpha(self, loaded, controller):
        controller.drag_start("a")
        loaded.tick()
        alpha = loaded.alpha
        controller.drag_move("a", (10, 10))
        loaded.process_pending()
        assert loaded.alpha == alpha

    def test_overlapping_drags(self, loaded, controller):
        controller.drag_start("a")
        controller.drag_start("b")
        controller.drag_end("a")
        loaded.tick()
        assert loaded.alpha_target == pytest.approx(0.3)
        controller.drag_end("b")
        loaded.tick()
        assert loaded.alpha_target == 0.0

    def test_unknown_node_is_noop(self, loaded, controller):
        loaded.run()
        controller.drag_start("nope")
        controller.drag_move("nope", (1, 1))
        controller.drag_end("nope")
        loaded.tick()
        assert loaded.dragging == frozenset()
        assert loaded.status is SimulationStatus.CONVERGED

    def test_non_finite_point_ignored(self, loaded, controller):
        controller.drag_start("a")
        loaded.tick()
        fixed = (loaded.nodes["a"].fx, loaded.nodes["a"].fy)
        controller.drag_move("a", (math.nan, 0))
        loaded.tick()
        assert (loaded.nodes["a"].fx, loaded.nodes["a"].fy) == fixed

    def test_drag_in_screen_coordinates(self, loaded, controller):
        controller.view.zoom_to(2.0)
        controller.view.pan(10, 20)
        controller.drag_start("a")
        controller.drag_move_screen("a", (210, 220))
        assert loaded.tick().positions["a"] == (100.0, 100.0)


# -----------------------------------------------------------------------
# Pause / resume / reset
# -----------------------------------------------------------------------


class TestPlayback:
    def test_pause_and_resume(self, loaded, controller):
        loaded.tick()
        controller.pause()
        snap = loaded.tick()
        assert loaded.status is SimulationStatus.STOPPED
        assert loaded.tick() is snap
        assert loaded.tick_count == 1
        controller.resume()
        loaded.tick()
        assert loaded.status is SimulationStatus.RUNNING
        assert loaded.tick_count == 2

    def test_toggle(self, loaded, controller):
        controller.toggle()
        loaded.tick()
        assert loaded.status is SimulationStatus.STOPPED
        controller.toggle()
        loaded.tick()
        assert loaded.status is SimulationStatus.RUNNING

    def test_reset_reheats(self, loaded, controller):
        loaded.run()
        controller.reset()
        loaded.tick()
        assert loaded.status is SimulationStatus.RUNNING
        assert loaded.alpha == pytest.approx(1.0 - loaded.config.alpha_decay)
        assert set(loaded.nodes) == {"a", "b", "c", "d"}

    def test_reset_while_paused_stays_paused(self, loaded, controller):
        controller.pause()
        controller.reset()
        loaded.tick()
        assert loaded.status is SimulationStatus.STOPPED
        assert loaded.alpha == 1.0

    def test_drag_while_paused_keeps_pause(self, loaded, controller):
        controller.pause()
        controller.drag_start("a")
        loaded.tick()
        assert loaded.nodes["a"].pinned
        assert loaded.status is SimulationStatus.STOPPED


# -----------------------------------------------------------------------
# Selection and hit testing
# -----------------------------------------------------------------------


class TestSelection:
    def test_select_delegates(self, controller):
        selection = controller.select("a")
        assert selection.node.id == "a"
        assert {n.id for n in selection.neighbours} == {"b", "c"}

    def test_node_at(self, loaded, controller):
        x, y = loaded.run().positions["c"]
        assert controller.node_at(x + 1, y - 1) == "c"
        assert controller.node_at(x + 5000, y) is None


# -----------------------------------------------------------------------
# View transform
# -----------------------------------------------------------------------


class TestViewTransform:
    def test_defaults(self):
        view = ViewTransform()
        assert (view.scale, view.x, view.y) == (1.0, 0.0, 0.0)

    def test_scale_clamped(self):
        view = ViewTransform((0.1, 4.0))
        assert view.zoom_to(10) == 4.0
        assert view.zoom_to(0.01) == 0.1
        assert view.zoom_by(0.5) == 0.1

    def test_zoom_steps(self):
        view = ViewTransform()
        view.zoom_in()
        assert view.scale == pytest.approx(1.1)
        view.zoom_out()
        assert view.scale == pytest.approx(1.0)

    def test_anchor_stays_put(self):
        view = ViewTransform()
        view.pan(30, -12)
        before = view.screen_to_world(200, 150)
        view.zoom_by(2.5, anchor=(200, 150))
        assert view.screen_to_world(200, 150) == pytest.approx(before)

    def test_world_screen_inverse(self):
        view = ViewTransform()
        view.zoom_to(3.0)
        view.pan(-40, 15)
        assert view.screen_to_world(*view.world_to_screen(12.5, -7.0)) == pytest.approx((12.5, -7.0))

    def test_reset(self):
        view = ViewTransform()
        view.zoom_to(2)
        view.pan(5, 5)
        view.reset()
        assert (view.scale, view.x, view.y) == (1.0, 0.0, 0.0)

    def test_view_never_touches_simulation(self, loaded):
        controller = InteractionController(loaded)
        loaded.run(max_ticks=5)
        before = loaded.snapshot()
        alpha = loaded.alpha
        controller.view.zoom_by(3, anchor=(10, 10))
        controller.view.pan(100, 100)
        assert loaded.pending == 0
        assert loaded.alpha == alpha
        assert {k: (n.x, n.y) for k, n in loaded.nodes.items()} == dict(before.positions)

    def test_extent_from_config(self, engine, triangle):
        engine.load(*triangle, zoom_extent=(0.5, 2.0))
        controller = InteractionController(engine)
        assert controller.view.zoom_to(100) == 2.0

    def test_extent_follows_reload(self, engine, triangle):
        controller = InteractionController(engine)
        controller.view.zoom_to(3.0)
        engine.load(*triangle, zoom_extent=(0.5, 2.0))
        assert controller.view.scale == 2.0
        assert controller.view.zoom_to(100) == 2.0
        assert controller.view.zoom_to(0.01) == 0.5
