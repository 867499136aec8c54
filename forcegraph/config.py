import dataclasses
import math
from dataclasses import dataclass

from .errors import ConfigurationError


@dataclass(frozen=True)
class LayoutConfig:
    """Physics and view parameters of a layout run.

    Defaults match the knowledge graph web view (800x600 canvas,
    spring distance ``50 + (1 - strength) * 100``, charge -300).
    """

    # Link (spring)
    link_distance_base: float = 50.0
    link_distance_scale: float = 100.0

    # Many-body repulsion
    charge_strength: float = -300.0
    charge_distance_min: float = 1.0
    charge_distance_max: float = math.inf
    theta: float = 0.9

    # Collision
    collision_padding: float = 5.0
    collision_strength: float = 1.0
    collision_iterations: int = 1

    # Centering
    center: tuple = (400.0, 300.0)
    center_strength: float = 1.0

    # Alpha / integration
    alpha_decay: float = 0.0228
    alpha_min: float = 0.001
    alpha_target: float = 0.0
    drag_alpha_target: float = 0.3
    velocity_decay: float = 0.4

    # View
    zoom_extent: tuple = (0.1, 4.0)

    # Symmetry breaking and recovery
    seed: int = 0

    def __post_init__(self):
        self.validate()

    @classmethod
    def from_mapping(cls, values):
        """Build a config from a plain dict, rejecting unknown keys."""
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigurationError(f"unknown configuration keys: {', '.join(unknown)}")
        return cls(**values)

    def replace(self, **overrides):
        if not overrides:
            return self
        known = {f.name for f in dataclasses.fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigurationError(f"unknown configuration keys: {', '.join(unknown)}")
        return dataclasses.replace(self, **overrides)

    def link_distance(self, strength):
        return self.link_distance_base + (1.0 - strength) * self.link_distance_scale

    def validate(self):
        _require(_finite(self.link_distance_base) and self.link_distance_base >= 0,
                 "link_distance_base", self.link_distance_base, "a finite number >= 0")
        _require(_finite(self.link_distance_scale) and self.link_distance_scale >= 0,
                 "link_distance_scale", self.link_distance_scale, "a finite number >= 0")
        _require(_finite(self.charge_strength),
                 "charge_strength", self.charge_strength, "finite")
        _require(_finite(self.charge_distance_min) and self.charge_distance_min > 0,
                 "charge_distance_min", self.charge_distance_min, "a finite number > 0")
        _require(_number(self.charge_distance_max) and self.charge_distance_max > self.charge_distance_min,
                 "charge_distance_max", self.charge_distance_max, "greater than charge_distance_min")
        _require(_finite(self.theta) and self.theta > 0,
                 "theta", self.theta, "a finite number > 0")
        _require(_finite(self.collision_padding) and self.collision_padding >= 0,
                 "collision_padding", self.collision_padding, "a finite number >= 0")
        _require(_finite(self.collision_strength) and 0 < self.collision_strength <= 1,
                 "collision_strength", self.collision_strength, "in (0, 1]")
        _require(isinstance(self.collision_iterations, int) and not isinstance(self.collision_iterations, bool)
                 and self.collision_iterations >= 1,
                 "collision_iterations", self.collision_iterations, "an integer >= 1")
        _require(_pair(self.center) and all(_finite(v) for v in self.center),
                 "center", self.center, "a pair of finite numbers")
        _require(_finite(self.center_strength) and 0 <= self.center_strength <= 1,
                 "center_strength", self.center_strength, "in [0, 1]")
        _require(_finite(self.alpha_decay) and 0 < self.alpha_decay < 1,
                 "alpha_decay", self.alpha_decay, "in (0, 1)")
        # alpha only approaches its target, so a zero floor is never crossed.
        _require(_finite(self.alpha_min) and 0 < self.alpha_min < 1,
                 "alpha_min", self.alpha_min, "in (0, 1)")
        _require(_finite(self.alpha_target) and 0 <= self.alpha_target <= 1,
                 "alpha_target", self.alpha_target, "in [0, 1]")
        # A drag reheat that cannot lift alpha above alpha_min would never run.
        _require(_finite(self.drag_alpha_target) and self.alpha_min < self.drag_alpha_target <= 1,
                 "drag_alpha_target", self.drag_alpha_target, "in (alpha_min, 1]")
        _require(_finite(self.velocity_decay) and 0 <= self.velocity_decay < 1,
                 "velocity_decay", self.velocity_decay, "in [0, 1)")
        _require(_pair(self.zoom_extent) and all(_finite(v) for v in self.zoom_extent)
                 and 0 < self.zoom_extent[0] <= self.zoom_extent[1],
                 "zoom_extent", self.zoom_extent, "a (min, max) pair with 0 < min <= max")
        _require(isinstance(self.seed, int) and not isinstance(self.seed, bool),
                 "seed", self.seed, "an integer")


def _number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _finite(value):
    return _number(value) and math.isfinite(value)


def _pair(value):
    return isinstance(value, (tuple, list)) and len(value) == 2


def _require(ok, name, value, expected):
    if not ok:
        raise ConfigurationError(f"{name} must be {expected}, got {value!r}")
