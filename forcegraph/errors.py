class LayoutError(Exception):
    """Base class for layout engine errors."""


class DataIntegrityError(LayoutError):
    """Loaded node/link set is inconsistent (duplicate ids, dangling links...)."""


class ConfigurationError(LayoutError, ValueError):
    """A parameter or node attribute is outside its documented range."""


class NumericInstabilityError(LayoutError, ArithmeticError):
    """A tick produced a non-finite position or velocity for a node."""

    def __init__(self, node_id, message=None):
        self.node_id = node_id
        super().__init__(message or f"non-finite state for node {node_id!r}")
