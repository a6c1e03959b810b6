class GraphnetError(Exception):
    """Base class for errors raised by graphnet."""


class ValidationError(GraphnetError, ValueError):
    """A network (or a request against it) violates its structural invariants."""

    def __init__(self, message, layer_index=None):
        if layer_index is not None:
            message = f"layer {layer_index}: {message}"
        super().__init__(message)
        self.layer_index = layer_index


class ShapeMismatchError(GraphnetError, ValueError):
    """Dimension-incompatible arrays met inside forward or backward."""
