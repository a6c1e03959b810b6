from .Linear import Linear
from ..helpers.Backend import backend


class RectifiedLinear(Linear):
    """y = max(0, W x + b); same packed [W | b] parameters as Linear."""

    def forward(self, x):
        return backend.maximum(0.0, super().forward(x))

    def backward(self, xs, y, grad_out):
        (x,) = xs
        # no gradient through inactive units; y == 0 exactly counts as inactive
        grad_out = backend.where(y == 0, 0.0, grad_out)
        return self._affine_backward(x, grad_out)
