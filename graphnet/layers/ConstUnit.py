from .Layer import Layer
from ..helpers.Backend import backend


class ConstUnit(Layer):
    """Outputs a constant value; the value itself is the layer's parameter."""
    n_inputs = 0

    def __init__(self, value):
        self.value = backend.astype_default(value)

    def forward(self):
        return self.value

    def backward(self, xs, y, grad_out):
        # identity w.r.t. its own value, no inputs to pass gradient to
        return [], grad_out

    def get_parameters(self):
        return self.value

    def set_parameters(self, value):
        self.value = backend.astype_default(value)

    def parameter_shape(self):
        return self.value.shape

    def __repr__(self):
        return "ConstUnit (outputs constant value)"
