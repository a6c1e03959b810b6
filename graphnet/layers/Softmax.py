from .Layer import Layer
from ..helpers.Backend import backend


class Softmax(Layer):
    # no parameters
    def forward(self, z):
        z = backend.ensure_array(z)
        exps = backend.exp(z - backend.max(z))  # stability
        return exps / backend.sum(exps)

    def backward(self, xs, y, grad_out):
        # With v = exp(x - max x) and s = sum(v), dy/dx = (diag(v) s - v v^T) / s^2, so
        # dJ/dx = -(dJdy . v / s^2) v + dJdy * v / s  (no Jacobian materialized)
        (x,) = xs
        v = backend.exp(x - backend.max(x))
        s = backend.sum(v)
        dx = -(backend.dot(grad_out, v) / s**2) * v + grad_out * v / s
        return [dx], backend.zeros((0,))
