import numbers

from .Layer import Layer
from ..helpers.Backend import backend
from ..helpers.errors import ShapeMismatchError
from ..helpers.initializers import glorot_uniform


class Linear(Layer):
    """
    Affine unit y = W x + b.

    Parameters live in one packed matrix Wb of shape (out_features, in_features + 1)
    whose last column is the bias.

    Linear(W, b) wraps given arrays (b defaults to zeros);
    Linear(in_features, out_features) draws W with Glorot uniform and zero bias.
    """
    def __init__(self, weights, bias=None, init_weights=None, init_bias=None):
        if isinstance(weights, numbers.Integral) and isinstance(bias, numbers.Integral):
            in_features, out_features = int(weights), int(bias)
            weights = glorot_uniform(out_features, in_features) if init_weights is None else init_weights
            bias = backend.zeros(out_features) if init_bias is None else init_bias

        weights = backend.astype_default(weights)
        if weights.ndim != 2:
            raise ShapeMismatchError(f"weights must be a matrix, got shape {weights.shape}")
        if bias is None:
            bias = backend.zeros(weights.shape[0])
        bias = backend.astype_default(bias).reshape(-1)
        if bias.shape[0] != weights.shape[0]:
            raise ShapeMismatchError(
                f"bias of length {bias.shape[0]} does not match {weights.shape[0]} weight rows"
            )
        self.Wb = backend.hstack([weights, bias])

    # views into the packed parameter matrix
    @property
    def weights(self):
        return self.Wb[:, :-1]

    @property
    def bias(self):
        return self.Wb[:, -1]

    @property
    def in_features(self):
        return self.Wb.shape[1] - 1

    @property
    def out_features(self):
        return self.Wb.shape[0]

    def forward(self, x):
        x = backend.ensure_array(x)
        # inputs are vectors; a column (n, 1) would broadcast against the bias
        if x.ndim != 1:
            raise ShapeMismatchError(f"input must be a vector, got shape {x.shape}")
        return backend.matmul(self.weights, x) + self.bias

    def backward(self, xs, y, grad_out):
        (x,) = xs
        return self._affine_backward(x, grad_out)

    def _affine_backward(self, x, grad_out):
        dx = backend.matmul(backend.transpose(self.weights), grad_out)
        dW = backend.outer(grad_out, x)
        db = grad_out
        # [dW | db] matches the [W | b] packing
        return [dx], backend.hstack([dW, db])

    def get_parameters(self):
        return self.Wb

    def set_parameters(self, Wb):
        Wb = backend.astype_default(Wb)
        if Wb.ndim != 2 or Wb.shape[1] < 1:
            raise ShapeMismatchError(f"parameters must be a packed [W | b] matrix, got shape {Wb.shape}")
        self.Wb = Wb

    def parameter_shape(self):
        return self.Wb.shape

    def __repr__(self):
        return f"{type(self).__name__}({self.in_features} -> {self.out_features})"
