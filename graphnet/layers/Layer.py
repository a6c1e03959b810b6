from ..helpers.Backend import backend


class Layer:
    # Subclasses override as needed
    n_inputs = 1

    def forward(self, *xs):
        raise NotImplementedError(f"{type(self).__name__} has no forward implementation")

    def backward(self, xs, y, grad_out):
        # Return (grads wrt each input, grad wrt parameters)
        # xs and y are the values recorded during the forward pass
        raise NotImplementedError(f"{type(self).__name__} has no backward implementation")

    def __call__(self, *xs):
        return self.forward(*xs)

    def get_parameters(self):
        # All parameters as one array (empty for parameter-free layers)
        return backend.zeros((0,))

    def set_parameters(self, value):
        return

    def parameter_shape(self):
        return (0,)

    def __repr__(self):
        return type(self).__name__
