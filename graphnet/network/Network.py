import numbers

import numpy as np

from ..layers.Layer import Layer
from ..helpers.errors import ValidationError


class Network:
    """
    A fixed DAG of layers.

    Layers are numbered 1..m. connections[i-1] lists, in argument order, the
    indices feeding layer i; index 0 is the network input. Every index in
    connections[i-1] must be smaller than i, so ascending layer order is
    already a topological order.

    The network is read-only during evaluation and may be shared by several
    EvaluationContext objects; only set_parameters() mutates it.
    """
    def __init__(self, layers, connections=None):
        layers = list(layers)
        if connections is None:
            # sequential: each layer consumes the previous one (layer 1 consumes the input)
            connections = [[i - 1] for i in range(1, len(layers) + 1)]
        connections = [list(c) for c in connections]
        self._validate(layers, connections)

        for layer in layers:
            layer._owner = self
        self.layers = layers
        self.connections = connections
        self._orders = {}

    @classmethod
    def sequential(cls, *layers):
        return cls(layers)

    @staticmethod
    def _validate(layers, connections):
        if len(layers) == 0:
            raise ValidationError("a network needs at least one layer")
        if len(connections) != len(layers):
            raise ValidationError(
                f"got {len(connections)} connection lists for {len(layers)} layers"
            )
        seen = set()
        for i, (layer, inputs) in enumerate(zip(layers, connections), start=1):
            if not isinstance(layer, Layer):
                raise ValidationError(f"{layer!r} is not a Layer", layer_index=i)
            if id(layer) in seen:
                raise ValidationError("the same Layer instance appears twice", layer_index=i)
            seen.add(id(layer))
            if getattr(layer, "_owner", None) is not None:
                raise ValidationError("Layer is already owned by another Network", layer_index=i)
            if len(inputs) != layer.n_inputs:
                raise ValidationError(
                    f"{type(layer).__name__} takes {layer.n_inputs} input(s), "
                    f"got {len(inputs)} connection(s)",
                    layer_index=i,
                )
            for k in inputs:
                if not isinstance(k, numbers.Integral) or isinstance(k, bool):
                    raise ValidationError(f"connection {k!r} is not an integer index", layer_index=i)
                if k < 0 or k >= i:
                    raise ValidationError(
                        f"connection {k} must satisfy 0 <= k < {i}", layer_index=i
                    )

    def __len__(self):
        return len(self.layers)

    def __repr__(self):
        names = ", ".join(type(layer).__name__ for layer in self.layers)
        return f"Network with layers ({names})"

    def layer(self, i):
        return self.layers[i - 1]

    def inputs_of(self, i):
        return self.connections[i - 1]

    def check_output_index(self, i_output):
        if i_output is None:
            return len(self.layers)
        if not isinstance(i_output, numbers.Integral) or not 1 <= i_output <= len(self.layers):
            raise ValidationError(
                f"output layer index {i_output!r} outside 1..{len(self.layers)}"
            )
        return int(i_output)

    def evaluation_order(self, i_output=None):
        """
        Ascending indices of the layers i_output depends on (itself included).
        Reversed, it is the order in which gradients can be propagated.
        Cached per output index.
        """
        i_output = self.check_output_index(i_output)
        order = self._orders.get(i_output)
        if order is None:
            needed = {i_output}
            stack = [i_output]
            while stack:
                i = stack.pop()
                for k in self.inputs_of(i):
                    if k > 0 and k not in needed:
                        needed.add(k)
                        stack.append(k)
            order = tuple(sorted(needed))
            self._orders[i_output] = order
        return order

    # ---------- stateless evaluation ----------
    def __call__(self, x, i_output=None):
        return self.evaluate(x, i_output)

    def evaluate(self, x, i_output=None):
        """
        Evaluate without storing intermediate results. A layer feeding several
        consumers is recomputed once per path; use an EvaluationContext for
        anything repeated.
        """
        return self._eval_layer(x, self.check_output_index(i_output))

    def _eval_layer(self, x, i):
        if i == 0:
            return x
        inputs = [self._eval_layer(x, k) for k in self.inputs_of(i)]
        return self.layer(i).forward(*inputs)

    # ---------- parameters ----------
    def get_parameters(self):
        return [layer.get_parameters() for layer in self.layers]

    def set_parameters(self, params):
        params = list(params)
        if len(params) != len(self.layers):
            raise ValidationError(
                f"expected {len(self.layers)} parameter blobs, got {len(params)}"
            )
        for layer, p in zip(self.layers, params):
            layer.set_parameters(p)

    # model I/O
    def save(self, path):
        arrays = {f"p{i}": p for i, p in enumerate(self.get_parameters(), start=1)}
        np.savez(path, **arrays)

    def load(self, path):
        data = np.load(path)
        self.set_parameters([data[f"p{i}"] for i in range(1, len(self.layers) + 1)])


def get_parameters(model):
    return model.get_parameters()


def set_parameters(model, params):
    model.set_parameters(params)
