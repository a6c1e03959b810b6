from ..helpers.Backend import backend


class EvaluationContext:
    """
    Storage for evaluating one Network on one input and backpropagating through it.

    Identity (set once): the network, referenced but not owned.
    Cache (replaced per allocation / evaluation / gradient pass):
        input      the last input given
        i_output   the layer treated as output
        outputs[i] forward value of layer i+1 (None if not needed for i_output)
        dJdy[i]    gradient accumulator w.r.t. outputs[i]
        dJdθ[i]    gradient accumulator w.r.t. the parameters of layer i+1
        dJdx       gradient accumulator w.r.t. the network input

    A context belongs to one caller at a time; several contexts may share a network.
    """
    def __init__(self, network):
        self.network = network
        m = len(network.layers)
        self.input = None
        self.i_output = None
        self.outputs = [None] * m
        self.dJdy = [None] * m
        self.dJdθ = [None] * m
        self.dJdx = None
        self.evaluated = False

    def __repr__(self):
        return f"{self.network!r} with storage for intermediate evaluations and backpropagated gradients."

    @property
    def allocated(self):
        return self.i_output is not None

    # ---------- allocation ----------
    def allocate(self, sample_input, i_output=None):
        """
        Size all buffers for inputs shaped like sample_input. Every layer the
        output depends on is run forward exactly once to learn its output shape.
        """
        network = self.network
        i_output = network.check_output_index(i_output)
        x = backend.astype_default(sample_input)

        m = len(network.layers)
        # unallocated until the pass below completes
        self.i_output = None
        self.evaluated = False
        self.outputs = [None] * m
        self.dJdy = [None] * m
        self.input = x
        self.dJdx = backend.zeros_like(x)

        for i in network.evaluation_order(i_output):
            inputs = [self._value_of(k) for k in network.inputs_of(i)]
            y = backend.astype_default(network.layer(i).forward(*inputs))
            self.outputs[i - 1] = backend.array(y, copy=True)
            self.dJdy[i - 1] = backend.zeros_like(y)
        # every layer gets a parameter-gradient buffer so the list zips with get_parameters()
        self.dJdθ = [backend.zeros(layer.parameter_shape()) for layer in network.layers]

        self.i_output = i_output
        self.evaluated = True
        return self

    def _value_of(self, k):
        return self.input if k == 0 else self.outputs[k - 1]

    # ---------- cached evaluation ----------
    def __call__(self, x, i_output=None):
        return self.evaluate(x, i_output)

    def evaluate(self, x, i_output=None):
        """
        Evaluate the network on x, storing every intermediate output. Each needed
        layer runs forward exactly once per call, however many consumers it has.
        Buffers are reused when x has the allocated shape and i_output is unchanged.
        """
        network = self.network
        i_output = network.check_output_index(i_output)
        x = backend.astype_default(x)
        if (not self.allocated or i_output != self.i_output
                or self.input is None or self.input.shape != x.shape):
            self.allocate(x, i_output)
            return self.outputs[i_output - 1]

        self.input = x
        self.evaluated = False
        # ascending order lists each needed layer once, after all of its inputs
        for i in network.evaluation_order(i_output):
            inputs = [self._value_of(k) for k in network.inputs_of(i)]
            y = backend.astype_default(network.layer(i).forward(*inputs))
            self._store(i, y)
        self.evaluated = True
        return self.outputs[i_output - 1]

    def _store(self, i, y):
        buffer = self.outputs[i - 1]
        if buffer.shape != y.shape:
            # output shape changed (e.g. parameters replaced); re-size this layer only
            self.outputs[i - 1] = backend.array(y, copy=True)
            self.dJdy[i - 1] = backend.zeros_like(y)
        else:
            buffer[...] = y

    # ---------- parameters ----------
    def get_parameters(self):
        return self.network.get_parameters()

    def set_parameters(self, params):
        self.network.set_parameters(params)


def allocate(network, sample_input, i_output=None):
    """Create a context for network with buffers sized for sample_input."""
    return EvaluationContext(network).allocate(sample_input, i_output)


def evaluate(context, x, i_output=None):
    return context.evaluate(x, i_output)
