from ..helpers.Backend import backend
from ..helpers.errors import ShapeMismatchError


def gradient(context, grad_output):
    """
    Backpropagate grad_output (dJ/dy of the output layer) through the last
    evaluation stored in context.

    Fills context.dJdy, context.dJdθ and context.dJdx and returns context.dJdθ,
    one array per layer in layer order (zeros for layers the output does not
    depend on). The returned arrays are the context's buffers and are
    overwritten by the next call.
    """
    if not context.evaluated:
        raise ValueError("Must evaluate the context before computing the gradient")

    network = context.network
    i_output = context.i_output
    order = network.evaluation_order(i_output)

    # Reset all gradient information to 0 so propagation can just add its terms
    for i, layer in enumerate(network.layers, start=1):
        shape = tuple(layer.parameter_shape())
        if context.dJdθ[i - 1] is None or context.dJdθ[i - 1].shape != shape:
            context.dJdθ[i - 1] = backend.zeros(shape)
        else:
            context.dJdθ[i - 1][...] = 0.0
    for i in order:
        if i != i_output:
            context.dJdy[i - 1][...] = 0.0
    context.dJdx[...] = 0.0

    seed = backend.astype_default(grad_output)
    if seed.shape != context.dJdy[i_output - 1].shape:
        raise ShapeMismatchError(
            f"seed gradient of shape {seed.shape} does not match output shape "
            f"{context.dJdy[i_output - 1].shape}"
        )
    context.dJdy[i_output - 1][...] = seed

    # reversed ascending order: every consumer of layer i has a larger index, so
    # dJdy[i] is complete before layer i is processed
    for i in reversed(order):
        propagate_layer(context, i)

    return context.dJdθ


def propagate_layer(context, i):
    """Local chain-rule step for layer i: add its contributions to its inputs and parameters."""
    network = context.network
    layer = network.layer(i)
    connections = network.inputs_of(i)

    xs = [context.input if k == 0 else context.outputs[k - 1] for k in connections]
    y = context.outputs[i - 1]
    grad_inputs, grad_params = layer.backward(xs, y, context.dJdy[i - 1])

    # a layer with several consumers receives one additive term per consumer
    for k, grad in zip(connections, grad_inputs):
        if k == 0:
            backend.add_into(context.dJdx, grad)
        else:
            backend.add_into(context.dJdy[k - 1], grad)
    backend.add_into(context.dJdθ[i - 1], grad_params)
