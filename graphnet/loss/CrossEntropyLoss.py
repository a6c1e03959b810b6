from ..helpers.Backend import backend


class CrossEntropyLoss:
    def __init__(self, eps=1e-12):
        self.eps = eps
        # cache from forward
        self.probs = None
        self.Y = None

    def forward(self, probs, Y_onehot):
        """
        probs: (num_classes,)  -- post-softmax, e.g. the output of a Softmax layer
        Y_onehot: (num_classes,)
        returns: loss scalar
        """
        probs = backend.astype_default(probs)
        Y_onehot = backend.astype_default(Y_onehot)
        self.probs = probs
        self.Y = Y_onehot
        return float(-backend.sum(Y_onehot * backend.log(probs + self.eps)))

    def backward(self):
        """
        dL/dprobs = -Y / probs
        This is the seed gradient for a network ending in Softmax.
        """
        if self.probs is None or self.Y is None:
            raise ValueError("Must call forward() before backward()")
        return -self.Y / (self.probs + self.eps)
