from ..helpers.Backend import backend


class AdamWOptimizer:
    def __init__(
        self, network, lr=1e-3, weight_decay=0.0, beta1=0.9, beta2=0.999, eps=1e-8
    ):
        self.network = network
        self.lr = lr
        self.weight_decay = weight_decay
        self.beta1 = beta1
        self.beta2 = beta2
        self.eps = eps
        self.t = 0
        # state keyed by layer position
        self._m = {}
        self._v = {}

    def step(self, grads):
        self.t += 1
        b1t = 1.0 - self.beta1**self.t
        b2t = 1.0 - self.beta2**self.t
        lr = self.lr
        wd = self.weight_decay

        new_params = []
        for i, (p, g) in enumerate(zip(self.network.get_parameters(), grads)):
            if p.size == 0:
                new_params.append(p)
                continue
            if i not in self._m or self._m[i].shape != p.shape:
                self._m[i] = backend.zeros_like(p)
                self._v[i] = backend.zeros_like(p)
            m = self._m[i]
            v = self._v[i]
            # Adam moments (in-place)
            m[...] = self.beta1 * m + (1.0 - self.beta1) * g
            v[...] = self.beta2 * v + (1.0 - self.beta2) * (g * g)
            m_hat = m / b1t
            v_hat = v / b2t
            # decoupled weight decay
            p = p * (1.0 - lr * wd) if wd != 0.0 else p
            # Adam update
            new_params.append(p - lr * (m_hat / (backend.sqrt(v_hat) + self.eps)))
        self.network.set_parameters(new_params)
