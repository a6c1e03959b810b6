class SGDOptimizer:
    def __init__(self, network, lr=1e-2, weight_decay=0.0):
        self.network = network  # anything with get_parameters() / set_parameters()
        self.lr = lr
        self.wd = weight_decay

    def step(self, grads):
        # grads: one array per layer, positionally matching get_parameters()
        new_params = []
        for p, g in zip(self.network.get_parameters(), grads):
            if p.size == 0:
                new_params.append(p)
            elif self.wd != 0.0:
                new_params.append(p - self.lr * (g + self.wd * p))  # L2 weight decay
            else:
                new_params.append(p - self.lr * g)
        self.network.set_parameters(new_params)
