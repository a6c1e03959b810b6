from ..helpers.Backend import backend


class EarlyStopping:
    """
    Tells a training loop to stop once a metric has gone `patience` epochs
    without improving by more than `min_delta`.

    monitor=None watches "val_loss" when the epoch metrics carry it and
    "loss" otherwise; the choice is made on the first update and kept.
    When stopping with restore_best_weights, the network gets back the
    parameter blobs it had at the best epoch.
    """
    def __init__(self, patience=5, min_delta=0.0, monitor=None, mode="min", restore_best_weights=True):
        if mode not in ("min", "max"):
            raise ValueError(f"mode must be 'min' or 'max', got {mode!r}")
        self.patience = patience
        self.min_delta = float(min_delta)
        self.monitor = monitor
        self.mode = mode
        self.restore_best_weights = restore_best_weights

        self.best = None
        self.best_epoch = -1
        self.wait = 0
        self.stopped = False
        self._best_params = None

    def _watched_value(self, metrics):
        if self.monitor is None:
            self.monitor = "val_loss" if "val_loss" in metrics else "loss"
        if self.monitor not in metrics:
            raise ValueError(
                f"early stopping monitors {self.monitor!r} but the epoch metrics only have {sorted(metrics)}"
            )
        return metrics[self.monitor]

    def improved(self, value):
        if self.best is None:
            return True
        # gain > 0 means better in the configured direction
        gain = self.best - value if self.mode == "min" else value - self.best
        return gain > self.min_delta

    def update(self, epoch, metrics, network):
        """Record one epoch; returns True when training should stop."""
        value = self._watched_value(metrics)
        if self.improved(value):
            self.best, self.best_epoch, self.wait = value, epoch, 0
            self._best_params = [backend.array(p, copy=True) for p in network.get_parameters()]
            return False

        self.wait += 1
        if self.wait < self.patience:
            return False
        self.stopped = True
        if self.restore_best_weights and self._best_params is not None:
            network.set_parameters(self._best_params)
        return True
