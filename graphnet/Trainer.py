import time

from .network.EvaluationContext import EvaluationContext
from .network.Backprop import gradient
from .early_stopping.EarlyStopping import EarlyStopping
from .helpers.Backend import backend
from .helpers.permutation import random_permutation


class Trainer:
    """
    Fits a Network sample by sample: per sample one cached evaluation and one
    gradient pass; parameter gradients are averaged over batch_size samples
    and handed to the optimizer.
    """
    def __init__(
        self,
        network,
        loss_fn,
        optimizer,
        epochs=10,
        batch_size=1,
        shuffle=True,
        seed=None,
        verbose=1,
    ):
        self.network = network
        self.loss_fn = loss_fn
        self.optimizer = optimizer
        self.epochs = epochs
        self.batch_size = batch_size
        self.shuffle = shuffle
        self.seed = seed
        self.verbose = verbose
        self.context = EvaluationContext(network)

    def predict(self, x):
        return backend.array(self.context(x), copy=True)

    def evaluate_loss(self, xs, ys):
        total = 0.0
        for x, y in zip(xs, ys):
            total += self.loss_fn.forward(self.context(x), y)
        return total / len(xs)

    def _batch_gradient(self, xs, ys, idx):
        grads = None
        for j in idx:
            out = self.context(xs[j])
            self.loss_fn.forward(out, ys[j])
            dJdθ = gradient(self.context, self.loss_fn.backward())
            if grads is None:
                grads = [backend.array(g, copy=True) for g in dJdθ]
            else:
                for acc, g in zip(grads, dJdθ):
                    acc += g
        return [g / len(idx) for g in grads]

    def fit(self, xs, ys, xs_val=None, ys_val=None, early_stopping=None, patience=None, logger=None):
        if self.seed is not None:
            backend.seed(self.seed)

        history = {"loss": []}
        has_val = xs_val is not None and ys_val is not None
        if has_val:
            history["val_loss"] = []

        # a dict or a bare patience builds a stopper watching val_loss, or loss without validation data
        if isinstance(early_stopping, dict):
            stopper = EarlyStopping(**early_stopping)
        elif early_stopping is None and patience is not None:
            stopper = EarlyStopping(patience=patience)
        else:
            stopper = early_stopping

        n = len(xs)
        if self.verbose > 0:
            print(f"Starting training for {self.epochs} epochs...")
        for ep in range(1, self.epochs + 1):
            t0 = time.time()
            order = random_permutation(n) if self.shuffle else list(range(n))
            for start in range(0, n, self.batch_size):
                grads = self._batch_gradient(xs, ys, order[start:start + self.batch_size])
                self.optimizer.step(grads)

            train_loss = self.evaluate_loss(xs, ys)
            history["loss"].append(train_loss)
            metrics = {"loss": train_loss}
            if has_val:
                val_loss = self.evaluate_loss(xs_val, ys_val)
                history["val_loss"].append(val_loss)
                metrics["val_loss"] = val_loss

            # logging (console)
            if self.verbose > 0:
                log_interval = max(1, self.epochs // 10)
                if ep % log_interval == 0 or ep == 1 or ep == self.epochs:
                    if has_val:
                        print(f"Epoch {ep}/{self.epochs} - loss: {train_loss:.4f} - val_loss: {val_loss:.4f}")
                    else:
                        print(f"Epoch {ep}/{self.epochs} - loss: {train_loss:.4f}")

            # logging (files + checkpoints)
            if logger is not None:
                logger.log_epoch(ep, time_s=time.time() - t0, **metrics)
                logger.save_checkpoint(self.network.get_parameters(), best=False)
                key = "val_loss" if has_val else "loss"
                if ep == 1 or metrics[key] <= min(history[key]):
                    logger.save_checkpoint(self.network.get_parameters(), best=True)

            # early stopping
            if stopper is not None and stopper.update(ep, metrics, self.network):
                if self.verbose > 0:
                    print(
                        f"Early stopping at epoch {ep:02d}. "
                        f"Best {stopper.monitor}={stopper.best:.4f} at epoch {stopper.best_epoch:02d}."
                    )
                if logger is not None:
                    logger.save_checkpoint(self.network.get_parameters(), best=True)
                break

        if logger is not None:
            logger.save_json()
        return history
