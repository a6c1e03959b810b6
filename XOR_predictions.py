import numpy as np

from graphnet import Network, Linear, RectifiedLinear, Softmax, Trainer, backend
from graphnet.loss import CrossEntropyLoss
from graphnet.optimizer import AdamWOptimizer
from graphnet.helpers.logger import RunLogger


def generate_xor_data(n):
    combos = np.array([list(map(int, format(i, f'0{n}b'))) for i in range(2**n)], dtype=float)
    parity = np.sum(combos, axis=1).astype(int) % 2  # odd parity = 1
    Y = np.eye(2)[parity]  # one-hot, shape (2^n, 2)
    return combos, Y


def test(n, n_hidden, lr, epochs, runs_root=None):
    X, Y = generate_xor_data(n)

    network = Network([
        RectifiedLinear(n, n_hidden),
        RectifiedLinear(n_hidden, n_hidden),
        Linear(n_hidden, 2),
        Softmax(),
    ])
    trainer = Trainer(
        network,
        CrossEntropyLoss(),
        AdamWOptimizer(network, lr=lr),
        epochs=epochs,
        batch_size=len(X),
    )
    logger = RunLogger(root=runs_root, tag=f"xor{n}") if runs_root else None
    history = trainer.fit(X, Y, logger=logger)
    if logger is not None:
        logger.plot_loss(history, tag=f"xor{n}")

    preds = np.array([np.argmax(trainer.predict(x)) for x in X])
    truth = np.argmax(Y, axis=1)

    print(f"Predicting XOR for {n} inputs:")
    print(f"XOR-{n} Predictions:", preds)
    print(f"Accuracy: {np.mean(preds == truth) * 100:.2f}%")


if __name__ == "__main__":
    # Example usage
    backend.seed(0)

    test(n=2, n_hidden=8, lr=0.05, epochs=300)
    test(n=3, n_hidden=16, lr=0.05, epochs=500)
    test(n=4, n_hidden=32, lr=0.02, epochs=1000, runs_root="runs")
