import json

import numpy as np
import pytest

from graphnet import ConstUnit, Linear, Network, RectifiedLinear, Softmax, Trainer, allocate, gradient
from graphnet.early_stopping import EarlyStopping
from graphnet.helpers.logger import RunLogger
from graphnet.helpers.permutation import random_permutation, random_permutation_
from graphnet.loss import CrossEntropyLoss, MSELoss
from graphnet.optimizer import AdamWOptimizer, SGDOptimizer


def test_random_permutation_is_a_permutation():
    p = random_permutation(50)
    assert sorted(p) == list(range(50))
    assert p != list(range(50))


def test_random_permutation_copies_sequences():
    items = ("a", "b", "c", "d")
    p = random_permutation(items)
    assert sorted(p) == sorted(items)
    assert items == ("a", "b", "c", "d")


def test_random_permutation_in_place():
    items = list(range(10))
    assert random_permutation_(items) is items
    assert sorted(items) == list(range(10))


def test_random_permutation_small_inputs():
    assert random_permutation(0) == []
    assert random_permutation(1) == [0]


def test_cross_entropy_seed_gradient(num_grad):
    loss = CrossEntropyLoss()
    p = np.array([0.2, 0.5, 0.3])
    y = np.array([0.0, 1.0, 0.0])
    assert loss.forward(p, y) == pytest.approx(-np.log(0.5))
    expected = num_grad(lambda q: CrossEntropyLoss().forward(q, y), p)
    np.testing.assert_allclose(loss.backward(), expected, rtol=1e-5)


def test_mse_seed_gradient(num_grad):
    loss = MSELoss()
    y = np.array([1.0, 2.0, -1.0])
    t = np.array([0.0, 2.0, 1.0])
    assert loss.forward(y, t) == pytest.approx(5.0 / 3.0)
    expected = num_grad(lambda v: MSELoss().forward(v, t), y)
    np.testing.assert_allclose(loss.backward(), expected, rtol=1e-5)


def test_loss_backward_before_forward():
    with pytest.raises(ValueError):
        CrossEntropyLoss().backward()
    with pytest.raises(ValueError):
        MSELoss().backward()


def test_sgd_step_updates_parameters_positionally():
    net = Network([Linear(np.eye(2), np.zeros(2)), Softmax()])
    grads = [np.ones((2, 3)), np.zeros(0)]
    SGDOptimizer(net, lr=0.5).step(grads)
    expected = np.column_stack([np.eye(2), np.zeros(2)]) - 0.5
    np.testing.assert_allclose(net.layers[0].get_parameters(), expected)
    assert net.layers[1].get_parameters().size == 0


def test_sgd_weight_decay():
    net = Network([ConstUnit(np.array([2.0]))], [[]])
    SGDOptimizer(net, lr=0.1, weight_decay=0.5).step([np.array([1.0])])
    np.testing.assert_allclose(net.get_parameters()[0], [2.0 - 0.1 * (1.0 + 0.5 * 2.0)])


def test_adamw_first_step_moves_by_lr():
    net = Network([ConstUnit(np.array([1.0, -1.0]))], [[]])
    AdamWOptimizer(net, lr=0.01).step([np.array([3.0, -0.2])])
    # bias-corrected first step is lr * sign(g)
    np.testing.assert_allclose(net.get_parameters()[0], [0.99, -0.99], rtol=1e-6)


def test_gradient_descent_reduces_loss():
    net = Network([RectifiedLinear(2, 6), Linear(6, 1)])
    x = np.array([0.5, -0.3])
    target = np.array([2.0])
    loss = MSELoss()
    ctx = allocate(net, x)
    opt = SGDOptimizer(net, lr=0.05)

    start = loss.forward(ctx(x), target)
    for _ in range(50):
        loss.forward(ctx(x), target)
        opt.step(gradient(ctx, loss.backward()))
    assert loss.forward(ctx(x), target) < start


def test_early_stopping_restores_best():
    net = Network([ConstUnit(np.array([1.0]))], [[]])
    stopper = EarlyStopping(patience=2)
    assert not stopper.update(1, {"val_loss": 1.0}, net)
    net.set_parameters([np.array([5.0])])
    assert not stopper.update(2, {"val_loss": 2.0}, net)
    assert stopper.update(3, {"val_loss": 3.0}, net)
    assert stopper.stopped and stopper.best_epoch == 1
    np.testing.assert_array_equal(net.get_parameters()[0], [1.0])


def test_early_stopping_max_mode():
    stopper = EarlyStopping(patience=1, monitor="acc", mode="max", restore_best_weights=False)
    net = Network([ConstUnit(np.zeros(1))], [[]])
    assert not stopper.update(1, {"acc": 0.5}, net)
    assert not stopper.update(2, {"acc": 0.7}, net)
    assert stopper.update(3, {"acc": 0.6}, net)
    assert stopper.best == 0.7


def make_blobs(n=40):
    centers = np.array([[2.0, 2.0], [-2.0, -2.0]])
    labels = np.arange(n) % 2
    xs = centers[labels] + 0.5 * np.random.randn(n, 2)
    ys = np.eye(2)[labels]
    return xs, ys


def test_trainer_fits_separable_data(tmp_path, capsys):
    xs, ys = make_blobs()
    net = Network([RectifiedLinear(2, 8), Linear(8, 2), Softmax()])
    trainer = Trainer(
        net, CrossEntropyLoss(), SGDOptimizer(net, lr=0.1), epochs=15, batch_size=4, seed=0
    )
    logger = RunLogger(root=tmp_path, tag="blobs")
    history = trainer.fit(xs, ys, logger=logger)

    assert len(history["loss"]) == 15
    assert history["loss"][-1] < history["loss"][0]
    preds = np.array([np.argmax(trainer.predict(x)) for x in xs])
    assert np.mean(preds == np.argmax(ys, axis=1)) > 0.9

    assert "Epoch 15/15" in capsys.readouterr().out
    assert logger.csv_path.exists()
    assert logger.last_ckpt.exists() and logger.best_ckpt.exists()
    rows = json.loads(logger.json_path.read_text())
    assert [r["epoch"] for r in rows] == list(range(1, 16))

    saved = np.load(logger.last_ckpt)
    np.testing.assert_array_equal(saved["p1"], net.get_parameters()[0])


def test_trainer_early_stopping_with_validation():
    xs, ys = make_blobs(20)
    net = Network([Linear(2, 2), Softmax()])
    # lr = 0 never improves, so patience runs out
    trainer = Trainer(net, CrossEntropyLoss(), SGDOptimizer(net, lr=0.0), epochs=50, verbose=0)
    history = trainer.fit(xs, ys, xs_val=xs, ys_val=ys, patience=3)
    assert len(history["val_loss"]) == 4


def test_run_logger_plot_loss(tmp_path):
    logger = RunLogger(root=tmp_path, tag="plot")
    path = logger.plot_loss({"loss": [1.0, 0.5, 0.25], "val_loss": [1.1, 0.7, 0.4]}, tag="plot")
    assert path.endswith("loss_curve_plot_epochs_3.png")
    assert (logger.dir / "plots" / "loss_curve_plot_epochs_3.png").exists()


def test_early_stopping_watches_loss_without_validation():
    stopper = EarlyStopping(patience=1)
    net = Network([ConstUnit(np.zeros(1))], [[]])
    assert not stopper.update(1, {"loss": 1.0}, net)
    assert stopper.monitor == "loss"
    assert stopper.update(2, {"loss": 1.5}, net)


def test_early_stopping_missing_metric():
    stopper = EarlyStopping(monitor="val_loss")
    net = Network([ConstUnit(np.zeros(1))], [[]])
    with pytest.raises(ValueError, match="val_loss"):
        stopper.update(1, {"loss": 1.0}, net)
    with pytest.raises(ValueError):
        EarlyStopping(mode="lowest")


def test_trainer_early_stopping_without_validation():
    xs, ys = make_blobs(20)
    net = Network([Linear(2, 2), Softmax()])
    trainer = Trainer(net, CrossEntropyLoss(), SGDOptimizer(net, lr=0.0), epochs=50, verbose=0)
    history = trainer.fit(xs, ys, early_stopping={"patience": 1})
    assert len(history["loss"]) == 2
    assert "val_loss" not in history
