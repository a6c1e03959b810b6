import numpy as np
import pytest


def numeric_gradient(f, x, h=1e-6):
    """Central finite differences of the scalar function f at array x."""
    x = np.array(x, dtype=float)
    grad = np.zeros_like(x)
    for idx in np.ndindex(x.shape):
        orig = x[idx]
        x[idx] = orig + h
        f_plus = f(x)
        x[idx] = orig - h
        f_minus = f(x)
        x[idx] = orig
        grad[idx] = (f_plus - f_minus) / (2 * h)
    return grad


@pytest.fixture
def num_grad():
    return numeric_gradient


@pytest.fixture(autouse=True)
def seeded():
    np.random.seed(1234)
