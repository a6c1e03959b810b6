# graphnet/helpers/Backend.py
import numpy as np

from .errors import ShapeMismatchError

VERBOSE_STARTUP = False  # set True to report the backend choice on import


class Backend:
    """Backend abstraction over the NumPy array namespace."""
    def __init__(self, default_float=np.float64):
        self.xp = np
        self.default_float = default_float
        if VERBOSE_STARTUP:
            print(f"Using CPU backend (NumPy {np.__version__}), default float {np.dtype(default_float).name}")

    def ensure_array(self, x, dtype=None, copy=False):
        """
        Ensure 'x' is an ndarray.
        Accepts list/tuple/scalars/arrays; returns xp.ndarray.
        """
        if isinstance(x, self.xp.ndarray):
            if dtype is not None and x.dtype != dtype:
                return x.astype(dtype, copy=copy)
            return x.copy() if copy else x
        arr = self.xp.asarray(x)
        if dtype is not None and arr.dtype != dtype:
            arr = arr.astype(dtype, copy=False)
        return arr

    def astype_default(self, x):
        """Cast to default float dtype if needed."""
        if hasattr(x, "dtype") and x.dtype == self.default_float:
            return x
        return self.ensure_array(x, dtype=self.default_float)

    # -------- array creation --------
    def array(self, *args, **kwargs):
        kwargs.setdefault("dtype", self.default_float)
        return self.xp.array(*args, **kwargs)

    def zeros(self, *args, **kwargs):
        kwargs.setdefault("dtype", self.default_float)
        return self.xp.zeros(*args, **kwargs)

    def zeros_like(self, x):
        return self.xp.zeros_like(x)

    # -------- math / linalg (thin wrappers) --------
    def sqrt(self, x):      return self.xp.sqrt(x)
    def maximum(self, a, b):return self.xp.maximum(a, b)
    def sum(self, x, axis=None, keepdims=False):  return self.xp.sum(x, axis=axis, keepdims=keepdims)
    def mean(self, x, axis=None, keepdims=False): return self.xp.mean(x, axis=axis, keepdims=keepdims)
    def max(self, x, axis=None, keepdims=False):  return self.xp.max(x, axis=axis, keepdims=keepdims)
    def exp(self, x):                              return self.xp.exp(x)
    def log(self, x):                              return self.xp.log(x)
    def transpose(self, x, axes=None):            return self.xp.transpose(x, axes)
    def where(self, cond, a, b):                   return self.xp.where(cond, a, b)

    # -------- shape-checked arithmetic --------
    # numpy reports dimension errors as ValueError; re-raise them as ShapeMismatchError
    def matmul(self, a, b):
        try:
            return self.xp.matmul(a, b)
        except ValueError as e:
            raise ShapeMismatchError(f"matmul of shapes {self.xp.shape(a)} and {self.xp.shape(b)}: {e}") from e

    def dot(self, a, b):
        if self.xp.shape(a) != self.xp.shape(b):
            raise ShapeMismatchError(f"dot of shapes {self.xp.shape(a)} and {self.xp.shape(b)}")
        return self.xp.dot(a, b)

    def outer(self, a, b):
        return self.xp.outer(a, b)

    def hstack(self, arrays):
        try:
            return self.xp.column_stack(arrays)
        except ValueError as e:
            raise ShapeMismatchError(f"cannot stack columns: {e}") from e

    def add_into(self, buffer, term):
        """In-place buffer += term; shapes must match exactly (no broadcasting)."""
        term = self.ensure_array(term)
        if buffer.shape != term.shape:
            raise ShapeMismatchError(f"cannot accumulate shape {term.shape} into buffer of shape {buffer.shape}")
        buffer += term
        return buffer

    # -------- randomness --------
    @property
    def random(self):
        return self.xp.random

    def seed(self, seed=42):
        """Seed RNG for reproducibility."""
        self.xp.random.seed(seed)

    # -------- delegate unknown attrs to xp --------
    def __getattr__(self, name):
        return getattr(self.xp, name)


# Global backend instance - can be overridden
backend = Backend()
