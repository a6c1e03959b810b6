from .SGDOptimizer import SGDOptimizer
from .AdamWOptimizer import AdamWOptimizer

__all__ = ["SGDOptimizer", "AdamWOptimizer"]
