from .Network import Network, get_parameters, set_parameters
from .EvaluationContext import EvaluationContext, allocate, evaluate
from .Backprop import gradient

__all__ = [
    "Network",
    "EvaluationContext",
    "allocate",
    "evaluate",
    "gradient",
    "get_parameters",
    "set_parameters",
]
