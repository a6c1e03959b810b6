from .layers import Layer, ConstUnit, Linear, RectifiedLinear, Softmax, Sum
from .network import (
    Network,
    EvaluationContext,
    allocate,
    evaluate,
    gradient,
    get_parameters,
    set_parameters,
)
from .helpers.errors import GraphnetError, ValidationError, ShapeMismatchError
from .helpers.Backend import backend
from .Trainer import Trainer

__all__ = [
    "Layer",
    "ConstUnit",
    "Linear",
    "RectifiedLinear",
    "Softmax",
    "Sum",
    "Network",
    "EvaluationContext",
    "allocate",
    "evaluate",
    "gradient",
    "get_parameters",
    "set_parameters",
    "GraphnetError",
    "ValidationError",
    "ShapeMismatchError",
    "backend",
    "Trainer",
]
