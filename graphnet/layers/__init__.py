from .Layer import Layer
from .ConstUnit import ConstUnit
from .Linear import Linear
from .RectifiedLinear import RectifiedLinear
from .Softmax import Softmax
from .Sum import Sum

__all__ = [
    "Layer",
    "ConstUnit",
    "Linear",
    "RectifiedLinear",
    "Softmax",
    "Sum",
]
