from .CrossEntropyLoss import CrossEntropyLoss
from .MSELoss import MSELoss

__all__ = ["CrossEntropyLoss", "MSELoss"]
