# plateformes/models/__init__.py

from .balance_movement import BalanceMovement
from .plateforme import BalanceType, Plateforme

__all__ = [
    "BalanceMovement",
    "BalanceType",
    "Plateforme",
]
