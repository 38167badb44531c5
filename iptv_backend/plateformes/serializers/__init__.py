from .balance_movement import BalanceMovementSerializer
from .plateforme import (
    BalanceAdjustmentInputSerializer,
    PlateformeSerializer,
    ReconciliationSerializer,
)

__all__ = [
    "BalanceAdjustmentInputSerializer",
    "BalanceMovementSerializer",
    "PlateformeSerializer",
    "ReconciliationSerializer",
]
