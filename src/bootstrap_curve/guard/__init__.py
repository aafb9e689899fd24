"""Guard — защита выкупа от эмиссии claim-токена в обход кривой."""

from .supply_guard import (
    RedemptionMode,
    SupplyAssessment,
    SupplyGuard,
)

__all__ = [
    "RedemptionMode",
    "SupplyAssessment",
    "SupplyGuard",
]
