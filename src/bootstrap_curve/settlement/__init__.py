"""Settlement — оркестрация add/remove, допуск и авторизация."""

from .admission import AdmissionGate, AdmissionResult, EngineStatus
from .authorization import OwnerAuthorization
from .engine import RemovalPlan, SettlementEngine

__all__ = [
    "AdmissionGate",
    "AdmissionResult",
    "EngineStatus",
    "OwnerAuthorization",
    "RemovalPlan",
    "SettlementEngine",
]
