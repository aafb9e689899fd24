"""
bootstrap_curve — bootstrap bonding-curve exchange.

Пользователь вносит principal и получает claim-токен по цене
алгебраической кривой (x+α)(y+β)=K, позже выкупает его за долю principal.
При эмиссии claim-токена в обход кривой выкуп переключается
в пропорциональный режим.
"""

from bootstrap_curve.core.errors import (
    AuthorizationError,
    BondingCurveError,
    ConfigurationError,
    CurveArithmeticError,
    InsufficientBalanceError,
    InvalidAmountError,
    SlippageError,
    StateError,
)
from bootstrap_curve.settlement.engine import SettlementEngine

__version__ = "0.1.0"

__all__ = [
    "SettlementEngine",
    "BondingCurveError",
    "ConfigurationError",
    "StateError",
    "CurveArithmeticError",
    "SlippageError",
    "AuthorizationError",
    "InsufficientBalanceError",
    "InvalidAmountError",
]
