"""
Units — Централизованный модуль единиц bonding curve

Единственный допустимый способ преобразований между:
- InputAmount (principal, денежная сумма, 18 decimals)
- BondingAmount (claim-токен, денежная сумма, 18 decimals)
- VirtualInput / VirtualBonding (внутренние leg'и виртуальной пары)
- Price (fixed-point, WAD = 10**18 — референсная цена единицы)

ЗАПРЕЩЕНО смешивать денежные и виртуальные единицы без явного
конвертера из этого модуля. Масштаб сейчас совпадает (1:1), но
конвертеры — единственное место, где это предположение зафиксировано.
"""

from typing import Final, NewType

from bootstrap_curve.core.errors import InvalidAmountError

# =============================================================================
# ТИПЫ
# =============================================================================

InputAmount = NewType("InputAmount", int)
BondingAmount = NewType("BondingAmount", int)
VirtualInput = NewType("VirtualInput", int)
VirtualBonding = NewType("VirtualBonding", int)
Price = NewType("Price", int)


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Fixed-point единица: 1.0 == WAD
WAD: Final[int] = 10**18

# Знаменатель basis points: 10000 bps == 100%
BPS_DENOMINATOR: Final[int] = 10_000

# Масштаб virtual units относительно денежных сумм
VIRTUAL_SCALE: Final[int] = 1


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_amount(value: int, name: str) -> int:
    """
    Проверка, что сумма — неотрицательное целое число.

    bool отвергается явно (в Python bool — подкласс int).

    Raises:
        InvalidAmountError: Если value не int или отрицательное
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmountError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidAmountError(f"{name} must be non-negative, got {value}")
    return value


def validate_positive_amount(value: int, name: str) -> int:
    """
    Проверка, что сумма — строго положительное целое число.

    Raises:
        InvalidAmountError: Если value не int или value <= 0
    """
    validate_amount(value, name)
    if value == 0:
        raise InvalidAmountError(f"{name} must be positive, got 0")
    return value


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def input_to_virtual(amount: InputAmount) -> VirtualInput:
    """Principal (денежная сумма) → virtual x units."""
    validate_amount(amount, "input amount")
    return VirtualInput(amount * VIRTUAL_SCALE)


def virtual_to_input(units: VirtualInput) -> InputAmount:
    """
    Virtual x units → principal.

    Деление усекается: вызывающий никогда не получает больше точного значения.
    """
    validate_amount(units, "virtual input")
    return InputAmount(units // VIRTUAL_SCALE)


def bonding_to_virtual(amount: BondingAmount) -> VirtualBonding:
    """Claim-токены (денежная сумма) → virtual y units."""
    validate_amount(amount, "bonding amount")
    return VirtualBonding(amount * VIRTUAL_SCALE)


def virtual_to_bonding(units: VirtualBonding) -> BondingAmount:
    """Virtual y units → claim-токены (усечение)."""
    validate_amount(units, "virtual bonding")
    return BondingAmount(units // VIRTUAL_SCALE)
