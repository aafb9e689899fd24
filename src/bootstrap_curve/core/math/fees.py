"""
FeeEngine — Комиссия на вывод в basis points

fee_amount = bonding_amount * fee_bps / 10000 (усечение)

- bonding_amount * fee_bps < 10000 → fee_amount == 0 (dust-исключение, не ошибка)
- fee_bps == 10000 → effective_amount == 0: позиция изымается без ошибки

Комиссия применяется к claim-токенам до quote_remove. Собранная комиссия
никуда не переводится: она остаётся невыкупленной виртуальной ликвидностью.
"""

from typing import NamedTuple

from bootstrap_curve.core.domain.units import BPS_DENOMINATOR, BondingAmount, validate_amount
from bootstrap_curve.core.errors import ConfigurationError
from bootstrap_curve.core.math.numerical_safeguards import mul_div


class FeeBreakdown(NamedTuple):
    """Разложение суммы на эффективную часть и комиссию."""

    effective_amount: BondingAmount
    fee_amount: BondingAmount


def validate_fee_bps(fee_bps: int) -> None:
    """
    Raises:
        ConfigurationError: Если fee_bps не int или вне [0, 10000]
    """
    if isinstance(fee_bps, bool) or not isinstance(fee_bps, int):
        raise ConfigurationError(f"fee_bps must be an integer, got {fee_bps!r}")
    if not 0 <= fee_bps <= BPS_DENOMINATOR:
        raise ConfigurationError(f"fee_bps must be in [0, {BPS_DENOMINATOR}], got {fee_bps}")


def apply_fee(bonding_amount: BondingAmount, fee_bps: int) -> FeeBreakdown:
    """
    Применение комиссии к сумме claim-токенов.

    Args:
        bonding_amount: сумма claim-токенов (>= 0)
        fee_bps: комиссия в basis points [0, 10000]

    Returns:
        FeeBreakdown(effective_amount, fee_amount), effective + fee == bonding_amount

    Examples:
        >>> apply_fee(1000, 250)
        FeeBreakdown(effective_amount=975, fee_amount=25)
        >>> apply_fee(3, 100)
        FeeBreakdown(effective_amount=3, fee_amount=0)
    """
    validate_amount(bonding_amount, "bonding amount")
    validate_fee_bps(fee_bps)

    fee_amount = mul_div(bonding_amount, fee_bps, BPS_DENOMINATOR)
    return FeeBreakdown(
        effective_amount=BondingAmount(bonding_amount - fee_amount),
        fee_amount=BondingAmount(fee_amount),
    )
