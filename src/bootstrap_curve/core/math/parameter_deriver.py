"""
ParameterDeriver — Вывод параметров кривой из экономических целей

Кривая: (x + α)(y + β) = K, маржинальная цена claim-токена
    price(x) = (x + α) / (y + β) = (x + α)² / K

Два ограничения (нулевой seed, x₀ = 0):
1. Терминальная цена при x = G равна референсной цене единицы (WAD)
2. Средняя цена выпуска на траектории [0, G] равна P (desired_average_price)

ФОРМУЛЫ (β = α из ограничения 1):
    tokens(0 → G) = G · (G + α) / α
    avg_price     = G / tokens = α / (G + α) = P
    α  = P · G / (1 - P)
    y₀ = (G + α)² / α - β
    K  = α · (y₀ + β)

Начальная маржинальная цена: α² / K ≈ P².
"""

from typing import NamedTuple

from bootstrap_curve.core.domain.configs import (
    MAX_DESIRED_AVERAGE_PRICE,
    MIN_DESIRED_AVERAGE_PRICE,
)
from bootstrap_curve.core.domain.curve_state import VirtualPairState
from bootstrap_curve.core.domain.units import WAD, InputAmount, Price, VirtualBonding, VirtualInput
from bootstrap_curve.core.errors import ConfigurationError
from bootstrap_curve.core.math.numerical_safeguards import div_trunc, is_strictly_between, mul_div


class CurveParameters(NamedTuple):
    """Результат вывода параметров."""

    alpha: int
    beta: int
    k: int
    initial_y: int


def validate_goals(funding_goal: int, desired_average_price: int) -> None:
    """
    Проверка предусловий вывода.

    Raises:
        ConfigurationError: Если funding_goal <= 0 или цена вне (floor, WAD)
    """
    for name, value in (
        ("funding_goal", funding_goal),
        ("desired_average_price", desired_average_price),
    ):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"{name} must be an integer, got {value!r}")

    if funding_goal <= 0:
        raise ConfigurationError(f"funding_goal must be positive, got {funding_goal}")

    if not is_strictly_between(
        desired_average_price, MIN_DESIRED_AVERAGE_PRICE, MAX_DESIRED_AVERAGE_PRICE
    ):
        raise ConfigurationError(
            f"desired_average_price must be in ({MIN_DESIRED_AVERAGE_PRICE}, "
            f"{MAX_DESIRED_AVERAGE_PRICE}), got {desired_average_price}"
        )


def derive(funding_goal: InputAmount, desired_average_price: Price) -> CurveParameters:
    """
    Вывод (α, β, K) из funding goal и желаемой средней цены.

    Args:
        funding_goal: principal при насыщении кривой (> 0)
        desired_average_price: средняя цена выпуска, WAD (floor < P < WAD)

    Returns:
        CurveParameters(alpha, beta, k, initial_y)

    Raises:
        ConfigurationError: Невалидные цели или неположительные α/β/K

    Examples:
        >>> params = derive(1_000_000 * 10**18, 9 * 10**17)
        >>> params.alpha == params.beta == 9_000_000 * 10**18
        True
    """
    validate_goals(funding_goal, desired_average_price)

    alpha = mul_div(desired_average_price, funding_goal, WAD - desired_average_price)
    beta = alpha
    if alpha <= 0 or beta <= 0:
        raise ConfigurationError(
            f"derived offsets must be positive: alpha={alpha}, beta={beta} "
            f"(funding_goal={funding_goal} too small)"
        )

    terminal = funding_goal + alpha
    initial_y = div_trunc(terminal * terminal, alpha) - beta
    if initial_y <= 0:
        raise ConfigurationError(f"derived initial claim leg must be positive, got {initial_y}")

    # K фиксируется точно на начальной точке: α·(y₀+β)
    k = alpha * (initial_y + beta)

    return CurveParameters(alpha=alpha, beta=beta, k=k, initial_y=initial_y)


def initial_state(funding_goal: InputAmount, desired_average_price: Price) -> VirtualPairState:
    """
    Новое состояние кривой с нулевым seed: x = 0, y = y₀.

    Raises:
        ConfigurationError: см. derive
    """
    params = derive(funding_goal, desired_average_price)
    return VirtualPairState(
        x=VirtualInput(0),
        y=VirtualBonding(params.initial_y),
        alpha=params.alpha,
        beta=params.beta,
        k=params.k,
        initial_y=VirtualBonding(params.initial_y),
        max_divisor=0,
    )


def marginal_price_at(state: VirtualPairState, x: int) -> Price:
    """
    Маржинальная цена при principal leg = x: (x+α)² · WAD / K.

    Возвращает 0 для ненастроенной кривой.
    """
    if not state.is_configured:
        return Price(0)
    shifted = x + state.alpha
    return Price(mul_div(shifted * shifted, WAD, state.k))
