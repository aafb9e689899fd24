"""
QuoteEngine — Чистые функции котирования виртуальной пары

Функции никогда не мутируют состояние: на одинаковых (state, amount)
результат бит-в-бит одинаков.

ФОРМУЛЫ:
    quote_add:    newX = x + in;  newY = K / (newX + α) - β;  out = max(y - newY, 0)
    quote_remove: newY = y + b;   newX = K / (newY + β) - α;  out = max(x - newX, 0)

Политика округления: деление усекается, поэтому произведение (x+α)(y+β)
после сделки никогда не превышает K. Отклонение выхода от точного
рационального решения меньше одной единицы, а круговая сделка
add → remove никогда не возвращает больше внесённого.
"""

from typing import NamedTuple

from bootstrap_curve.core.domain.curve_state import VirtualPairState
from bootstrap_curve.core.domain.units import (
    VirtualBonding,
    VirtualInput,
    validate_amount,
)
from bootstrap_curve.core.errors import CurveArithmeticError
from bootstrap_curve.core.math.numerical_safeguards import clamp_non_negative, div_trunc


class AddQuote(NamedTuple):
    """Результат quote_add вместе с новым положением пары."""

    bonding_out: VirtualBonding
    new_x: int
    new_y: int
    divisor: int


class RemoveQuote(NamedTuple):
    """Результат quote_remove вместе с новым положением пары."""

    input_out: VirtualInput
    new_x: int
    new_y: int
    divisor: int


def solve_add(state: VirtualPairState, input_amount: VirtualInput) -> AddQuote:
    """
    Котировка добавления principal с решением для новых leg'ов.

    new_y — это y после сделки (y - bonding_out), а не «сырое» решение кривой:
    при нулевом клампе claim leg не двигается.

    Raises:
        CurveArithmeticError: Если решение кривой даёт newY < 0 (кривая исчерпана)
    """
    validate_amount(input_amount, "input amount")
    if input_amount == 0 or not state.is_configured:
        return AddQuote(VirtualBonding(0), state.x, state.y, 0)

    new_x = state.x + input_amount
    divisor = new_x + state.alpha
    solved_y = div_trunc(state.k, divisor) - state.beta
    if solved_y < 0:
        raise CurveArithmeticError(
            f"curve exhausted: adding {input_amount} drives claim leg to {solved_y}"
        )

    bonding_out = clamp_non_negative(state.y - solved_y)
    return AddQuote(VirtualBonding(bonding_out), new_x, state.y - bonding_out, divisor)


def solve_remove(state: VirtualPairState, bonding_amount: VirtualBonding) -> RemoveQuote:
    """
    Котировка возврата claim-токенов с решением для новых leg'ов.

    При x == 0 (нулевой seed, principal ещё не внесён) выход равен нулю,
    а пара не двигается: K остаётся точным на начальной точке.

    Raises:
        CurveArithmeticError: Если решение кривой даёт newX < 0 при x > 0
    """
    validate_amount(bonding_amount, "bonding amount")
    if bonding_amount == 0 or not state.is_configured or state.x == 0:
        return RemoveQuote(VirtualInput(0), state.x, state.y, 0)

    new_y = state.y + bonding_amount
    divisor = new_y + state.beta
    solved_x = div_trunc(state.k, divisor) - state.alpha
    if solved_x < 0:
        raise CurveArithmeticError(
            f"redemption of {bonding_amount} exceeds curve reserves (x would be {solved_x})"
        )

    input_out = clamp_non_negative(state.x - solved_x)
    return RemoveQuote(VirtualInput(input_out), state.x - input_out, new_y, divisor)


def quote_add(state: VirtualPairState, input_amount: VirtualInput) -> VirtualBonding:
    """
    Сколько claim units выйдет за input_amount principal units.

    Нулевой вход → нулевой выход.
    """
    return solve_add(state, input_amount).bonding_out


def quote_remove(state: VirtualPairState, bonding_amount: VirtualBonding) -> VirtualInput:
    """
    Сколько principal units вернётся за bonding_amount claim units.

    Нулевой вход → нулевой выход; при x == 0 — всегда ноль.
    """
    return solve_remove(state, bonding_amount).input_out
