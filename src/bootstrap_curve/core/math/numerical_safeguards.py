"""
Numerical Safeguards — Integer Math Primitives

Модуль обеспечивает детерминированную целочисленную арифметику кривой:
- Усекающее деление (toward zero) с защитой от деления на ноль
- mul_div без промежуточной потери точности (Python int не переполняется)
- Fixed-point операции в масштабе WAD
- Проверка открытого интервала для параметров целей

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на ноль никогда не происходит молча (ZeroDivisionError → CurveArithmeticError)
2. Усечение всегда toward zero (для неотрицательных операндов == floor)
3. Никаких float в расчётах кривой
4. Все операции детерминированы и воспроизводимы
"""

from bootstrap_curve.core.domain.units import WAD
from bootstrap_curve.core.errors import CurveArithmeticError

# =============================================================================
# УСЕКАЮЩЕЕ ДЕЛЕНИЕ
# =============================================================================


def div_trunc(numerator: int, denominator: int) -> int:
    """
    Целочисленное деление с усечением toward zero.

    Python `//` округляет к -inf, поэтому для отрицательных операндов
    результат корректируется.

    Raises:
        CurveArithmeticError: Если denominator == 0

    Examples:
        >>> div_trunc(7, 2)
        3
        >>> div_trunc(-7, 2)
        -3
    """
    if denominator == 0:
        raise CurveArithmeticError(f"division by zero: {numerator} / 0")

    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def mul_div(a: int, b: int, denominator: int) -> int:
    """
    (a * b) / denominator с усечением.

    Произведение вычисляется точно, усекается только итог.
    """
    return div_trunc(a * b, denominator)


def wad_div(a: int, b: int) -> int:
    """Fixed-point деление: a * WAD / b (усечение)."""
    return mul_div(a, WAD, b)


# =============================================================================
# УТИЛИТЫ
# =============================================================================


def clamp_non_negative(value: int) -> int:
    """max(value, 0)."""
    return value if value > 0 else 0


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_strictly_between(value: int, lower: int, upper: int) -> bool:
    """lower < value < upper."""
    return lower < value < upper
