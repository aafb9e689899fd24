"""
Тесты для модуля Numerical Safeguards (целочисленная арифметика)

Проверяет:
1. Усекающее деление и защиту от деления на ноль
2. mul_div / fixed-point операции
3. Кламп и проверку открытого интервала
"""

import pytest

from bootstrap_curve.core.domain.units import WAD
from bootstrap_curve.core.errors import CurveArithmeticError
from bootstrap_curve.core.math.numerical_safeguards import (
    clamp_non_negative,
    div_trunc,
    is_strictly_between,
    mul_div,
    wad_div,
)

# =============================================================================
# ТЕСТЫ УСЕКАЮЩЕГО ДЕЛЕНИЯ
# =============================================================================


class TestDivTrunc:
    """Тесты div_trunc."""

    def test_exact_division(self):
        assert div_trunc(10, 5) == 2

    def test_truncates_positive(self):
        """7 / 2 → 3 (не 4)."""
        assert div_trunc(7, 2) == 3

    def test_truncates_toward_zero_for_negative(self):
        """Python // округляет к -inf, div_trunc — к нулю."""
        assert -7 // 2 == -4
        assert div_trunc(-7, 2) == -3
        assert div_trunc(7, -2) == -3
        assert div_trunc(-7, -2) == 3

    def test_zero_denominator_raises(self):
        with pytest.raises(CurveArithmeticError, match="division by zero"):
            div_trunc(1, 0)

    def test_curve_arithmetic_error_is_arithmetic_error(self):
        """CurveArithmeticError ловится как стандартный ArithmeticError."""
        with pytest.raises(ArithmeticError):
            div_trunc(1, 0)

    def test_large_operands_exact(self):
        """Никакой потери точности на 10**50."""
        assert div_trunc(10**50 + 1, 10**25) == 10**25


class TestMulDiv:
    """Тесты mul_div и WAD-операций."""

    def test_mul_div_keeps_intermediate_precision(self):
        assert mul_div(10**30, 10**30, 10**40) == 10**20

    def test_mul_div_truncates(self):
        assert mul_div(2, 5, 3) == 3

    def test_wad_div(self):
        assert wad_div(1, 4) == WAD // 4

    def test_wad_div_zero_raises(self):
        with pytest.raises(CurveArithmeticError):
            wad_div(1, 0)


# =============================================================================
# ТЕСТЫ УТИЛИТ И ВАЛИДАЦИИ
# =============================================================================


class TestClamp:
    def test_clamp_non_negative(self):
        assert clamp_non_negative(-5) == 0
        assert clamp_non_negative(0) == 0
        assert clamp_non_negative(5) == 5


class TestValidation:
    def test_strictly_between(self):
        assert is_strictly_between(5, 0, 10)
        assert not is_strictly_between(0, 0, 10)
        assert not is_strictly_between(10, 0, 10)

