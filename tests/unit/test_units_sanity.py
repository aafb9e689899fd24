"""
Тесты для модуля Units

Проверяет:
- Валидацию денежных сумм (int, неотрицательность, bool)
- Конвертеры денежные ↔ виртуальные единицы
"""

import pytest

from bootstrap_curve.core.domain.units import (
    BPS_DENOMINATOR,
    WAD,
    bonding_to_virtual,
    input_to_virtual,
    validate_amount,
    validate_positive_amount,
    virtual_to_bonding,
    virtual_to_input,
)
from bootstrap_curve.core.errors import InvalidAmountError


class TestConstants:
    def test_wad(self):
        assert WAD == 10**18

    def test_bps_denominator(self):
        assert BPS_DENOMINATOR == 10_000


class TestValidateAmount:
    """Тесты validate_amount / validate_positive_amount."""

    def test_accepts_zero_and_positive(self):
        assert validate_amount(0, "a") == 0
        assert validate_amount(10**24, "a") == 10**24

    def test_rejects_negative(self):
        with pytest.raises(InvalidAmountError, match="non-negative"):
            validate_amount(-1, "a")

    def test_rejects_float(self):
        with pytest.raises(InvalidAmountError, match="integer"):
            validate_amount(1.0, "a")

    def test_rejects_bool(self):
        """bool — подкласс int, но суммой не является."""
        with pytest.raises(InvalidAmountError):
            validate_amount(True, "a")

    def test_positive_rejects_zero(self):
        with pytest.raises(InvalidAmountError, match="positive"):
            validate_positive_amount(0, "a")

    def test_invalid_amount_is_value_error(self):
        with pytest.raises(ValueError):
            validate_amount(-5, "a")


class TestConverters:
    def test_input_virtual_identity_scale(self):
        amount = 123 * WAD
        assert virtual_to_input(input_to_virtual(amount)) == amount

    def test_bonding_virtual_identity_scale(self):
        amount = 7 * WAD + 3
        assert virtual_to_bonding(bonding_to_virtual(amount)) == amount

    def test_converters_reject_negative(self):
        with pytest.raises(InvalidAmountError):
            input_to_virtual(-1)
        with pytest.raises(InvalidAmountError):
            virtual_to_bonding(-1)
