"""
Тесты для Pydantic моделей состояния и конфигураций

Проверяет:
- VirtualPairState: immutability, with_legs, допуск инварианта
- BondingSupplyTracker: mint/burn с насыщением в нуле
- GoalConfig / FeeConfig / EngineSettings: границы полей
"""

import pytest
from pydantic import ValidationError

from bootstrap_curve.core.domain import (
    MIN_DESIRED_AVERAGE_PRICE,
    BondingSupplyTracker,
    EngineSettings,
    FeeConfig,
    GoalConfig,
    VirtualPairState,
)
from bootstrap_curve.core.domain.units import WAD
from bootstrap_curve.core.errors import CurveArithmeticError


class TestVirtualPairState:
    def test_empty(self):
        state = VirtualPairState.empty()

        assert not state.is_configured
        assert state.as_pair() == (0, 0, 0)
        state.check_invariant()

    def test_frozen(self, scenario_state):
        with pytest.raises(ValidationError):
            scenario_state.x = 1

    def test_negative_field_rejected(self):
        with pytest.raises(ValidationError):
            VirtualPairState(x=-1)

    def test_with_legs_returns_new_instance(self, scenario_state):
        moved = scenario_state.with_legs(10, scenario_state.y - 5, divisor=1234)

        assert moved is not scenario_state
        assert moved.x == 10
        assert moved.max_divisor == 1234
        assert scenario_state.x == 0

    def test_with_legs_keeps_largest_divisor(self, scenario_state):
        moved = scenario_state.with_legs(0, scenario_state.y, divisor=50)
        moved = moved.with_legs(0, scenario_state.y, divisor=10)

        assert moved.max_divisor == 50

    def test_with_legs_rejects_negative(self, scenario_state):
        with pytest.raises(CurveArithmeticError, match="non-negative"):
            scenario_state.with_legs(-1, scenario_state.y, divisor=1)

    def test_initial_point_exact(self, scenario_state):
        assert scenario_state.invariant_deficit() == 0
        assert scenario_state.is_within_tolerance()

    def test_product_above_k_violates(self, scenario_state):
        """Произведение больше K: пул отдал больше, чем позволяет кривая."""
        broken = scenario_state.with_legs(1, scenario_state.y, divisor=0)

        assert broken.invariant_deficit() < 0
        with pytest.raises(CurveArithmeticError, match="invariant violated"):
            broken.check_invariant()

    def test_deficit_beyond_tolerance_violates(self, scenario_state):
        broken = scenario_state.with_legs(0, scenario_state.y - 1, divisor=1)

        assert broken.invariant_deficit() == scenario_state.alpha
        assert not broken.is_within_tolerance()


class TestBondingSupplyTracker:
    def test_mint_and_burn(self):
        tracker = BondingSupplyTracker().record_mint(100).record_burn(40)

        assert tracker.last_known_legitimate_supply == 60

    def test_burn_saturates_at_zero(self):
        assert BondingSupplyTracker().record_mint(5).record_burn(50).last_known_legitimate_supply == 0


class TestConfigs:
    def test_goal_config_bounds(self):
        GoalConfig(funding_goal=1, desired_average_price=MIN_DESIRED_AVERAGE_PRICE + 1)

        with pytest.raises(ValidationError):
            GoalConfig(funding_goal=1, desired_average_price=MIN_DESIRED_AVERAGE_PRICE)
        with pytest.raises(ValidationError):
            GoalConfig(funding_goal=1, desired_average_price=WAD)
        with pytest.raises(ValidationError):
            GoalConfig(funding_goal=0, desired_average_price=9 * 10**17)

    def test_fee_config_bounds(self):
        assert FeeConfig().withdrawal_fee_bps == 0
        FeeConfig(withdrawal_fee_bps=10_000)

        with pytest.raises(ValidationError):
            FeeConfig(withdrawal_fee_bps=10_001)

    def test_engine_settings_parses_string_big_ints(self):
        settings = EngineSettings(owner="o", funding_goal="1000", desired_average_price="900")

        assert settings.funding_goal == 1000
        assert settings.desired_average_price == 900

    def test_engine_settings_rejects_non_decimal_string(self):
        with pytest.raises(ValidationError):
            EngineSettings(owner="o", funding_goal="1e24", desired_average_price="900")

    def test_has_goals(self):
        assert not EngineSettings(owner="o").has_goals
        assert not EngineSettings(owner="o", funding_goal=1).has_goals
