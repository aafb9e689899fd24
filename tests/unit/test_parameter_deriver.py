"""
Тесты для ParameterDeriver

Покрытие:
- Сценарий A: (G = 1_000_000e18, P = 0.9e18) → α = β = 9_000_000e18
- K фиксирует начальную точку точно
- Начальная цена ≈ P², терминальная цена >= WAD
- Средняя цена на полной траектории [0, G] равна P
- ConfigurationError на невалидных целях
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from bootstrap_curve.core.domain.configs import (
    MAX_DESIRED_AVERAGE_PRICE,
    MIN_DESIRED_AVERAGE_PRICE,
)
from bootstrap_curve.core.domain.curve_state import VirtualPairState
from bootstrap_curve.core.domain.units import WAD
from bootstrap_curve.core.errors import ConfigurationError
from bootstrap_curve.core.math.parameter_deriver import (
    derive,
    initial_state,
    marginal_price_at,
    validate_goals,
)
from bootstrap_curve.core.math.quotes import quote_add

G = 1_000_000 * WAD
P = 9 * 10**17


class TestScenarioA:
    """Сценарий A: вывод параметров для G = 1_000_000e18, P = 0.9e18."""

    def test_alpha_beta(self):
        params = derive(G, P)

        assert params.alpha == 9_000_000 * WAD
        assert params.beta == params.alpha

    def test_initial_claim_leg(self):
        params = derive(G, P)

        # (G+α)²/α - β = 1e50 / 9e24 - 9e24
        assert params.initial_y == 2_111_111_111_111_111_111_111_111

    def test_k_pins_initial_point_exactly(self):
        params = derive(G, P)

        assert params.k == params.alpha * (params.initial_y + params.beta)
        assert params.k == 10**50 - 10**24

    def test_initial_state(self, scenario_state):
        assert scenario_state.x == 0
        assert scenario_state.y == scenario_state.initial_y
        assert scenario_state.max_divisor == 0
        assert scenario_state.invariant_deficit() == 0

    def test_marginal_prices(self, scenario_state):
        """Начальная цена P² = 0.81, терминальная == WAD."""
        assert marginal_price_at(scenario_state, 0) == 81 * 10**16
        assert marginal_price_at(scenario_state, G) == WAD

    def test_average_over_full_trajectory_equals_target(self, scenario_state):
        """Покупка всего G за один add даёт среднюю цену P (± 1 wei)."""
        bonding_out = quote_add(scenario_state, G)

        assert bonding_out == 1_111_111_111_111_111_111_111_112
        average = G * WAD // bonding_out
        assert abs(average - P) <= 1


class TestPriceShape:
    """Форма цены для разных P."""

    @pytest.mark.parametrize("price", [87 * 10**16, 9 * 10**17, 95 * 10**16, 999 * 10**15])
    def test_initial_near_p_squared(self, price):
        state = initial_state(G, price)
        initial = marginal_price_at(state, 0)

        assert initial == pytest.approx(price * price // WAD, rel=1e-9)
        assert initial >= 3 * WAD // 4

    @pytest.mark.parametrize("price", [87 * 10**16, 9 * 10**17, 95 * 10**16, 999 * 10**15])
    def test_final_price_not_below_initial(self, price):
        state = initial_state(G, price)

        assert marginal_price_at(state, G) >= WAD
        assert marginal_price_at(state, G) > marginal_price_at(state, 0)

    def test_marginal_price_unconfigured_is_zero(self):
        assert marginal_price_at(VirtualPairState.empty(), 0) == 0

    @settings(max_examples=200, deadline=None)
    @given(
        funding_goal=st.integers(min_value=10**6, max_value=10**30),
        price=st.integers(
            min_value=MIN_DESIRED_AVERAGE_PRICE + 1, max_value=MAX_DESIRED_AVERAGE_PRICE - 1
        ),
    )
    def test_derivation_properties(self, funding_goal, price):
        """Для любых валидных целей: α, β, y₀ > 0, K точен, цена растёт."""
        params = derive(funding_goal, price)
        state = initial_state(funding_goal, price)

        assert params.alpha > 0
        assert params.beta > 0
        assert params.initial_y > 0
        assert params.k == params.alpha * (params.initial_y + params.beta)
        assert marginal_price_at(state, funding_goal) >= WAD
        assert marginal_price_at(state, 0) < WAD


class TestInvalidGoals:
    """ConfigurationError на невалидных целях."""

    def test_zero_funding_goal(self):
        with pytest.raises(ConfigurationError, match="funding_goal"):
            derive(0, P)

    def test_negative_funding_goal(self):
        with pytest.raises(ConfigurationError, match="funding_goal"):
            derive(-1, P)

    def test_price_at_floor_rejected(self):
        """Нижняя граница исключительная."""
        with pytest.raises(ConfigurationError, match="desired_average_price"):
            derive(G, MIN_DESIRED_AVERAGE_PRICE)

    def test_price_just_above_floor_accepted(self):
        params = derive(G, MIN_DESIRED_AVERAGE_PRICE + 1)
        assert params.alpha > 0

    def test_price_at_wad_rejected(self):
        with pytest.raises(ConfigurationError, match="desired_average_price"):
            derive(G, WAD)

    def test_price_above_wad_rejected(self):
        with pytest.raises(ConfigurationError):
            derive(G, 2 * WAD)

    def test_low_price_rejected(self):
        with pytest.raises(ConfigurationError):
            validate_goals(G, 5 * 10**17)

    def test_non_integer_rejected(self):
        with pytest.raises(ConfigurationError, match="integer"):
            derive(1.5e24, P)
        with pytest.raises(ConfigurationError, match="integer"):
            derive(G, True)
