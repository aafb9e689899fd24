"""Общие fixtures."""

import pytest

from bootstrap_curve.core.math.parameter_deriver import initial_state

from tests.factories import AVERAGE_PRICE, FUNDING_GOAL, build_harness


@pytest.fixture
def harness():
    """Движок со сценарием A, без комиссии."""
    return build_harness()


@pytest.fixture
def unconfigured_harness():
    """Движок до set_goals."""
    return build_harness(funding_goal=None)


@pytest.fixture
def scenario_state():
    """Начальное состояние пары для сценария A."""
    return initial_state(FUNDING_GOAL, AVERAGE_PRICE)
