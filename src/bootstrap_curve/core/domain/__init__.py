"""
Domain models and value objects.

Contains units, virtual pair state, supply tracker and configurations.
"""

from bootstrap_curve.core.domain.configs import (
    MAX_DESIRED_AVERAGE_PRICE,
    MIN_DESIRED_AVERAGE_PRICE,
    EngineSettings,
    FeeConfig,
    GoalConfig,
)
from bootstrap_curve.core.domain.curve_state import (
    BondingSupplyTracker,
    CurveSnapshot,
    VirtualPair,
    VirtualPairState,
)
from bootstrap_curve.core.domain.units import (
    BPS_DENOMINATOR,
    WAD,
    BondingAmount,
    InputAmount,
    Price,
    VirtualBonding,
    VirtualInput,
    bonding_to_virtual,
    input_to_virtual,
    validate_amount,
    validate_positive_amount,
    virtual_to_bonding,
    virtual_to_input,
)

__all__ = [
    # Units module
    "WAD",
    "BPS_DENOMINATOR",
    "InputAmount",
    "BondingAmount",
    "VirtualInput",
    "VirtualBonding",
    "Price",
    "input_to_virtual",
    "virtual_to_input",
    "bonding_to_virtual",
    "virtual_to_bonding",
    "validate_amount",
    "validate_positive_amount",
    # Curve state
    "VirtualPair",
    "VirtualPairState",
    "BondingSupplyTracker",
    "CurveSnapshot",
    # Configs
    "MIN_DESIRED_AVERAGE_PRICE",
    "MAX_DESIRED_AVERAGE_PRICE",
    "GoalConfig",
    "FeeConfig",
    "EngineSettings",
]
