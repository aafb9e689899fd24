"""
Core math modules

Целочисленные примитивы, вывод параметров, котирование и комиссии.
"""

# Numerical Safeguards
from bootstrap_curve.core.math.numerical_safeguards import (
    clamp_non_negative,
    div_trunc,
    is_strictly_between,
    mul_div,
    wad_div,
)

# Parameter derivation
from bootstrap_curve.core.math.parameter_deriver import (
    CurveParameters,
    derive,
    initial_state,
    marginal_price_at,
    validate_goals,
)

# Quotes
from bootstrap_curve.core.math.quotes import (
    AddQuote,
    RemoveQuote,
    quote_add,
    quote_remove,
    solve_add,
    solve_remove,
)

# Fees
from bootstrap_curve.core.math.fees import (
    FeeBreakdown,
    apply_fee,
    validate_fee_bps,
)

__all__ = [
    # Numerical Safeguards
    "clamp_non_negative",
    "div_trunc",
    "is_strictly_between",
    "mul_div",
    "wad_div",
    # Parameter derivation
    "CurveParameters",
    "derive",
    "initial_state",
    "marginal_price_at",
    "validate_goals",
    # Quotes
    "AddQuote",
    "RemoveQuote",
    "quote_add",
    "quote_remove",
    "solve_add",
    "solve_remove",
    # Fees
    "FeeBreakdown",
    "apply_fee",
    "validate_fee_bps",
]
