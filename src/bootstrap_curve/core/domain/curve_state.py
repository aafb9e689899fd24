"""
CurveState — Модели состояния виртуальной пары и эмиссии

Immutable Pydantic модели:
- VirtualPairState: leg'и (x, y), смещения α, β и инвариант K
- BondingSupplyTracker: легитимная эмиссия, выпущенная только через add
- CurveSnapshot: экспортируемый снапшот (contracts/schema/curve_snapshot.json)

Любая мутация создаёт новый экземпляр. Движок держит ссылку на текущий
экземпляр, поэтому неудачный вызов просто не заменяет ссылку.
"""

from typing import NamedTuple

from pydantic import BaseModel, Field

from bootstrap_curve.core.domain.units import BondingAmount, VirtualBonding, VirtualInput
from bootstrap_curve.core.errors import CurveArithmeticError


class VirtualPair(NamedTuple):
    """Публичное представление пары: (x, y, K)."""

    x: int
    y: int
    k: int


# =============================================================================
# VIRTUAL PAIR STATE
# =============================================================================


class VirtualPairState(BaseModel):
    """
    Состояние виртуальной пары bonding curve.

    Инвариант: (x+α)(y+β) == K с точностью до ошибки усечения.
    Все целочисленные деления усекаются, поэтому
    0 <= K - (x+α)(y+β) <= max_divisor, где max_divisor — наибольший
    делитель, использованный с момента последнего set_goals.

    До set_goals все поля равны нулю.
    """

    x: VirtualInput = Field(default=0, ge=0, description="Виртуальный principal leg")
    y: VirtualBonding = Field(default=0, ge=0, description="Виртуальный claim leg")
    alpha: int = Field(default=0, ge=0, description="Смещение principal leg (α)")
    beta: int = Field(default=0, ge=0, description="Смещение claim leg (β)")
    k: int = Field(default=0, ge=0, description="Инвариант (x+α)(y+β)")
    initial_y: VirtualBonding = Field(
        default=0, ge=0, description="y₀ при нулевом seed (x₀ = 0)"
    )
    max_divisor: int = Field(
        default=0, ge=0, description="Наибольший делитель с последнего set_goals"
    )

    model_config = {"frozen": True}

    @classmethod
    def empty(cls) -> "VirtualPairState":
        """Состояние до первого set_goals."""
        return cls()

    @property
    def is_configured(self) -> bool:
        return self.k > 0

    def as_pair(self) -> VirtualPair:
        return VirtualPair(x=self.x, y=self.y, k=self.k)

    def invariant_product(self) -> int:
        """(x+α)(y+β)."""
        return (self.x + self.alpha) * (self.y + self.beta)

    def invariant_deficit(self) -> int:
        """K - (x+α)(y+β); неотрицателен для любого достижимого состояния."""
        return self.k - self.invariant_product()

    def is_within_tolerance(self) -> bool:
        deficit = self.invariant_deficit()
        return 0 <= deficit <= self.max_divisor

    def check_invariant(self) -> None:
        """
        Проверка инварианта с допуском на усечение.

        Raises:
            CurveArithmeticError: Если отклонение вне [0, max_divisor]
        """
        if not self.is_configured:
            return
        if not self.is_within_tolerance():
            raise CurveArithmeticError(
                f"invariant violated: K={self.k}, (x+α)(y+β)={self.invariant_product()}, "
                f"deficit={self.invariant_deficit()}, tolerance={self.max_divisor}"
            )

    def with_legs(self, x: int, y: int, divisor: int) -> "VirtualPairState":
        """
        Новое состояние после сделки.

        Args:
            x: новый principal leg
            y: новый claim leg
            divisor: делитель, использованный в этой мутации

        Returns:
            Новый VirtualPairState (текущий не изменяется)
        """
        if x < 0 or y < 0:
            raise CurveArithmeticError(f"virtual legs must stay non-negative: x={x}, y={y}")
        return self.model_copy(
            update={
                "x": VirtualInput(x),
                "y": VirtualBonding(y),
                "max_divisor": max(self.max_divisor, divisor),
            }
        )


# =============================================================================
# BONDING SUPPLY TRACKER
# =============================================================================


class BondingSupplyTracker(BaseModel):
    """
    Счётчик легитимной эмиссии claim-токена.

    Увеличивается на каждом успешном add, уменьшается на каждом burn при
    remove. total_supply > last_known_legitimate_supply означает эмиссию
    в обход кривой.
    """

    last_known_legitimate_supply: BondingAmount = Field(
        default=0, ge=0, description="Эмиссия, выпущенная только через add"
    )

    model_config = {"frozen": True}

    def record_mint(self, amount: int) -> "BondingSupplyTracker":
        return self.model_copy(
            update={
                "last_known_legitimate_supply": BondingAmount(
                    self.last_known_legitimate_supply + amount
                )
            }
        )

    def record_burn(self, amount: int) -> "BondingSupplyTracker":
        """Уменьшение с насыщением в нуле."""
        remaining = max(self.last_known_legitimate_supply - amount, 0)
        return self.model_copy(
            update={"last_known_legitimate_supply": BondingAmount(remaining)}
        )


# =============================================================================
# SNAPSHOT
# =============================================================================


class CurveSnapshot(BaseModel):
    """
    Экспортируемый снапшот движка.

    Полная совместимость с JSON Schema (contracts/schema/curve_snapshot.json).
    """

    schema_version: str = Field(default="1", pattern="^1$", description="Версия схемы")

    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    alpha: int = Field(..., ge=0)
    beta: int = Field(..., ge=0)
    k: int = Field(..., ge=0)

    funding_goal: int | None = Field(None, gt=0, description="Цель сбора (nullable)")
    desired_average_price: int | None = Field(
        None, gt=0, description="Желаемая средняя цена, WAD (nullable)"
    )
    withdrawal_fee_bps: int = Field(..., ge=0, le=10_000)

    marginal_price: int = Field(..., ge=0, description="Текущая маржинальная цена, WAD")
    total_raised: int = Field(..., ge=0)
    legitimate_supply: int = Field(..., ge=0)
    observed_total_supply: int = Field(..., ge=0)
    vault_balance: int = Field(..., ge=0)

    locked: bool
    paused: bool

    model_config = {"frozen": True}
