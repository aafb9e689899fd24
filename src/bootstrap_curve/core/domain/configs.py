"""
Configs — Конфигурации целей, комиссии и движка

Immutable Pydantic модели. Владелец заменяет их целиком через
авторизованные setter'ы движка; математика кривой от них не зависит.
"""

from typing import Final, Optional

from pydantic import BaseModel, Field, field_validator

from bootstrap_curve.core.domain.units import BPS_DENOMINATOR, WAD

# Нижняя граница средней цены: ceil(sqrt(0.75) * WAD).
# Начальная маржинальная цена равна P², поэтому она остаётся выше 0.75 WAD.
MIN_DESIRED_AVERAGE_PRICE: Final[int] = 866_025_403_784_438_647

# Верхняя граница (исключительная): референсная цена единицы
MAX_DESIRED_AVERAGE_PRICE: Final[int] = WAD


class GoalConfig(BaseModel):
    """
    Экономические цели кривой.

    funding_goal: principal при насыщении кривой (x = funding_goal)
    desired_average_price: средняя цена выпуска на [0, funding_goal], WAD
    """

    funding_goal: int = Field(..., gt=0, description="Цель сбора principal")
    desired_average_price: int = Field(
        ...,
        gt=MIN_DESIRED_AVERAGE_PRICE,
        lt=MAX_DESIRED_AVERAGE_PRICE,
        description="Желаемая средняя цена (WAD)",
    )

    model_config = {"frozen": True}


class FeeConfig(BaseModel):
    """Комиссия на вывод в basis points, применяется к claim-токенам при remove."""

    withdrawal_fee_bps: int = Field(default=0, ge=0, le=BPS_DENOMINATOR)

    model_config = {"frozen": True}


class EngineSettings(BaseModel):
    """
    Настройки для сборки движка (contracts/schema/engine_settings.json).

    Большие целые принимаются как int или как десятичная строка.
    """

    owner: str = Field(..., min_length=1, description="Адрес владельца")
    pauser: Optional[str] = Field(None, min_length=1, description="Адрес pauser (nullable)")
    input_asset: str = Field(default="input", min_length=1, description="Идентификатор principal asset")
    engine_address: str = Field(default="bonding-curve", min_length=1)
    funding_goal: Optional[int] = Field(None, gt=0)
    desired_average_price: Optional[int] = Field(None, gt=0)
    withdrawal_fee_bps: int = Field(default=0, ge=0, le=BPS_DENOMINATOR)
    locked: bool = False

    model_config = {"frozen": True}

    @field_validator("funding_goal", "desired_average_price", mode="before")
    @classmethod
    def parse_big_int(cls, v):
        """Десятичная строка → int (JSON не всегда переносит 10**24 как число)."""
        if isinstance(v, str):
            if not v.isdigit():
                raise ValueError(f"expected decimal integer string, got {v!r}")
            return int(v)
        return v

    @property
    def has_goals(self) -> bool:
        return self.funding_goal is not None and self.desired_average_price is not None
