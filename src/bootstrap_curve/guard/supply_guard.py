"""SupplyGuard — защита выкупа от инфляции claim-токена в обход кривой.

Режим выкупа выбирается на каждом вызове (никогда не кэшируется):
- CURVE: observed_total_supply <= legitimate_supply → FeeEngine + QuoteEngine
- PROPORTIONAL: observed_total_supply > legitimate_supply →
  out = bonding_amount * vault_balance / observed_total_supply

Гарантия PROPORTIONAL: сумма выкупов 100% любого уровня эмиссии не превышает
100% principal в vault. Эмитент токенов в обход кривой получает только
свою пропорциональную долю (ребейз), а не перераспределение богатства.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from bootstrap_curve.core.domain.curve_state import BondingSupplyTracker
from bootstrap_curve.core.domain.units import BondingAmount, InputAmount, validate_amount
from bootstrap_curve.core.math.numerical_safeguards import mul_div

logger = logging.getLogger(__name__)


class RedemptionMode(str, Enum):
    """Режим выкупа claim-токенов."""

    CURVE = "CURVE"
    PROPORTIONAL = "PROPORTIONAL"


@dataclass(frozen=True)
class SupplyAssessment:
    """Результат оценки эмиссии на момент вызова."""

    mode: RedemptionMode
    legitimate_supply: int
    observed_total_supply: int

    # Диагностика
    excess_supply: int
    details: str


class SupplyGuard:
    """Выбор режима выкупа и расчёт пропорциональной доли.

    Stateless: счётчик легитимной эмиссии (BondingSupplyTracker) хранит
    движок, guard только его читает и возвращает обновлённые копии.
    """

    def assess(
        self,
        tracker: BondingSupplyTracker,
        observed_total_supply: int,
    ) -> SupplyAssessment:
        """Оценка режима по текущей эмиссии.

        Args:
            tracker: счётчик легитимной эмиссии
            observed_total_supply: total_supply от token collaborator (до burn)

        Returns:
            SupplyAssessment с выбранным режимом
        """
        validate_amount(observed_total_supply, "observed total supply")
        legitimate = tracker.last_known_legitimate_supply
        excess = observed_total_supply - legitimate

        if excess > 0:
            logger.debug(
                "claim supply inflated out of band: observed=%d legitimate=%d excess=%d",
                observed_total_supply,
                legitimate,
                excess,
            )
            return SupplyAssessment(
                mode=RedemptionMode.PROPORTIONAL,
                legitimate_supply=legitimate,
                observed_total_supply=observed_total_supply,
                excess_supply=excess,
                details=f"PROPORTIONAL: observed {observed_total_supply} > legitimate {legitimate}",
            )

        # observed < legitimate (burn в обход кривой) не вредит выкупу
        return SupplyAssessment(
            mode=RedemptionMode.CURVE,
            legitimate_supply=legitimate,
            observed_total_supply=observed_total_supply,
            excess_supply=0,
            details=f"CURVE: observed {observed_total_supply} <= legitimate {legitimate}",
        )

    def proportional_share(
        self,
        bonding_amount: BondingAmount,
        vault_balance: InputAmount,
        observed_total_supply: int,
    ) -> InputAmount:
        """Пропорциональная доля principal: bonding * vault / supply (усечение)."""
        validate_amount(bonding_amount, "bonding amount")
        validate_amount(vault_balance, "vault balance")
        if observed_total_supply <= 0:
            return InputAmount(0)
        return InputAmount(mul_div(bonding_amount, vault_balance, observed_total_supply))

    def after_mint(self, tracker: BondingSupplyTracker, amount: int) -> BondingSupplyTracker:
        """add всегда увеличивает легитимную эмиссию, независимо от прошлой инфляции."""
        return tracker.record_mint(amount)

    def after_burn(
        self,
        tracker: BondingSupplyTracker,
        amount: int,
        assessment: SupplyAssessment,
    ) -> BondingSupplyTracker:
        """Уменьшение счётчика после burn.

        В PROPORTIONAL нельзя отличить легитимные токены от нелегитимных,
        счётчик уменьшается на min(amount, legitimate).
        """
        if assessment.mode == RedemptionMode.PROPORTIONAL:
            amount = min(amount, tracker.last_known_legitimate_supply)
        return tracker.record_burn(amount)
