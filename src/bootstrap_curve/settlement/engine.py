"""SettlementEngine — оркестрация add/remove поверх виртуальной пары.

Каждый мутирующий вызов:
1. Admission (reentrancy, pause, lock, goals) → StateError
2. Валидация сумм и балансов → InvalidAmountError / InsufficientBalanceError
3. Котировка через те же функции, что и публичные quote_* (бит-в-бит)
4. Slippage → SlippageError
5. Внутренний учёт (burn, мутация пары, счётчик эмиссии)
6. Внешние переводы (vault, mint) — строго после учёта; при сбое
   deposit или mint principal возвращается вызывающему

Любое исключение восстанавливает пару и счётчик эмиссии из журнала,
снятого на входе: состояние после неудачного вызова идентично исходному.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

from bootstrap_curve.adapters.protocols import AssetLedger, BondingToken, Vault
from bootstrap_curve.core.contracts.validators import validate_curve_snapshot
from bootstrap_curve.core.domain.configs import EngineSettings, FeeConfig, GoalConfig
from bootstrap_curve.core.domain.curve_state import (
    BondingSupplyTracker,
    CurveSnapshot,
    VirtualPair,
    VirtualPairState,
)
from bootstrap_curve.core.domain.units import (
    BondingAmount,
    InputAmount,
    Price,
    bonding_to_virtual,
    input_to_virtual,
    validate_amount,
    validate_positive_amount,
    virtual_to_bonding,
    virtual_to_input,
)
from bootstrap_curve.core.errors import (
    ConfigurationError,
    CurveArithmeticError,
    InsufficientBalanceError,
    SlippageError,
    StateError,
)
from bootstrap_curve.core.math.fees import FeeBreakdown, apply_fee, validate_fee_bps
from bootstrap_curve.core.math.numerical_safeguards import wad_div
from bootstrap_curve.core.math.parameter_deriver import initial_state, marginal_price_at
from bootstrap_curve.core.math.quotes import solve_add, solve_remove
from bootstrap_curve.guard.supply_guard import RedemptionMode, SupplyAssessment, SupplyGuard
from bootstrap_curve.settlement.admission import AdmissionGate, EngineStatus
from bootstrap_curve.settlement.authorization import OwnerAuthorization

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemovalPlan:
    """План выкупа, общий для quote_remove и remove."""

    assessment: SupplyAssessment
    input_out: InputAmount
    fee: FeeBreakdown
    new_state: Optional[VirtualPairState]

    @property
    def mode(self) -> RedemptionMode:
        return self.assessment.mode


class SettlementEngine:
    """Bootstrap bonding-curve exchange.

    Пользователь вносит principal и получает claim-токен по цене кривой,
    позже выкупает claim-токен за долю principal из vault.

    Коллабораторы:
    - token: claim-токен (mint/burn/total_supply)
    - vault: кастодиальное хранилище principal
    - input_ledger: реестр principal asset
    """

    def __init__(
        self,
        token: BondingToken,
        vault: Vault,
        input_ledger: AssetLedger,
        owner: str,
        pauser: Optional[str] = None,
        address: str = "bonding-curve",
        locked: bool = False,
    ):
        self.address = address
        self._token = token
        self._vault = vault
        self._input = input_ledger

        self._auth = OwnerAuthorization(owner, pauser)
        self._admission = AdmissionGate()
        self._guard = SupplyGuard()

        self._state = VirtualPairState.empty()
        self._tracker = BondingSupplyTracker()
        self._goals: Optional[GoalConfig] = None
        self._fees = FeeConfig()

        self._locked = locked
        self._paused = False
        self._in_settlement = False

    @classmethod
    def from_settings(
        cls,
        settings: EngineSettings,
        token: BondingToken,
        vault: Vault,
        input_ledger: AssetLedger,
    ) -> "SettlementEngine":
        """Сборка движка из EngineSettings (см. contracts.load_engine_settings)."""
        if settings.input_asset != input_ledger.asset_id:
            raise ConfigurationError(
                f"settings input_asset {settings.input_asset!r} does not match "
                f"ledger asset {input_ledger.asset_id!r}"
            )

        engine = cls(
            token=token,
            vault=vault,
            input_ledger=input_ledger,
            owner=settings.owner,
            pauser=settings.pauser,
            address=settings.engine_address,
        )
        if settings.has_goals:
            engine.set_goals(settings.owner, settings.funding_goal, settings.desired_average_price)
        if settings.withdrawal_fee_bps:
            engine.set_withdrawal_fee(settings.owner, settings.withdrawal_fee_bps)
        if settings.locked:
            engine.lock(settings.owner)
        return engine

    # =========================================================================
    # STATUS
    # =========================================================================

    @property
    def owner(self) -> str:
        return self._auth.owner

    @property
    def pauser(self) -> Optional[str]:
        return self._auth.pauser

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def state(self) -> VirtualPairState:
        return self._state

    @property
    def goals(self) -> Optional[GoalConfig]:
        return self._goals

    @property
    def alpha(self) -> int:
        return self._state.alpha

    @property
    def beta(self) -> int:
        return self._state.beta

    @property
    def virtual_k(self) -> int:
        return self._state.k

    @property
    def withdrawal_fee_bps(self) -> int:
        return self._fees.withdrawal_fee_bps

    @property
    def legitimate_supply(self) -> int:
        return self._tracker.last_known_legitimate_supply

    @property
    def input_asset(self) -> str:
        return self._input.asset_id

    def _status(self) -> EngineStatus:
        return EngineStatus(
            locked=self._locked,
            paused=self._paused,
            goals_configured=self._state.is_configured,
            in_settlement=self._in_settlement,
        )

    def _vault_balance(self) -> int:
        return self._vault.balance_of(self._input.asset_id, self.address)

    # =========================================================================
    # SETTLEMENT GUARD
    # =========================================================================

    @contextmanager
    def _settlement(self, operation: str) -> Iterator[None]:
        """Scoped guard: admission, журнал состояния, флаг reentrancy.

        Флаг снимается на любом пути выхода, включая исключения.
        """
        admission = self._admission.evaluate(self._status(), operation)
        if not admission.allowed:
            raise StateError(admission.details)

        journal = (self._state, self._tracker)
        self._in_settlement = True
        try:
            yield
        except Exception:
            self._state, self._tracker = journal
            logger.info("%s aborted, core state restored", operation)
            raise
        finally:
            self._in_settlement = False

    def _require_vault_client(self, action: str) -> None:
        """Vault должен обслуживать именно этот движок до любых переводов."""
        client = self._vault.client
        if client is None:
            raise StateError(f"{action}: vault client not initialized")
        if client != self.address:
            raise StateError(f"{action}: vault client is {client}, not {self.address}")

    def _require_idle(self, action: str) -> None:
        if self._in_settlement:
            raise StateError(f"{action}: not allowed during settlement")

    # =========================================================================
    # QUERIES (read-only)
    # =========================================================================

    def get_virtual_pair(self) -> VirtualPair:
        return self._state.as_pair()

    def quote_add(self, input_amount: InputAmount) -> BondingAmount:
        """Сколько claim-токенов add выдаст за input_amount прямо сейчас."""
        validate_amount(input_amount, "input_amount")
        if input_amount == 0:
            return BondingAmount(0)
        self._require_configured("quote_add")
        quote = solve_add(self._state, input_to_virtual(input_amount))
        bonding_out = virtual_to_bonding(quote.bonding_out)
        logger.debug("quote_add(%d) -> %d", input_amount, bonding_out)
        return bonding_out

    def quote_remove(self, bonding_amount: BondingAmount) -> InputAmount:
        """Сколько principal remove вернёт за bonding_amount прямо сейчас.

        Учитывает режим SupplyGuard и комиссию так же, как remove.
        """
        validate_amount(bonding_amount, "bonding_amount")
        if bonding_amount == 0:
            return InputAmount(0)
        self._require_configured("quote_remove")
        plan = self._plan_removal(bonding_amount)
        logger.debug("quote_remove(%d) -> %d (%s)", bonding_amount, plan.input_out, plan.mode.value)
        return plan.input_out

    def get_marginal_price(self) -> Price:
        """Текущая маржинальная цена claim-токена в principal, WAD."""
        return marginal_price_at(self._state, self._state.x)

    def get_initial_marginal_price(self) -> Price:
        return marginal_price_at(self._state, 0)

    def get_final_marginal_price(self) -> Price:
        """Маржинальная цена при насыщении (x = funding_goal)."""
        if self._goals is None:
            return Price(0)
        return marginal_price_at(self._state, input_to_virtual(self._goals.funding_goal))

    def get_average_price(self) -> Price:
        """Фактическая средняя цена выпуска: x / (y₀ - y).

        До первого add возвращает начальную маржинальную цену.
        """
        if not self._state.is_configured:
            return Price(0)
        issued = self._state.initial_y - self._state.y
        if issued <= 0 or self._state.x == 0:
            return self.get_initial_marginal_price()
        return Price(wad_div(self._state.x, issued))

    def get_total_raised(self) -> InputAmount:
        return virtual_to_input(self._state.x)

    def snapshot(self) -> CurveSnapshot:
        """Снапшот текущего состояния (модель, см. export_snapshot)."""
        return CurveSnapshot(
            x=self._state.x,
            y=self._state.y,
            alpha=self._state.alpha,
            beta=self._state.beta,
            k=self._state.k,
            funding_goal=self._goals.funding_goal if self._goals else None,
            desired_average_price=self._goals.desired_average_price if self._goals else None,
            withdrawal_fee_bps=self._fees.withdrawal_fee_bps,
            marginal_price=self.get_marginal_price(),
            total_raised=self.get_total_raised(),
            legitimate_supply=self._tracker.last_known_legitimate_supply,
            observed_total_supply=self._token.total_supply(),
            vault_balance=self._vault_balance(),
            locked=self._locked,
            paused=self._paused,
        )

    def export_snapshot(self) -> Dict[str, Any]:
        """JSON-совместимый снапшот, проверенный схемой curve_snapshot.

        Raises:
            jsonschema.ValidationError: снапшот не соответствует схеме
        """
        data = self.snapshot().model_dump(mode="json")
        validate_curve_snapshot(data)
        return data

    def _require_configured(self, action: str) -> None:
        if not self._state.is_configured:
            raise StateError(f"{action}: set_goals has not been called")

    def _plan_removal(self, bonding_amount: BondingAmount) -> RemovalPlan:
        assessment = self._guard.assess(self._tracker, self._token.total_supply())

        if assessment.mode == RedemptionMode.PROPORTIONAL:
            input_out = self._guard.proportional_share(
                bonding_amount, self._vault_balance(), assessment.observed_total_supply
            )
            return RemovalPlan(
                assessment=assessment,
                input_out=input_out,
                fee=FeeBreakdown(effective_amount=bonding_amount, fee_amount=BondingAmount(0)),
                new_state=None,
            )

        fee = apply_fee(bonding_amount, self._fees.withdrawal_fee_bps)
        quote = solve_remove(self._state, bonding_to_virtual(fee.effective_amount))
        return RemovalPlan(
            assessment=assessment,
            input_out=virtual_to_input(quote.input_out),
            fee=fee,
            new_state=self._state.with_legs(quote.new_x, quote.new_y, quote.divisor),
        )

    # =========================================================================
    # SETTLEMENT
    # =========================================================================

    def add(self, caller: str, input_amount: InputAmount, min_bonding_out: BondingAmount = 0) -> BondingAmount:
        """Внести principal и получить claim-токены.

        Args:
            caller: адрес вызывающего
            input_amount: principal (> 0)
            min_bonding_out: минимально приемлемый выход

        Returns:
            Выпущенные claim-токены (== quote_add(input_amount) до вызова)

        Raises:
            StateError, InvalidAmountError, InsufficientBalanceError,
            CurveArithmeticError, SlippageError
        """
        validate_positive_amount(input_amount, "input_amount")
        validate_amount(min_bonding_out, "min_bonding_out")

        with self._settlement("add"):
            balance = self._input.balance_of(caller)
            if balance < input_amount:
                raise InsufficientBalanceError(
                    f"{caller} holds {balance} {self.input_asset}, add requires {input_amount}"
                )

            quote = solve_add(self._state, input_to_virtual(input_amount))
            bonding_out = virtual_to_bonding(quote.bonding_out)
            if bonding_out == 0:
                raise CurveArithmeticError(f"deposit of {input_amount} buys zero claim tokens")
            if bonding_out < min_bonding_out:
                raise SlippageError(f"add: out {bonding_out} below minimum {min_bonding_out}")

            new_state = self._state.with_legs(quote.new_x, quote.new_y, quote.divisor)
            new_state.check_invariant()
            self._state = new_state
            self._tracker = self._guard.after_mint(self._tracker, bonding_out)

            self._require_vault_client("add")
            self._input.transfer(caller, self.address, input_amount)
            try:
                self._vault.deposit(self.input_asset, input_amount, self.address)
            except Exception:
                self._input.transfer(self.address, caller, input_amount)
                raise
            try:
                self._token.mint(caller, bonding_out)
            except Exception:
                # principal уже в vault: возвращаем его вызывающему
                self._vault.withdraw(self.input_asset, input_amount, caller)
                raise

        logger.info("add: %s deposited %d, minted %d", caller, input_amount, bonding_out)
        return bonding_out

    def remove(self, caller: str, bonding_amount: BondingAmount, min_input_out: InputAmount = 0) -> InputAmount:
        """Сжечь claim-токены и получить principal.

        Режим (CURVE / PROPORTIONAL) выбирается по эмиссии до burn.
        При комиссии 10000 bps возвращает 0 без ошибки.

        Raises:
            StateError, InvalidAmountError, InsufficientBalanceError,
            CurveArithmeticError, SlippageError
        """
        validate_positive_amount(bonding_amount, "bonding_amount")
        validate_amount(min_input_out, "min_input_out")

        with self._settlement("remove"):
            held = self._token.balance_of(caller)
            if held < bonding_amount:
                raise InsufficientBalanceError(
                    f"{caller} holds {held} claim tokens, remove requires {bonding_amount}"
                )

            plan = self._plan_removal(bonding_amount)
            input_out = plan.input_out
            if input_out < min_input_out:
                raise SlippageError(f"remove: out {input_out} below minimum {min_input_out}")

            self._require_vault_client("remove")
            custody = self._vault_balance()
            if custody < input_out:
                raise InsufficientBalanceError(
                    f"vault holds {custody} {self.input_asset}, remove requires {input_out}"
                )

            self._token.burn(caller, bonding_amount)
            if plan.new_state is not None:
                plan.new_state.check_invariant()
                self._state = plan.new_state
            self._tracker = self._guard.after_burn(self._tracker, bonding_amount, plan.assessment)

            if input_out > 0:
                self._vault.withdraw(self._input.asset_id, input_out, caller)

        if plan.mode == RedemptionMode.PROPORTIONAL:
            logger.warning(
                "remove: %s redeemed %d pro rata for %d (%s)",
                caller,
                bonding_amount,
                input_out,
                plan.assessment.details,
            )
        else:
            logger.info(
                "remove: %s burned %d (fee %d), received %d",
                caller,
                bonding_amount,
                plan.fee.fee_amount,
                input_out,
            )
        return input_out

    # =========================================================================
    # ADMINISTRATION
    # =========================================================================

    def set_goals(self, caller: str, funding_goal: int, desired_average_price: int) -> None:
        """Полный пере-вывод α, β, K; x сбрасывается в ноль (нулевой seed).

        Raises:
            AuthorizationError, ConfigurationError, StateError
        """
        self._auth.require_owner(caller, "set_goals")
        self._require_idle("set_goals")

        new_state = initial_state(funding_goal, desired_average_price)
        goals = GoalConfig(funding_goal=funding_goal, desired_average_price=desired_average_price)

        self._state = new_state
        self._goals = goals
        logger.info(
            "set_goals: funding_goal=%d desired_average_price=%d alpha=%d K=%d",
            funding_goal,
            desired_average_price,
            new_state.alpha,
            new_state.k,
        )

    def set_withdrawal_fee(self, caller: str, fee_bps: int) -> None:
        """
        Raises:
            AuthorizationError, ConfigurationError (fee_bps вне [0, 10000])
        """
        self._auth.require_owner(caller, "set_withdrawal_fee")
        self._require_idle("set_withdrawal_fee")
        validate_fee_bps(fee_bps)
        self._fees = FeeConfig(withdrawal_fee_bps=fee_bps)
        logger.info("set_withdrawal_fee: %d bps", fee_bps)

    def lock(self, caller: str) -> None:
        self._auth.require_owner(caller, "lock")
        self._locked = True
        logger.info("engine locked by %s", caller)

    def unlock(self, caller: str) -> None:
        self._auth.require_owner(caller, "unlock")
        self._locked = False
        logger.info("engine unlocked by %s", caller)

    def set_pauser(self, caller: str, pauser: Optional[str]) -> None:
        self._auth.set_pauser(caller, pauser)
        logger.info("pauser set to %s", pauser)

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        self._auth.transfer_ownership(caller, new_owner)
        logger.info("ownership transferred from %s to %s", caller, new_owner)

    def pause(self, caller: str) -> None:
        """Пауза принимается только от назначенного pauser (burn-gated trigger)."""
        self._auth.require_pauser(caller)
        self._paused = True
        logger.warning("engine paused by pauser %s", caller)

    def unpause(self, caller: str) -> None:
        self._auth.require_owner(caller, "unpause")
        self._paused = False
        logger.info("engine unpaused by %s", caller)
