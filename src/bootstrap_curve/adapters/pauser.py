"""Pauser — экстренная пауза, открываемая сжиганием trigger-токена.

Любой держатель может поставить движок на паузу, сжёг burn_amount
trigger-токенов. Снять паузу может только владелец движка.
"""

import logging
from typing import TYPE_CHECKING

from bootstrap_curve.adapters.protocols import BondingToken
from bootstrap_curve.core.domain.units import validate_positive_amount
from bootstrap_curve.core.errors import AuthorizationError, InsufficientBalanceError

if TYPE_CHECKING:
    from bootstrap_curve.settlement.engine import SettlementEngine

logger = logging.getLogger(__name__)


class BurnGatedPauser:
    """Pause trigger, защищённый сжиганием токена."""

    def __init__(
        self,
        engine: "SettlementEngine",
        trigger_token: BondingToken,
        burn_amount: int,
        address: str = "pauser",
    ):
        validate_positive_amount(burn_amount, "burn amount")
        self.engine = engine
        self.trigger_token = trigger_token
        self.burn_amount = burn_amount
        self.address = address

    def trigger(self, caller: str) -> None:
        """Сжечь burn_amount у caller и поставить движок на паузу.

        Пауза выставляется только после успешного burn.

        Raises:
            AuthorizationError: pauser не назначен в движке
            InsufficientBalanceError: у caller не хватает trigger-токенов
        """
        if self.engine.pauser != self.address:
            raise AuthorizationError(f"{self.address} is not the engine pauser")

        balance = self.trigger_token.balance_of(caller)
        if balance < self.burn_amount:
            raise InsufficientBalanceError(
                f"{caller} holds {balance} trigger tokens, pause requires {self.burn_amount}"
            )

        self.trigger_token.burn(caller, self.burn_amount)
        self.engine.pause(caller=self.address)
        logger.warning("engine paused by %s (burned %d trigger tokens)", caller, self.burn_amount)
