"""Сборка движка с in-memory коллабораторами для тестов."""

from dataclasses import dataclass

from bootstrap_curve.adapters import InMemoryAssetLedger, InMemoryBondingToken, InMemoryVault
from bootstrap_curve.core.domain.units import WAD
from bootstrap_curve.settlement.engine import SettlementEngine

OWNER = "owner"
ALICE = "alice"
BOB = "bob"
MALLORY = "mallory"

# Сценарий A: funding goal 1_000_000e18, средняя цена 0.9
FUNDING_GOAL = 1_000_000 * WAD
AVERAGE_PRICE = 9 * 10**17


@dataclass
class Harness:
    engine: SettlementEngine
    token: InMemoryBondingToken
    vault: InMemoryVault
    ledger: InMemoryAssetLedger

    def fund(self, holder: str, amount: int) -> None:
        self.ledger.credit(holder, amount)

    def vault_balance(self) -> int:
        return self.vault.balance_of(self.ledger.asset_id, self.engine.address)


def build_harness(
    funding_goal: int | None = FUNDING_GOAL,
    average_price: int = AVERAGE_PRICE,
    fee_bps: int = 0,
    token: InMemoryBondingToken | None = None,
    vault: InMemoryVault | None = None,
) -> Harness:
    ledger = InMemoryAssetLedger("input")
    token = token or InMemoryBondingToken()
    vault = vault or InMemoryVault()
    vault.register_asset(ledger)

    engine = SettlementEngine(token=token, vault=vault, input_ledger=ledger, owner=OWNER)
    vault.set_client(engine.address)

    if funding_goal is not None:
        engine.set_goals(OWNER, funding_goal, average_price)
    if fee_bps:
        engine.set_withdrawal_fee(OWNER, fee_bps)

    return Harness(engine=engine, token=token, vault=vault, ledger=ledger)
