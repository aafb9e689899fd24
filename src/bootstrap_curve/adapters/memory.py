"""
In-memory коллабораторы: claim-токен, principal ledger и vault.

Используются в тестах, симуляциях и как эталон поведения интерфейсов
из protocols.py. Minting policy не проверяется: mint доступен любому
вызывающему, что и моделирует эмиссию в обход кривой.
"""

from collections import defaultdict
from typing import Dict, Optional, Tuple

from bootstrap_curve.core.domain.units import validate_amount
from bootstrap_curve.core.errors import AuthorizationError, InsufficientBalanceError, StateError


class InMemoryBondingToken:
    """Claim-токен с балансами в словаре."""

    def __init__(self, symbol: str = "BOND") -> None:
        self.symbol = symbol
        self._balances: Dict[str, int] = defaultdict(int)
        self._total_supply = 0

    def balance_of(self, holder: str) -> int:
        return self._balances.get(holder, 0)

    def total_supply(self) -> int:
        return self._total_supply

    def mint(self, to: str, amount: int) -> None:
        validate_amount(amount, "mint amount")
        self._balances[to] += amount
        self._total_supply += amount

    def burn(self, holder: str, amount: int) -> None:
        validate_amount(amount, "burn amount")
        balance = self.balance_of(holder)
        if balance < amount:
            raise InsufficientBalanceError(
                f"{holder} holds {balance} {self.symbol}, cannot burn {amount}"
            )
        self._balances[holder] = balance - amount
        self._total_supply -= amount

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        self.burn(sender, amount)
        self.mint(recipient, amount)


class InMemoryAssetLedger:
    """Реестр principal asset."""

    def __init__(self, asset_id: str = "input") -> None:
        self.asset_id = asset_id
        self._balances: Dict[str, int] = defaultdict(int)

    def balance_of(self, holder: str) -> int:
        return self._balances.get(holder, 0)

    def credit(self, holder: str, amount: int) -> None:
        """Начисление из ниоткуда (faucet для тестов и симуляций)."""
        validate_amount(amount, "credit amount")
        self._balances[holder] += amount

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        validate_amount(amount, "transfer amount")
        balance = self.balance_of(sender)
        if balance < amount:
            raise InsufficientBalanceError(
                f"{sender} holds {balance} {self.asset_id}, cannot transfer {amount}"
            )
        self._balances[sender] = balance - amount
        self._balances[recipient] += amount


class InMemoryVault:
    """
    Vault с одним авторизованным клиентом.

    deposit переводит principal с адреса credit_to в vault и зачисляет
    custody на credit_to. withdraw списывает custody клиента и переводит
    principal на pay_to. Клиент должен быть одобрен через set_client.
    """

    def __init__(self, address: str = "vault") -> None:
        self.address = address
        self._ledgers: Dict[str, InMemoryAssetLedger] = {}
        self._custody: Dict[Tuple[str, str], int] = defaultdict(int)
        self._client: Optional[str] = None

    def register_asset(self, ledger: InMemoryAssetLedger) -> None:
        self._ledgers[ledger.asset_id] = ledger

    def set_client(self, client: str, authorized: bool = True) -> None:
        if authorized:
            self._client = client
        elif self._client == client:
            self._client = None

    @property
    def client(self) -> Optional[str]:
        return self._client

    def _ledger(self, asset: str) -> InMemoryAssetLedger:
        ledger = self._ledgers.get(asset)
        if ledger is None:
            raise StateError(f"vault does not custody asset {asset!r}")
        return ledger

    def _require_client(self, holder: str) -> None:
        if self._client is None:
            raise StateError("vault client not initialized")
        if holder != self._client:
            raise AuthorizationError(f"{holder} is not the vault client")

    def balance_of(self, asset: str, holder: str) -> int:
        return self._custody.get((asset, holder), 0)

    def deposit(self, asset: str, amount: int, credit_to: str) -> None:
        validate_amount(amount, "deposit amount")
        self._require_client(credit_to)
        self._ledger(asset).transfer(credit_to, self.address, amount)
        self._custody[(asset, credit_to)] += amount

    def withdraw(self, asset: str, amount: int, pay_to: str) -> None:
        validate_amount(amount, "withdraw amount")
        if self._client is None:
            raise StateError("vault client not initialized")
        held = self.balance_of(asset, self._client)
        if held < amount:
            raise InsufficientBalanceError(
                f"vault holds {held} {asset} for {self._client}, cannot withdraw {amount}"
            )
        self._custody[(asset, self._client)] = held - amount
        self._ledger(asset).transfer(self.address, pay_to, amount)
