"""
Protocols — интерфейсы внешних коллабораторов движка

- BondingToken: реестр балансов claim-токена (mint/burn/total_supply)
- AssetLedger: реестр principal asset (балансы и переводы)
- Vault: кастодиальное хранилище principal

Движок знает коллабораторов только через эти интерфейсы.
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class BondingToken(Protocol):
    """Claim-токен: балансы, эмиссия и сжигание."""

    def balance_of(self, holder: str) -> int: ...

    def mint(self, to: str, amount: int) -> None: ...

    def burn(self, holder: str, amount: int) -> None: ...

    def total_supply(self) -> int: ...


@runtime_checkable
class AssetLedger(Protocol):
    """Principal asset: балансы и переводы между адресами."""

    asset_id: str

    def balance_of(self, holder: str) -> int: ...

    def transfer(self, sender: str, recipient: str, amount: int) -> None: ...


@runtime_checkable
class Vault(Protocol):
    """Кастодиальное хранилище principal."""

    @property
    def client(self) -> Optional[str]: ...

    def deposit(self, asset: str, amount: int, credit_to: str) -> None: ...

    def withdraw(self, asset: str, amount: int, pay_to: str) -> None: ...

    def balance_of(self, asset: str, holder: str) -> int: ...
