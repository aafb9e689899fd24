"""Adapters — интерфейсы и in-memory реализации внешних коллабораторов."""

from .memory import InMemoryAssetLedger, InMemoryBondingToken, InMemoryVault
from .pauser import BurnGatedPauser
from .protocols import AssetLedger, BondingToken, Vault

__all__ = [
    # Protocols
    "AssetLedger",
    "BondingToken",
    "Vault",
    # In-memory
    "InMemoryAssetLedger",
    "InMemoryBondingToken",
    "InMemoryVault",
    # Pause
    "BurnGatedPauser",
]
