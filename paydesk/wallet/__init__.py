from .ledger import WalletLedger

__all__ = ["WalletLedger"]
