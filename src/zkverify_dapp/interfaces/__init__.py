"""Protocol interfaces for all zkverify_dapp components."""

from zkverify_dapp.interfaces.wallet import Signer, WalletGateway, WalletProvider
from zkverify_dapp.interfaces.contract import ContractBinder, ContractClient, TransactionHandle
from zkverify_dapp.interfaces.notifier import Notifier

__all__ = [
    "Signer", "WalletGateway", "WalletProvider",
    "ContractBinder", "ContractClient", "TransactionHandle",
    "Notifier",
]
