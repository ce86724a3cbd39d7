"""Wallet integration components."""

from zkverify_dapp.wallet.gateway import ProviderWalletGateway, WalletSigner
from zkverify_dapp.wallet.provider import HttpWalletProvider, ProviderRpcError

__all__ = ["ProviderWalletGateway", "WalletSigner", "HttpWalletProvider", "ProviderRpcError"]
