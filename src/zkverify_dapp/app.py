"""Component wiring - builds a ready-to-use VerificationWorkflow from config."""

from __future__ import annotations

import functools
import logging

from zkverify_dapp.contract.abi import load_abi
from zkverify_dapp.contract.client import VerifierContractClient
from zkverify_dapp.interfaces.notifier import Notifier
from zkverify_dapp.interfaces.wallet import WalletProvider
from zkverify_dapp.models.config import DappConfig
from zkverify_dapp.wallet.gateway import ProviderWalletGateway
from zkverify_dapp.wallet.provider import HttpWalletProvider
from zkverify_dapp.workflow import VerificationWorkflow

log = logging.getLogger(__name__)


def build_workflow(
    cfg: DappConfig,
    provider: WalletProvider | None = None,
    notifier: Notifier | None = None,
) -> VerificationWorkflow:
    """Wire gateway, contract binder and workflow.

    The contract is bound per submission to the signer of the account
    connected at that moment. Pass provider to inject a wallet transport;
    by default an HttpWalletProvider on cfg.wallet_url is used.
    """
    if provider is None:
        provider = HttpWalletProvider(cfg.wallet_url, cfg.request_timeout)

    abi = load_abi(cfg.abi_path)
    bind_contract = functools.partial(
        VerifierContractClient.bind,
        cfg.contract_address,
        abi,
        function_name=cfg.function_name,
        poll_interval=cfg.confirm_poll_interval,
        confirm_timeout=cfg.confirm_timeout,
    )

    log.debug("Verifier %s (%s) via %s", cfg.contract_address, cfg.function_name, cfg.wallet_url)
    return VerificationWorkflow(
        gateway=ProviderWalletGateway(provider),
        bind_contract=bind_contract,
        notifier=notifier,
    )
