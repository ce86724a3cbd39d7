"""Configuration model for the client."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class DappConfig:
    """Complete client configuration."""

    # Wallet
    wallet_url: str = "http://127.0.0.1:1248"  # Frame's local JSON-RPC endpoint
    request_timeout: float = 30.0  # seconds, non-interactive calls only

    # Contract
    contract_address: str = ""  # loaded from env var ZKVERIFY_CONTRACT_ADDRESS
    abi_path: str = ""  # empty means the built-in verifier ABI
    function_name: str = "verifyTx"
    deployments_path: str = "deployments.json"

    # Workflow
    confirm_poll_interval: float = 2.0  # seconds between receipt polls
    confirm_timeout: float | None = None  # None waits until mined
    log_level: str = "info"
