"""Configuration loading: TOML file + environment variables + deployments.json."""

from __future__ import annotations

import json
import os
from pathlib import Path

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore[no-redef]

from zkverify_dapp.errors import ConfigurationError
from zkverify_dapp.models.config import DappConfig

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def load_config(
    config_path: str | Path | None = None,
    env_prefix: str = "ZKVERIFY_",
) -> DappConfig:
    """Load client configuration from TOML file, env vars, and deployments.json.

    Priority (highest wins):
        1. Environment variables (ZKVERIFY_CONTRACT_ADDRESS, etc.)
        2. TOML config file
        3. deployments.json written by the deploy script (address only)
        4. Defaults from DappConfig
    """
    raw: dict = {}
    if config_path is not None:
        p = Path(config_path).expanduser()
        if p.exists():
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    cfg = DappConfig()

    # ── Wallet section ─────────────────────────────────────
    wallet = raw.get("wallet", {})
    if v := wallet.get("url"):
        cfg.wallet_url = str(v)
    if v := wallet.get("request_timeout"):
        cfg.request_timeout = float(v)

    # ── Contract section ───────────────────────────────────
    contract = raw.get("contract", {})
    if v := contract.get("address"):
        cfg.contract_address = str(v)
    if v := contract.get("abi_path"):
        cfg.abi_path = str(v)
    if v := contract.get("function"):
        cfg.function_name = str(v)
    if v := contract.get("deployments_path"):
        cfg.deployments_path = str(v)

    # ── Workflow section ───────────────────────────────────
    workflow = raw.get("workflow", {})
    if v := workflow.get("confirm_poll_interval"):
        cfg.confirm_poll_interval = float(v)
    if (v := workflow.get("confirm_timeout")) is not None:
        # 0 means wait until mined
        cfg.confirm_timeout = float(v) or None
    if v := workflow.get("log_level"):
        cfg.log_level = str(v)

    # ── Environment variable overrides (highest priority) ──
    if url := os.environ.get(f"{env_prefix}WALLET_URL"):
        cfg.wallet_url = url
    if addr := os.environ.get(f"{env_prefix}CONTRACT_ADDRESS"):
        cfg.contract_address = addr
    if abi := os.environ.get(f"{env_prefix}ABI_PATH"):
        cfg.abi_path = abi
    if level := os.environ.get(f"{env_prefix}LOG_LEVEL"):
        cfg.log_level = level

    if cfg.log_level.lower() not in LOG_LEVELS:
        raise ConfigurationError(
            f"unknown log_level {cfg.log_level!r} (expected one of: {', '.join(LOG_LEVELS)})"
        )

    if not cfg.contract_address:
        _load_deployments(cfg, cfg.deployments_path)

    if cfg.abi_path:
        cfg.abi_path = str(Path(cfg.abi_path).expanduser())

    return cfg


def _load_deployments(cfg: DappConfig, deployments_path: str) -> None:
    """Load the verifier address from the deploy script's deployments.json."""
    p = Path(deployments_path).expanduser()
    if not p.is_absolute():
        # Try relative to CWD
        p = Path.cwd() / p
    if not p.exists():
        return

    with open(p) as f:
        data = json.load(f)

    verifier = data.get("verifier", {})
    if addr := verifier.get("address"):
        cfg.contract_address = addr
