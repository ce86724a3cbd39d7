"""Verifier contract interface descriptor."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from zkverify_dapp.errors import ConfigurationError

VERIFIER_ABI: list[dict[str, Any]] = [
    {
        "inputs": [
            {"internalType": "bytes", "name": "proof", "type": "bytes"},
            {"internalType": "uint256[]", "name": "input", "type": "uint256[]"},
        ],
        "name": "verifyTx",
        "outputs": [{"internalType": "bool", "name": "r", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "anonymous": False,
        "inputs": [{"indexed": False, "internalType": "string", "name": "s", "type": "string"}],
        "name": "Verified",
        "type": "event",
    },
]


def load_abi(path: str | Path | None) -> list[dict[str, Any]]:
    """Load an ABI from a JSON file, or return the built-in verifier ABI.

    Accepts either a bare ABI list or a compiler artifact with an "abi" key.
    """
    if not path:
        return VERIFIER_ABI

    p = Path(path).expanduser()
    try:
        with open(p) as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"cannot read ABI from {p}: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("abi")
    if not isinstance(data, list):
        raise ConfigurationError(f"{p} does not contain an ABI list")
    return data


def has_function(abi: list[dict[str, Any]], name: str) -> bool:
    return any(
        entry.get("type", "function") == "function" and entry.get("name") == name
        for entry in abi
    )
