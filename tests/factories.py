"""Synthetic JSON-RPC payload factories for testing."""

from __future__ import annotations

from eth_abi import encode as abi_encode

from zkverify_dapp.models.records import TransactionReceipt

TX_HASH = "0x" + "ab" * 32


def make_receipt_rpc(
    tx_hash: str = TX_HASH,
    status: int = 1,
    block_number: int = 0x10,
    gas_used: int = 210_000,
    sender: str = "0x90f8bf6a479f320ead074411a4b0e7944ea8c9c1",
    to: str = "0xe78a0f7e598cc8b0bb87894b0f60dd2a88d6a8ab",
) -> dict:
    """An eth_getTransactionReceipt result object, hex quantities and all."""
    return {
        "transactionHash": tx_hash,
        "blockNumber": hex(block_number),
        "status": hex(status),
        "gasUsed": hex(gas_used),
        "from": sender,
        "to": to,
        "logs": [],
    }


def make_receipt(
    tx_hash: str = "0xT1",
    status: int = 1,
    block_number: int = 7,
    gas_used: int = 210_000,
) -> TransactionReceipt:
    return TransactionReceipt(
        tx_hash=tx_hash,
        block_number=block_number,
        status=status,
        gas_used=gas_used,
    )


def revert_data(reason: str) -> str:
    """ABI-encoded Error(string) revert payload as a 0x hex string."""
    return "0x08c379a0" + abi_encode(["string"], [reason]).hex()


def panic_data(code: int) -> str:
    """ABI-encoded Panic(uint256) revert payload as a 0x hex string."""
    return "0x4e487b71" + abi_encode(["uint256"], [code]).hex()
