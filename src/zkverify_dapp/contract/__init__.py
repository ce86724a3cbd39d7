"""Verifier contract integration components."""

from zkverify_dapp.contract.abi import VERIFIER_ABI, load_abi
from zkverify_dapp.contract.client import PendingTransaction, VerifierContractClient
from zkverify_dapp.contract.encoding import encode_proof, parse_public_inputs

__all__ = [
    "VERIFIER_ABI", "load_abi",
    "PendingTransaction", "VerifierContractClient",
    "encode_proof", "parse_public_inputs",
]
