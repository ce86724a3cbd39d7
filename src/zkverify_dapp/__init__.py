"""zkverify_dapp - submit zero-knowledge proofs to an on-chain verifier from a connected wallet."""

__version__ = "0.1.0"
