"""Conversion of form text into verifier call arguments.

Both helpers are pure and run on every submission, so the arguments always
reflect the form as it is at the moment of submitting.
"""

from __future__ import annotations

import re

from zkverify_dapp.errors import InvalidProofEncoding, InvalidPublicInput

UINT256_MAX = 2**256 - 1

_HEX_DIGITS = re.compile(r"^[0-9a-fA-F]*$")
_INPUT_SEPARATORS = re.compile(r"[\s,]+")
_DECIMAL = re.compile(r"^[0-9]+$")
_HEX_NUMBER = re.compile(r"^0[xX][0-9a-fA-F]+$")


def encode_proof(text: str) -> bytes:
    """Encode proof text into the bytes argument of the verifier call.

    Text starting with 0x is taken as hex and must be a whole number of
    bytes. Anything else is submitted as its UTF-8 bytes.
    """
    stripped = text.strip()
    if not stripped:
        raise InvalidProofEncoding("proof is empty")

    if stripped[:2] in ("0x", "0X"):
        digits = stripped[2:]
        if not digits:
            raise InvalidProofEncoding("proof has a 0x prefix but no hex digits")
        if not _HEX_DIGITS.match(digits):
            raise InvalidProofEncoding("proof has a 0x prefix but contains non-hex characters")
        if len(digits) % 2:
            raise InvalidProofEncoding("hex proof has an odd number of digits")
        return bytes.fromhex(digits)

    return stripped.encode("utf-8")


def _parse_uint(token: str) -> int:
    if token.startswith("-") and _DECIMAL.match(token[1:]):
        raise InvalidPublicInput(f"public input {token!r} is negative")
    if _DECIMAL.match(token):
        value = int(token, 10)
    elif _HEX_NUMBER.match(token):
        value = int(token[2:], 16)
    else:
        raise InvalidPublicInput(f"public input {token!r} is not an integer")

    if value > UINT256_MAX:
        raise InvalidPublicInput(f"public input {token!r} does not fit in uint256")
    return value


def parse_public_inputs(text: str) -> list[int]:
    """Parse the input field into an ordered list of uint256 values.

    Values are separated by commas or whitespace and may be wrapped in
    brackets: "42", "1, 2, 3", "[0x2a 7]".
    """
    stripped = text.strip()
    if stripped.startswith("[") and stripped.endswith("]"):
        stripped = stripped[1:-1]
    tokens = [t for t in _INPUT_SEPARATORS.split(stripped) if t]
    if not tokens:
        raise InvalidPublicInput("at least one public input is required")
    return [_parse_uint(t) for t in tokens]
