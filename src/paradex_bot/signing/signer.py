"""STARK curve ECDSA signing.

starknet-py derives the nonce per RFC 6979, so signing the same hash with
the same key always yields the same (r, s).
"""

import json

from starknet_py.hash.utils import (
    message_signature,
    private_to_stark_key,
    verify_message_signature,
)

from paradex_bot.exceptions import CryptoError
from paradex_bot.models import Signature

# Order of the STARK curve generator; valid private keys are in [1, EC_ORDER).
EC_ORDER = 0x0800000000000010FFFFFFFFFFFFFFFFB781126DCAE7B2321E66A241ADC64D2F


def parse_private_key(private_key: str | int) -> int:
    """Parse and range-check a private key.

    Raises:
        CryptoError: If the key is not an integer in [1, EC_ORDER).
    """
    if isinstance(private_key, int):
        key = private_key
    else:
        text = private_key.strip()
        try:
            key = int(text, 16) if text.lower().startswith("0x") else int(text)
        except ValueError as exc:
            raise CryptoError("Private key is not a hex or decimal integer") from exc

    if not 1 <= key < EC_ORDER:
        raise CryptoError("Private key is not a valid STARK curve scalar")
    return key


def sign(msg_hash: int, private_key: str | int) -> Signature:
    """Sign a message hash.

    Args:
        msg_hash: Typed-data message hash.
        private_key: Account private key (hex or decimal).

    Returns:
        Signature with r and s.

    Raises:
        CryptoError: On an invalid key or a failure inside the signing primitive.
    """
    key = parse_private_key(private_key)
    try:
        r, s = message_signature(msg_hash, key)
    except (AssertionError, ValueError) as exc:
        raise CryptoError(f"Signing failed: {exc}") from exc
    return Signature(r=r, s=s)


def verify(msg_hash: int, signature: Signature, private_key: str | int) -> bool:
    """Check a signature against the public key derived from private_key."""
    public_key = private_to_stark_key(parse_private_key(private_key))
    return verify_message_signature(msg_hash, [signature.r, signature.s], public_key)


def serialize_signature(signature: Signature) -> str:
    """Serialize as the JSON array of decimal strings Paradex expects: ["r","s"]."""
    return json.dumps([str(signature.r), str(signature.s)], separators=(",", ":"))
