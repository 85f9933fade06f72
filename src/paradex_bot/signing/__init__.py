"""Request signing -- quantums, StarkNet typed data, hashing and STARK ECDSA."""

from paradex_bot.signing.composer import AuthHeaders, RequestComposer, validate_order
from paradex_bot.signing.hasher import message_hash
from paradex_bot.signing.quantums import to_quantums
from paradex_bot.signing.signer import serialize_signature, sign, verify
from paradex_bot.signing.typed_data import (
    build_auth_typed_data,
    build_order_typed_data,
    encode_side,
    encode_short_string,
)

__all__ = [
    "AuthHeaders",
    "RequestComposer",
    "build_auth_typed_data",
    "build_order_typed_data",
    "encode_short_string",
    "encode_side",
    "message_hash",
    "serialize_signature",
    "sign",
    "to_quantums",
    "validate_order",
    "verify",
]
