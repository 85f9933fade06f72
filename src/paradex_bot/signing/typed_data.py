"""StarkNet typed-data builders for Paradex auth requests and orders.

Paradex verifies signatures over SNIP-12 (revision 0) typed data with a
fixed "Paradex" domain. Field order inside each type is part of the hash:
reordering any entry produces a signature the exchange rejects.
"""

from typing import Any

from starknet_py.cairo.felt import encode_shortstring

from paradex_bot.exceptions import ValidationError
from paradex_bot.models import OrderDetails, OrderSide, OrderType
from paradex_bot.signing.quantums import to_quantums

DOMAIN_NAME = "Paradex"
DOMAIN_VERSION = "1"
SHORT_STRING_MAX_LENGTH = 31

DOMAIN_TYPES: dict[str, list[dict[str, str]]] = {
    "StarkNetDomain": [
        {"name": "name", "type": "felt"},
        {"name": "chainId", "type": "felt"},
        {"name": "version", "type": "felt"},
    ],
}

REQUEST_TYPE: list[dict[str, str]] = [
    {"name": "method", "type": "felt"},  # string
    {"name": "path", "type": "felt"},  # string
    {"name": "body", "type": "felt"},  # string
    {"name": "timestamp", "type": "felt"},  # unix seconds
    {"name": "expiration", "type": "felt"},  # unix seconds
]

ORDER_TYPE: list[dict[str, str]] = [
    {"name": "timestamp", "type": "felt"},  # unix ms, acts as a nonce
    {"name": "market", "type": "felt"},  # 'BTC-USD-PERP'
    {"name": "side", "type": "felt"},  # '1' BUY, '2' SELL
    {"name": "orderType", "type": "felt"},  # 'LIMIT' or 'MARKET'
    {"name": "size", "type": "felt"},  # quantums
    {"name": "price", "type": "felt"},  # quantums, '0' for market orders
]

_SIDE_ENCODING = {OrderSide.BUY: "1", OrderSide.SELL: "2"}


def encode_short_string(text: str) -> str:
    """Pack an ASCII short string (<= 31 chars) into a hex felt string."""
    if not text.isascii():
        raise ValidationError(f"Short string must be ASCII: {text!r}")
    if len(text) > SHORT_STRING_MAX_LENGTH:
        raise ValidationError(
            f"Short string exceeds {SHORT_STRING_MAX_LENGTH} characters: {text!r}"
        )
    if not text:
        return hex(0)
    return hex(encode_shortstring(text))


def encode_side(side: OrderSide | str) -> str:
    """Map BUY -> "1" and SELL -> "2". Anything else is rejected."""
    try:
        return _SIDE_ENCODING[OrderSide(side)]
    except ValueError as exc:
        raise ValidationError(f"Invalid order side: {side!r}") from exc


def build_domain(chain_id: str) -> dict[str, str]:
    """Paradex signing domain. chain_id is already felt-encoded."""
    return {"name": DOMAIN_NAME, "chainId": chain_id, "version": DOMAIN_VERSION}


def build_auth_typed_data(message: dict[str, Any], chain_id: str) -> dict[str, Any]:
    """Typed data for the auth challenge (primary type Request)."""
    return {
        "domain": build_domain(chain_id),
        "primaryType": "Request",
        "types": {**DOMAIN_TYPES, "Request": REQUEST_TYPE},
        "message": message,
    }


def build_order_typed_data(message: dict[str, Any], chain_id: str) -> dict[str, Any]:
    """Typed data for a new order (primary type Order)."""
    return {
        "domain": build_domain(chain_id),
        "primaryType": "Order",
        "types": {**DOMAIN_TYPES, "Order": ORDER_TYPE},
        "message": message,
    }


def build_auth_message(
    timestamp: int,
    expiration: int,
    method: str = "POST",
    path: str = "/v1/auth",
    body: str = "",
) -> dict[str, str]:
    """Request message fields with strings packed into felts."""
    return {
        "method": encode_short_string(method),
        "path": encode_short_string(path),
        "body": encode_short_string(body),
        "timestamp": str(timestamp),
        "expiration": str(expiration),
    }


def build_order_message(
    details: OrderDetails, timestamp_ms: int, precision: int = 8
) -> dict[str, str]:
    """Quantize and encode order fields for signing.

    Price defaults to "0" when absent (market orders).
    """
    return {
        "timestamp": str(timestamp_ms),
        "market": encode_short_string(details.market),
        "side": encode_side(details.side),
        "orderType": encode_short_string(OrderType(details.order_type).value),
        "size": to_quantums(details.size, precision),
        "price": to_quantums(details.price or "0", precision),
    }
