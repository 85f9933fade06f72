"""Auth and order request composition.

Pipeline per request: build timestamps -> quantize (orders) -> typed data
-> message hash -> sign -> emit headers (auth) or body fields (orders).

Orders are validated before any signing work so a bad price never costs a
signature or a round trip.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from paradex_bot.config import AuthSettings, OrderSettings
from paradex_bot.exceptions import ParseError, ValidationError
from paradex_bot.logging import get_logger
from paradex_bot.models import (
    Account,
    OrderDetails,
    OrderSide,
    OrderType,
    Signature,
    SystemConfig,
    TimeInForce,
)
from paradex_bot.signing.hasher import message_hash
from paradex_bot.signing.quantums import parse_decimal, to_quantums
from paradex_bot.signing.signer import serialize_signature, sign
from paradex_bot.signing.typed_data import (
    build_auth_message,
    build_auth_typed_data,
    build_order_message,
    build_order_typed_data,
    encode_short_string,
)

logger = get_logger(__name__)

AUTH_METHOD = "POST"
AUTH_PATH = "/v1/auth"


@dataclass(frozen=True)
class AuthHeaders:
    """Signed auth challenge, ready for POST /auth."""

    account: str
    signature: str
    timestamp: int
    expiration: int

    def as_dict(self) -> dict[str, str]:
        return {
            "PARADEX-STARKNET-ACCOUNT": self.account,
            "PARADEX-STARKNET-SIGNATURE": self.signature,
            "PARADEX-TIMESTAMP": str(self.timestamp),
            "PARADEX-SIGNATURE-EXPIRATION": str(self.expiration),
        }


class RequestComposer:
    """Builds signed auth headers and order bodies for one account.

    Args:
        config: API target and chain id.
        account: Signing account.
        auth_settings: Signature expiry for auth challenges.
        order_settings: Quantum precision and default instruction.
        clock: Returns the current unix time in seconds (float).
        signer: Signing primitive; injectable for instrumentation in tests.
    """

    def __init__(
        self,
        config: SystemConfig,
        account: Account,
        auth_settings: AuthSettings | None = None,
        order_settings: OrderSettings | None = None,
        clock: Callable[[], float] = time.time,
        signer: Callable[[int, str | int], Signature] = sign,
    ) -> None:
        self._config = config
        self._account = account
        self._auth_settings = auth_settings or AuthSettings()
        self._order_settings = order_settings or OrderSettings()
        self._clock = clock
        self._signer = signer
        self._chain_id_felt = encode_short_string(config.chain_id)

    @property
    def account_address(self) -> str:
        return self._account.address

    def _sign_typed_data(self, typed_data: dict[str, Any]) -> str:
        msg_hash = message_hash(typed_data, self._account.address)
        signature = self._signer(msg_hash, self._account.private_key)
        return serialize_signature(signature)

    def generate_auth_timestamps(self) -> tuple[int, int]:
        """Return (timestamp, expiration) in unix seconds."""
        timestamp = int(self._clock())
        return timestamp, timestamp + self._auth_settings.signature_expiry_seconds

    def compose_auth_headers(self) -> AuthHeaders:
        """Sign the POST /v1/auth challenge for the account."""
        timestamp, expiration = self.generate_auth_timestamps()
        message = build_auth_message(
            timestamp, expiration, method=AUTH_METHOD, path=AUTH_PATH, body=""
        )
        typed_data = build_auth_typed_data(message, self._chain_id_felt)
        signature = self._sign_typed_data(typed_data)

        logger.debug(
            "auth_request_signed",
            account=self._account.address,
            timestamp=timestamp,
            expiration=expiration,
        )
        return AuthHeaders(
            account=self._account.address,
            signature=signature,
            timestamp=timestamp,
            expiration=expiration,
        )

    def compose_order(self, details: OrderDetails) -> dict[str, Any]:
        """Validate, quantize and sign an order.

        Returns:
            JSON body for POST /orders: the order fields plus signature
            and signature_timestamp.

        Raises:
            ValidationError: Before any signing, if the order is malformed.
        """
        precision = self._order_settings.quantum_precision
        size, price = validate_order(details, precision)

        timestamp_ms = int(self._clock() * 1000)
        message = build_order_message(details, timestamp_ms, precision=precision)
        typed_data = build_order_typed_data(message, self._chain_id_felt)
        signature = self._sign_typed_data(typed_data)

        instruction = details.instruction or TimeInForce(
            self._order_settings.default_instruction
        )
        body: dict[str, Any] = {
            "market": details.market,
            "side": OrderSide(details.side).value,
            "type": OrderType(details.order_type).value,
            "size": size,
            "price": price or "0",
            "instruction": TimeInForce(instruction).value,
        }
        if details.client_id:
            body["client_id"] = details.client_id
        body["signature"] = signature
        body["signature_timestamp"] = timestamp_ms

        logger.debug(
            "order_signed",
            market=details.market,
            side=body["side"],
            order_type=body["type"],
            signature_timestamp=timestamp_ms,
        )
        return body


def _positive_amount(name: str, raw: str, precision: int) -> str:
    """Parse an amount that must stay positive once quantized.

    Returns the normalized plain-decimal string sent in the order body.
    """
    try:
        value = parse_decimal(raw)
    except ParseError as exc:
        raise ValidationError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValidationError(f"{name} must be strictly positive, got {raw!r}")
    if to_quantums(value, precision) == "0":
        raise ValidationError(
            f"{name} {raw!r} rounds to zero at {precision} decimal places"
        )
    return format(value, "f")


def validate_order(
    details: OrderDetails, precision: int = 8
) -> tuple[str, str | None]:
    """Reject malformed orders before signing.

    Checks: market present, known side and type, size > 0, price > 0 when
    given, and a price for LIMIT orders. Size and price must also be
    non-zero at the signing precision.

    Returns:
        (size, price) as normalized decimal strings; price is None when
        absent.
    """
    if not details.market:
        raise ValidationError("Order market is required")
    try:
        OrderSide(details.side)
    except ValueError as exc:
        raise ValidationError(f"Invalid order side: {details.side!r}") from exc
    try:
        order_type = OrderType(details.order_type)
    except ValueError as exc:
        raise ValidationError(f"Invalid order type: {details.order_type!r}") from exc

    size = _positive_amount("size", details.size, precision)
    price = None
    if details.price is not None:
        price = _positive_amount("price", details.price, precision)
    elif order_type is OrderType.LIMIT:
        raise ValidationError("LIMIT orders require a price")
    return size, price
