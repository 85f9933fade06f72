"""StarkNet typed-data message hashing.

The hash is H(H("StarkNet Message") || H(domain) || account || H(message)).
We delegate the whole computation to starknet-py rather than re-deriving
it: felt packing mistakes silently yield signatures Paradex rejects.
"""

from typing import Any

from marshmallow import ValidationError as SchemaValidationError
from starknet_py.utils.typed_data import TypedData

from paradex_bot.exceptions import ValidationError


def parse_felt(value: str | int) -> int:
    """Parse a hex ("0x...") or decimal felt string."""
    if isinstance(value, int):
        return value
    text = value.strip()
    try:
        return int(text, 16) if text.lower().startswith("0x") else int(text)
    except ValueError as exc:
        raise ValidationError(f"Not a felt value: {value!r}") from exc


def message_hash(typed_data: dict[str, Any], signer_address: str | int) -> int:
    """Compute the typed-data hash of a message bound to the signer's account.

    Args:
        typed_data: Dict with domain, types, primaryType and message.
        signer_address: StarkNet account address (hex or decimal).

    Returns:
        The message hash as an int felt.
    """
    address = parse_felt(signer_address)
    try:
        data = TypedData.from_dict(typed_data)
        return data.message_hash(address)
    except (SchemaValidationError, KeyError, TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid typed data: {exc}") from exc
