"""Tests for typed-data message hashing (delegated to starknet-py)."""

import copy

import pytest

from paradex_bot.exceptions import ValidationError
from paradex_bot.signing.hasher import message_hash, parse_felt
from paradex_bot.signing.typed_data import (
    build_auth_message,
    build_auth_typed_data,
    encode_short_string,
)

ADDRESS = "0x0129f9a1b4fb7b1d8ec1b7b3e6a1a2b5c4d3e2f1a0b9c8d7e6f5a4b3c2d1e0f9"
CHAIN_ID = encode_short_string("PRIVATE_SN_POTC_SEPOLIA")


@pytest.fixture
def auth_typed_data() -> dict:
    return build_auth_typed_data(build_auth_message(1700000000, 1700604800), CHAIN_ID)


class TestMessageHash:
    def test_pure_function_of_inputs(self, auth_typed_data: dict) -> None:
        first = message_hash(auth_typed_data, ADDRESS)
        second = message_hash(copy.deepcopy(auth_typed_data), ADDRESS)
        assert first == second
        assert isinstance(first, int)
        assert first > 0

    def test_address_forms_are_equivalent(self, auth_typed_data: dict) -> None:
        as_int = int(ADDRESS, 16)
        assert message_hash(auth_typed_data, ADDRESS) == message_hash(
            auth_typed_data, as_int
        )
        assert message_hash(auth_typed_data, ADDRESS) == message_hash(
            auth_typed_data, str(as_int)
        )

    def test_bound_to_signer_address(self, auth_typed_data: dict) -> None:
        assert message_hash(auth_typed_data, ADDRESS) != message_hash(
            auth_typed_data, "0x1"
        )

    def test_bound_to_chain(self) -> None:
        message = build_auth_message(1700000000, 1700604800)
        testnet = build_auth_typed_data(message, CHAIN_ID)
        mainnet = build_auth_typed_data(
            message, encode_short_string("PRIVATE_SN_PARACLEAR_MAINNET")
        )
        assert message_hash(testnet, ADDRESS) != message_hash(mainnet, ADDRESS)

    def test_timestamp_changes_hash(self) -> None:
        a = build_auth_typed_data(build_auth_message(1, 2), CHAIN_ID)
        b = build_auth_typed_data(build_auth_message(1, 3), CHAIN_ID)
        assert message_hash(a, ADDRESS) != message_hash(b, ADDRESS)

    def test_field_order_is_part_of_the_hash(self, auth_typed_data: dict) -> None:
        reordered = copy.deepcopy(auth_typed_data)
        fields = reordered["types"]["Request"]
        fields[0], fields[1] = fields[1], fields[0]
        assert message_hash(auth_typed_data, ADDRESS) != message_hash(
            reordered, ADDRESS
        )

    def test_malformed_address_rejected(self, auth_typed_data: dict) -> None:
        with pytest.raises(ValidationError):
            message_hash(auth_typed_data, "not-an-address")

    def test_missing_primary_type_rejected(self, auth_typed_data: dict) -> None:
        broken = copy.deepcopy(auth_typed_data)
        del broken["primaryType"]
        with pytest.raises(ValidationError):
            message_hash(broken, ADDRESS)


class TestKnownVectors:
    """Fixed hashes published with the StarkNet typed-data reference examples."""

    MAIL_TYPED_DATA = {
        "types": {
            "StarkNetDomain": [
                {"name": "name", "type": "felt"},
                {"name": "version", "type": "felt"},
                {"name": "chainId", "type": "felt"},
            ],
            "Person": [
                {"name": "name", "type": "felt"},
                {"name": "wallet", "type": "felt"},
            ],
            "Mail": [
                {"name": "from", "type": "Person"},
                {"name": "to", "type": "Person"},
                {"name": "contents", "type": "felt"},
            ],
        },
        "primaryType": "Mail",
        "domain": {"name": "StarkNet Mail", "version": "1", "chainId": 1},
        "message": {
            "from": {
                "name": "Cow",
                "wallet": "0xCD2a3d9F938E13CD947Ec05AbC7FE734Df8DD826",
            },
            "to": {
                "name": "Bob",
                "wallet": "0xbBbBBBBbbBBBbbbBbbBbbbbBBbBbbbbBbBbbBBbB",
            },
            "contents": "Hello, Bob!",
        },
    }

    def test_reference_mail_message_hash(self) -> None:
        assert message_hash(
            self.MAIL_TYPED_DATA, "0xcd2a3d9f938e13cd947ec05abc7fe734df8dd826"
        ) == 0x6FCFF244F63E38B9D88B9E3378D44757710D1B244282B435CB472053C8D78D0

    def test_chain_id_felt_encoding(self) -> None:
        assert CHAIN_ID == "0x505249564154455f534e5f504f54435f5345504f4c4941"
        assert encode_short_string("Paradex") == "0x50617261646578"

    def test_felt_encoded_and_raw_short_strings_hash_identically(
        self, auth_typed_data: dict
    ) -> None:
        raw = copy.deepcopy(auth_typed_data)
        raw["domain"]["name"] = "Paradex"
        raw["domain"]["chainId"] = "PRIVATE_SN_POTC_SEPOLIA"
        assert message_hash(raw, ADDRESS) == message_hash(auth_typed_data, ADDRESS)


class TestParseFelt:
    def test_hex(self) -> None:
        assert parse_felt("0x10") == 16

    def test_decimal(self) -> None:
        assert parse_felt("16") == 16

    def test_int_passthrough(self) -> None:
        assert parse_felt(16) == 16
