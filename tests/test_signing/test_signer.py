"""Tests for STARK curve signing -- determinism, verification and key checks."""

import json

import pytest

from paradex_bot.exceptions import CryptoError
from paradex_bot.models import Signature
from paradex_bot.signing.signer import (
    EC_ORDER,
    parse_private_key,
    serialize_signature,
    sign,
    verify,
)

PRIVATE_KEY = "0x04a1b2c3d4e5f60718293a4b5c6d7e8f90a1b2c3d4e5f60718293a4b5c6d7e8f"
MSG_HASH = 0x2F1D3C4B5A69788796A5B4C3D2E1F00112233445566778899AABBCCDDEEFF00


class TestSign:
    def test_deterministic(self) -> None:
        first = sign(MSG_HASH, PRIVATE_KEY)
        second = sign(MSG_HASH, PRIVATE_KEY)
        assert first == second
        assert (first.r, first.s) == (second.r, second.s)

    def test_verifies_against_public_key(self) -> None:
        signature = sign(MSG_HASH, PRIVATE_KEY)
        assert verify(MSG_HASH, signature, PRIVATE_KEY) is True

    def test_does_not_verify_other_hash(self) -> None:
        signature = sign(MSG_HASH, PRIVATE_KEY)
        assert verify(MSG_HASH + 1, signature, PRIVATE_KEY) is False

    def test_different_hash_different_signature(self) -> None:
        assert sign(MSG_HASH, PRIVATE_KEY) != sign(MSG_HASH + 1, PRIVATE_KEY)

    def test_int_and_hex_keys_equivalent(self) -> None:
        assert sign(MSG_HASH, PRIVATE_KEY) == sign(MSG_HASH, int(PRIVATE_KEY, 16))

    def test_components_within_curve_order(self) -> None:
        signature = sign(MSG_HASH, PRIVATE_KEY)
        assert 0 < signature.r < EC_ORDER
        assert 0 < signature.s < EC_ORDER


class TestPrivateKeyValidation:
    @pytest.mark.parametrize("key", ["0x0", "0", 0, EC_ORDER, hex(EC_ORDER + 5), -1])
    def test_out_of_range_rejected(self, key) -> None:
        with pytest.raises(CryptoError):
            sign(MSG_HASH, key)

    @pytest.mark.parametrize("key", ["", "not-a-key", "0xZZ"])
    def test_unparseable_rejected(self, key: str) -> None:
        with pytest.raises(CryptoError):
            parse_private_key(key)

    def test_error_does_not_echo_key(self) -> None:
        with pytest.raises(CryptoError) as exc_info:
            parse_private_key("0xdeadbeefnotakey")
        assert "deadbeef" not in str(exc_info.value)


class TestSerializeSignature:
    def test_json_array_of_decimal_strings(self) -> None:
        encoded = serialize_signature(Signature(r=123, s=456))
        assert encoded == '["123","456"]'
        assert json.loads(encoded) == ["123", "456"]

    def test_no_hex_or_padding(self) -> None:
        signature = sign(MSG_HASH, PRIVATE_KEY)
        r_str, s_str = json.loads(serialize_signature(signature))
        assert r_str == str(signature.r)
        assert s_str == str(signature.s)
        assert r_str.isdigit() and s_str.isdigit()
        assert not r_str.startswith("0")
