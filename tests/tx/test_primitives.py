"""
Primitive field codec tests: amounts, prices, flags, signers, assets and ids.
"""

import hashlib
from decimal import Decimal
from fractions import Fraction

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
from helpers import mk_address, mk_asset, mk_raw_key

from stellar_txbuild.codec.xdr_json import default_codec
from stellar_txbuild.crypto.strkey import StrKey
from stellar_txbuild.enums import AccountFlag, TrustLineFlag
from stellar_txbuild.runtime.errors import (
    InvalidAmount, InvalidAsset, InvalidField, InvalidFraction, InvalidSignerKey, UnknownFlag,
)
from stellar_txbuild.tx.primitives import (
    MAX_INT64, MAX_INT64_STR,
    best_rational_approximation, decode_amount, decode_asset, decode_change_trust_asset,
    decode_data_value, decode_flags, decode_limit, decode_signer_key, decode_trust_line_asset,
    encode_amount, encode_asset, encode_assets, encode_balance_id, encode_change_trust_asset,
    encode_data_value, encode_flags, encode_integer, encode_limit, encode_pool_id, encode_price,
    encode_signer_key, encode_trust_line_asset, liquidity_pool_id, signer_key_strkey,
)


class TestAmounts:

    @pytest.mark.parametrize("value,stroops", [
        ("100", 1_000_000_000),
        ("0.0000001", 1),
        ("1.5", 15_000_000),
        (".5", 5_000_000),
        ("7.", 70_000_000),
        (" 2 ", 20_000_000),
        (3, 30_000_000),
        (Decimal("0.25"), 2_500_000),
        ("0", 0),
        ("922337203685.4775807", MAX_INT64),
    ])
    def test_encode(self, value, stroops):
        assert encode_amount(value) == stroops

    @pytest.mark.parametrize("value,match", [
        ("10000.00000001", "more than 7 decimal places"),
        ("922337203685.4775808", "too large"),
        ("-1", "not a valid decimal"),
        ("1e5", "not a valid decimal"),
        ("abc", "not a valid decimal"),
        ("", "is required"),
        (None, "is required"),
        (1.5, "decimal string"),
        (True, "decimal string"),
    ])
    def test_encode_rejects(self, value, match):
        with pytest.raises(InvalidAmount, match=match):
            encode_amount(value, "send_max")

    def test_error_names_field(self):
        with pytest.raises(InvalidAmount) as exc_info:
            encode_amount("0.00000001", "starting_balance")
        assert exc_info.value.field == "starting_balance"

    def test_negative_decimal_instance(self):
        with pytest.raises(InvalidAmount, match="negative"):
            encode_amount(Decimal("-1"))

    @pytest.mark.parametrize("stroops,text", [
        (1_000_000_000, "100"),
        (5_000_000, "0.5"),
        (1, "0.0000001"),
        (0, "0"),
        (MAX_INT64, "922337203685.4775807"),
    ])
    def test_decode(self, stroops, text):
        assert decode_amount(stroops) == text

    def test_limit(self):
        assert encode_limit(None) == MAX_INT64
        assert encode_limit(MAX_INT64_STR) == MAX_INT64
        assert encode_limit("1000") == 10_000_000_000
        assert decode_limit(MAX_INT64) == MAX_INT64_STR
        assert decode_limit(10_000_000_000) == "1000"

    @pytest.mark.parametrize("value,expected", [(5, 5), ("42", 42), (" -3 ", -3)])
    def test_integer(self, value, expected):
        assert encode_integer(value) == expected

    @pytest.mark.parametrize("value", [True, "1.0", "x", None, 2.0])
    def test_integer_rejects(self, value):
        with pytest.raises(InvalidField):
            encode_integer(value, "bump_to")


class TestPrices:

    @pytest.mark.parametrize("value,expected", [
        ("1.5", {"n": 3, "d": 2}),
        ("0.5", {"n": 1, "d": 2}),
        ("0.1", {"n": 1, "d": 10}),
        ("2", {"n": 2, "d": 1}),
        ("0.3333333", {"n": 3333333, "d": 10000000}),
        ("1.41421356", {"n": 35355339, "d": 25000000}),
        ("123.456", {"n": 15432, "d": 125}),
        ("3.14159", {"n": 314159, "d": 100000}),
        ("0.618034", {"n": 309017, "d": 500000}),
        ("99999.9999999", {"n": 100000, "d": 1}),
        ({"n": 7, "d": 3}, {"n": 7, "d": 3}),
        ({"numerator": "5", "denominator": "4"}, {"n": 5, "d": 4}),
        ([1, 8], {"n": 1, "d": 8}),
        ({"type": "number", "value": "1.5"}, {"n": 3, "d": 2}),
        ({"type": "fraction", "value": {"n": 2, "d": 9}}, {"n": 2, "d": 9}),
    ])
    def test_encode(self, value, expected):
        assert encode_price(value) == expected

    @pytest.mark.parametrize("value,match", [
        ("0", "must be positive"),
        ("", "is required"),
        (None, "is required"),
        ("abc", "not a valid decimal"),
        ("3000000000", "Couldn't find approximation"),
        ({"n": 1}, "missing its denominator"),
        ({"n": 0, "d": 1}, "between 1 and"),
        ({"n": 1, "d": 2 ** 31}, "between 1 and"),
        ({"n": "x", "d": 1}, "must be an integer"),
        ([1, 2, 3], "pair"),
    ])
    def test_encode_rejects(self, value, match):
        with pytest.raises(InvalidFraction, match=match):
            encode_price(value, "min_price")

    def test_approximation_is_bounded(self):
        n, d = best_rational_approximation(Fraction(1, 3))
        assert 0 < n <= 2 ** 31 - 1
        assert 0 < d <= 2 ** 31 - 1
        assert abs(Fraction(n, d) - Fraction(1, 3)) < Fraction(1, 10 ** 9)

    def test_approximation_of_zero_fails(self):
        with pytest.raises(InvalidFraction):
            best_rational_approximation(Fraction(0))


class TestFlags:

    def test_account_flags(self):
        assert encode_flags(["auth_required", "AUTH_REVOCABLE"], AccountFlag) == 3
        assert encode_flags([AccountFlag.AUTH_CLAWBACK_ENABLED], AccountFlag) == 8
        assert encode_flags("auth_immutable", AccountFlag) == 4
        assert encode_flags(None, AccountFlag) == 0
        assert encode_flags([], AccountFlag) == 0

    def test_trust_line_flags(self):
        names = ["authorized", "authorized_to_maintain_liabilities", "clawback_enabled"]
        assert encode_flags(names, TrustLineFlag) == 7

    def test_unknown_flag(self):
        with pytest.raises(UnknownFlag, match="authorized") as exc_info:
            encode_flags(["authorized"], AccountFlag, "set_flags")
        assert exc_info.value.field == "set_flags"

    def test_decode(self):
        assert decode_flags(5, AccountFlag) == ["auth_required", "auth_immutable"]
        assert decode_flags(0, TrustLineFlag) == []
        with pytest.raises(UnknownFlag):
            decode_flags(16, AccountFlag)


class TestSigners:

    def test_public_key_passes_through(self):
        signer = {"type": "ed25519PublicKey", "key": mk_address(3), "weight": "1"}
        assert encode_signer_key(signer) == {"key": mk_address(3), "weight": 1}

    @pytest.mark.parametrize("signer_type,prefix,decode", [
        ("sha256Hash", "X", StrKey.decode_sha256_hash),
        ("preAuthTx", "T", StrKey.decode_pre_auth_tx),
        ("hash_x", "X", StrKey.decode_sha256_hash),
    ])
    def test_hex_payloads(self, signer_type, prefix, decode):
        key = signer_key_strkey({"type": signer_type, "key": "AB" * 32})
        assert key.startswith(prefix)
        assert decode(key) == bytes([0xAB]) * 32

    @pytest.mark.parametrize("signer,match", [
        ({"type": "sha256Hash", "key": "ab" * 31, "weight": 1}, "32 bytes"),
        ({"type": "sha256Hash", "key": "zz" * 32, "weight": 1}, "hex encoded"),
        ({"type": "ed25519SignedPayload", "key": "x", "weight": 1}, "Unknown signer key type"),
        ({"type": "ed25519PublicKey", "key": "", "weight": 1}, "public key is required"),
        ({"type": "ed25519PublicKey", "key": "G" + "A" * 55}, "weight is required"),
        ({"type": "ed25519PublicKey", "key": "G" + "A" * 55, "weight": "x"}, "weight must be an integer"),
        ("GABC", "must be an object"),
    ])
    def test_rejects(self, signer, match):
        with pytest.raises(InvalidSignerKey, match=match):
            encode_signer_key(signer) if isinstance(signer, dict) else signer_key_strkey(signer)

    def test_decode(self):
        hash_key = StrKey.encode_sha256_hash(mk_raw_key(5))
        assert decode_signer_key(hash_key, 2) == {"type": "sha256Hash", "key": "05" * 32, "weight": 2}
        assert decode_signer_key(mk_address(1)) == {"type": "ed25519PublicKey", "key": mk_address(1)}
        pre_auth = StrKey.encode_pre_auth_tx(mk_raw_key(6))
        assert decode_signer_key(pre_auth)["key"] == "06" * 32

    def test_decode_signed_payload_has_no_form(self):
        payload = StrKey.encode_signed_payload(mk_raw_key(1), b"\x01")
        with pytest.raises(InvalidSignerKey):
            decode_signer_key(payload)


class TestAssets:

    def test_native_forms(self):
        assert encode_asset({"type": "native"}) == "native"
        assert encode_asset("native") == "native"
        assert encode_asset("XLM") == "native"

    def test_credit_assets(self):
        assert encode_asset(mk_asset("USD")) == {
            "credit_alphanum4": {"asset_code": "USD", "issuer": mk_address(9)},
        }
        assert encode_asset(mk_asset("LONGCODE")) == {
            "credit_alphanum12": {"asset_code": "LONGCODE", "issuer": mk_address(9)},
        }

    def test_type_inferred_from_code(self):
        assert "credit_alphanum4" in encode_asset({"code": "EUR", "issuer": mk_address(9)})
        assert "credit_alphanum12" in encode_asset({"code": "EURO2", "issuer": mk_address(9)})
        assert encode_asset(f"BTC:{mk_address(9)}") == {
            "credit_alphanum4": {"asset_code": "BTC", "issuer": mk_address(9)},
        }

    @pytest.mark.parametrize("asset,match", [
        ({"type": "credit_alphanum4", "issuer": "G"}, "code is required"),
        ({"type": "credit_alphanum4", "code": "USD"}, "issuer is required"),
        ({"type": "credit_alphanum4", "code": "US-D", "issuer": "G"}, "alphanumeric"),
        ({"type": "credit_alphanum4", "code": "TOOLONG", "issuer": "G"}, "1-4 characters"),
        ({"type": "credit_alphanum12", "code": "USD", "issuer": "G"}, "5-12 characters"),
        ({"type": "pool_share"}, "liquidity pool share"),
        ({"type": "mystery"}, "unknown asset type"),
        ({}, "type is required"),
        (42, "asset descriptor"),
    ])
    def test_rejects(self, asset, match):
        with pytest.raises(InvalidAsset, match=match):
            encode_asset(asset, "dest_asset")

    def test_decode(self):
        assert decode_asset("native") == {"type": "native"}
        assert decode_asset(encode_asset(mk_asset("USD"))) == mk_asset("USD")

    def test_path(self):
        assert encode_assets(None) == []
        path = encode_assets([mk_asset("EUR"), "native"])
        assert path[1] == "native"
        with pytest.raises(InvalidAsset) as exc_info:
            encode_assets([{"code": ""}], "path")
        assert exc_info.value.field == "path[0]"


class TestLiquidityPools:

    def test_pool_id_is_hash_of_parameters(self):
        pool_id = liquidity_pool_id({"type": "native"}, mk_asset("USD"))
        params = {"liquidity_pool_constant_product": {
            "asset_a": "native", "asset_b": encode_asset(mk_asset("USD")), "fee": 30,
        }}
        expected = hashlib.sha256(default_codec().pack("LiquidityPoolParameters", params)).hexdigest()
        assert pool_id == expected
        assert liquidity_pool_id({"type": "native"}, mk_asset("USD"), fee=20) != pool_id

    def test_change_trust_pool_share(self):
        line = {"type": "liquidity_pool_shares", "asset_a": "native", "asset_b": mk_asset("USD")}
        encoded = encode_change_trust_asset(line)
        params = encoded["pool_share"]["liquidity_pool_constant_product"]
        assert params["fee"] == 30
        assert params["asset_a"] == "native"
        decoded = decode_change_trust_asset(encoded)
        assert decoded["type"] == "liquidity_pool_shares"
        assert decoded["asset_b"] == mk_asset("USD")

    def test_change_trust_pool_share_needs_both_assets(self):
        with pytest.raises(InvalidAsset, match="asset_a and asset_b"):
            encode_change_trust_asset({"type": "pool_share", "asset_a": "native"})

    def test_change_trust_plain_asset(self):
        assert encode_change_trust_asset(mk_asset("USD")) == encode_asset(mk_asset("USD"))

    def test_trust_line_asset_pool_id(self):
        encoded = encode_trust_line_asset({"type": "pool_share", "liquidity_pool_id": "AB" * 32})
        assert encoded == {"pool_share": "ab" * 32}
        assert decode_trust_line_asset(encoded) == {
            "type": "liquidity_pool_shares", "liquidity_pool_id": "ab" * 32,
        }

    def test_trust_line_asset_from_parameters(self):
        encoded = encode_trust_line_asset(
            {"type": "pool_share", "asset_a": "native", "asset_b": mk_asset("USD")})
        assert encoded == {"pool_share": liquidity_pool_id("native", mk_asset("USD"))}

    def test_pool_id_forms(self):
        assert encode_pool_id("AB" * 32) == "ab" * 32
        assert encode_pool_id(StrKey.encode_liquidity_pool(mk_raw_key(0xAB))) == "ab" * 32
        with pytest.raises(InvalidField):
            encode_pool_id("ab" * 31)


class TestIdsAndData:

    def test_balance_id_forms(self):
        full = "00000000" + "cd" * 32
        assert encode_balance_id(full) == full
        assert encode_balance_id("CD" * 32) == full
        assert encode_balance_id(StrKey.encode_claimable_balance(mk_raw_key(0xCD))) == full

    @pytest.mark.parametrize("value", ["", "xyz", "cd" * 33, None, 12])
    def test_balance_id_rejects(self, value):
        with pytest.raises(InvalidField):
            encode_balance_id(value)

    def test_data_value(self):
        assert encode_data_value("on") == "6f6e"
        assert encode_data_value(b"\x00\xff") == "00ff"
        assert encode_data_value(None) is None
        assert decode_data_value("6f6e") == "on"
        assert decode_data_value("ff") == b"\xff"
        with pytest.raises(InvalidField):
            encode_data_value(5)
