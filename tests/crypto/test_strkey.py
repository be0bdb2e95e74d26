"""
StrKey encoding tests.
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
from helpers import ZERO_ADDRESS, mk_raw_key

from stellar_txbuild.crypto.strkey import StrKey, VersionByte, decode_check, encode_check, version_of
from stellar_txbuild.runtime.errors import InvalidStrKey


class TestAccountIds:

    def test_zero_key_vector(self):
        assert StrKey.encode_ed25519_public_key(bytes(32)) == ZERO_ADDRESS
        assert StrKey.decode_ed25519_public_key(ZERO_ADDRESS) == bytes(32)

    @pytest.mark.parametrize("seed", [1, 7, 255])
    def test_roundtrip(self, seed):
        address = StrKey.encode_ed25519_public_key(mk_raw_key(seed))
        assert address.startswith("G")
        assert len(address) == 56
        assert StrKey.decode_ed25519_public_key(address) == mk_raw_key(seed)
        assert StrKey.is_valid_ed25519_public_key(address)

    def test_checksum_mismatch(self):
        corrupted = ZERO_ADDRESS[:-1] + ("G" if ZERO_ADDRESS[-1] != "G" else "H")
        assert not StrKey.is_valid_ed25519_public_key(corrupted)
        with pytest.raises(InvalidStrKey):
            StrKey.decode_ed25519_public_key(corrupted)

    @pytest.mark.parametrize("bad", ["", "G", "not a key", ZERO_ADDRESS.lower(), ZERO_ADDRESS + "A"])
    def test_malformed(self, bad):
        assert not StrKey.is_valid_ed25519_public_key(bad)

    def test_wrong_version(self):
        pre_auth = StrKey.encode_pre_auth_tx(bytes(32))
        with pytest.raises(InvalidStrKey, match="version byte"):
            StrKey.decode_ed25519_public_key(pre_auth)

    def test_wrong_payload_size(self):
        with pytest.raises(InvalidStrKey):
            encode_check(VersionByte.ED25519_PUBLIC_KEY, bytes(31))


class TestOtherKeyTypes:

    @pytest.mark.parametrize("encode,decode,prefix", [
        (StrKey.encode_pre_auth_tx, StrKey.decode_pre_auth_tx, "T"),
        (StrKey.encode_sha256_hash, StrKey.decode_sha256_hash, "X"),
        (StrKey.encode_liquidity_pool, StrKey.decode_liquidity_pool, "L"),
        (StrKey.encode_claimable_balance, StrKey.decode_claimable_balance, "B"),
    ])
    def test_roundtrip(self, encode, decode, prefix):
        encoded = encode(mk_raw_key(3))
        assert encoded.startswith(prefix)
        assert decode(encoded) == mk_raw_key(3)

    def test_muxed_roundtrip(self):
        address = StrKey.encode_muxed_account(mk_raw_key(1), 2 ** 64 - 1)
        assert address.startswith("M")
        assert len(address) == 69
        assert StrKey.decode_muxed_account(address) == (mk_raw_key(1), 2 ** 64 - 1)

    def test_muxed_id_range(self):
        with pytest.raises(InvalidStrKey):
            StrKey.encode_muxed_account(mk_raw_key(1), 2 ** 64)

    def test_signed_payload_roundtrip(self):
        encoded = StrKey.encode_signed_payload(mk_raw_key(2), b"\x01\x02\x03")
        assert encoded.startswith("P")
        assert StrKey.decode_signed_payload(encoded) == (mk_raw_key(2), b"\x01\x02\x03")

    @pytest.mark.parametrize("payload", [b"", bytes(65)])
    def test_signed_payload_size(self, payload):
        with pytest.raises(InvalidStrKey):
            StrKey.encode_signed_payload(mk_raw_key(2), payload)


@pytest.mark.parametrize("encoded,version", [
    (ZERO_ADDRESS, VersionByte.ED25519_PUBLIC_KEY),
    (StrKey.encode_sha256_hash(bytes(32)), VersionByte.SHA256_HASH),
    (StrKey.encode_muxed_account(bytes(32), 5), VersionByte.MUXED_ACCOUNT),
])
def test_version_of(encoded, version):
    assert version_of(encoded) == version
    assert decode_check(version, encoded)


def test_version_of_unknown_prefix():
    with pytest.raises(InvalidStrKey):
        version_of("ZABC")
