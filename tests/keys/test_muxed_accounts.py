"""
Muxed account helper tests.
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
from helpers import mk_address, mk_raw_key

from stellar_txbuild.crypto.strkey import StrKey
from stellar_txbuild.keys import MuxedAccountInfo, create_muxed_account, parse_muxed_account
from stellar_txbuild.runtime.errors import InvalidField, InvalidStrKey


def test_create_and_parse():
    info = create_muxed_account(mk_address(1), "12345")
    assert isinstance(info, MuxedAccountInfo)
    assert info.muxed_id == 12345
    assert info.muxed_address.startswith("M")
    assert info.muxed_address == StrKey.encode_muxed_account(mk_raw_key(1), 12345)

    parsed = parse_muxed_account(info.muxed_address)
    assert parsed == info


@pytest.mark.parametrize("muxed_id", [0, 2 ** 64 - 1, "18446744073709551615"])
def test_id_bounds(muxed_id):
    info = create_muxed_account(mk_address(2), muxed_id)
    assert parse_muxed_account(info.muxed_address).muxed_id == int(muxed_id)


@pytest.mark.parametrize("muxed_id", [-1, 2 ** 64, "abc", "1.5", True])
def test_invalid_id(muxed_id):
    with pytest.raises(InvalidField):
        create_muxed_account(mk_address(2), muxed_id)


def test_base_must_be_g_address():
    muxed = create_muxed_account(mk_address(1), 1).muxed_address
    with pytest.raises(InvalidStrKey, match="should start with G"):
        create_muxed_account(muxed, 1)


def test_parse_requires_m_address():
    with pytest.raises(InvalidStrKey, match="should start with M"):
        parse_muxed_account(mk_address(1))


def test_parse_rejects_bad_checksum():
    muxed = create_muxed_account(mk_address(1), 1).muxed_address
    corrupted = muxed[:-1] + ("A" if muxed[-1] != "A" else "B")
    with pytest.raises(InvalidStrKey):
        parse_muxed_account(corrupted)
