"""
Muxed (multiplexed) account helpers.

A muxed account (CAP-27 / SEP-23) resolves a single G... account into many
logical sub-accounts by embedding a 64-bit id in an M... address.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Union

from ..crypto.strkey import StrKey
from ..runtime.errors import InvalidField, InvalidStrKey


@dataclass(frozen=True)
class MuxedAccountInfo:
    """Components of a muxed address."""

    base_address: str
    muxed_id: int
    muxed_address: str


def _parse_id(muxed_id: Union[int, str]) -> int:
    if isinstance(muxed_id, bool):
        raise InvalidField("Muxed account id must be a positive integer", field="muxed_id")
    if isinstance(muxed_id, str):
        if not re.fullmatch(r"\d+", muxed_id.strip()):
            raise InvalidField(f"Muxed account id must be a positive integer: {muxed_id!r}",
                               field="muxed_id")
        muxed_id = int(muxed_id.strip())
    if not isinstance(muxed_id, int) or not 0 <= muxed_id <= 0xFFFFFFFFFFFFFFFF:
        raise InvalidField(f"Muxed account id out of range: {muxed_id!r}", field="muxed_id")
    return muxed_id


def create_muxed_account(base_address: str, muxed_id: Union[int, str]) -> MuxedAccountInfo:
    """
    Build an M... address from a base G... address and an id.

    Args:
        base_address: Base account address (must start with G)
        muxed_id: Unsigned 64-bit id, as int or decimal string

    Returns:
        MuxedAccountInfo with the generated address

    Raises:
        InvalidStrKey: If the base address is not a valid G... address
        InvalidField: If the id is not an unsigned 64-bit integer
    """
    if not isinstance(base_address, str) or not base_address.startswith("G"):
        raise InvalidStrKey("Base account address should start with G", field="base_address")
    key = StrKey.decode_ed25519_public_key(base_address)
    parsed_id = _parse_id(muxed_id)
    return MuxedAccountInfo(
        base_address=base_address,
        muxed_id=parsed_id,
        muxed_address=StrKey.encode_muxed_account(key, parsed_id),
    )


def parse_muxed_account(muxed_address: str) -> MuxedAccountInfo:
    """
    Split an M... address into its base address and id.

    Raises:
        InvalidStrKey: If the address is not a valid M... address
    """
    if not isinstance(muxed_address, str) or not muxed_address.startswith("M"):
        raise InvalidStrKey("Muxed account address should start with M", field="muxed_address")
    key, muxed_id = StrKey.decode_muxed_account(muxed_address)
    return MuxedAccountInfo(
        base_address=StrKey.encode_ed25519_public_key(key),
        muxed_id=muxed_id,
        muxed_address=muxed_address,
    )


__all__ = ["MuxedAccountInfo", "create_muxed_account", "parse_muxed_account"]
