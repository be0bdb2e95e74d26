"""
StrKey: checksummed base32 encoding for Stellar keys and hashes.

Layout is ``base32(version_byte || payload || crc16_xmodem_le)`` with padding
stripped. The version byte selects the leading character (G, S, M, T, X, P,
B, L).
"""

from __future__ import annotations
import base64
import binascii
import re
import struct
from enum import IntEnum
from typing import Tuple

from ..runtime.errors import InvalidStrKey

_BASE32_RE = re.compile(r"^[A-Z2-7]+$")


class VersionByte(IntEnum):
    """StrKey version bytes."""

    ED25519_PUBLIC_KEY = 6 << 3  # G
    ED25519_SECRET_SEED = 18 << 3  # S
    MUXED_ACCOUNT = 12 << 3  # M
    PRE_AUTH_TX = 19 << 3  # T
    SHA256_HASH = 23 << 3  # X
    SIGNED_PAYLOAD = 15 << 3  # P
    CLAIMABLE_BALANCE = 1 << 3  # B
    LIQUIDITY_POOL = 11 << 3  # L


# Fixed payload sizes; signed payloads are variable (40..100 bytes)
_PAYLOAD_SIZES = {
    VersionByte.ED25519_PUBLIC_KEY: 32,
    VersionByte.ED25519_SECRET_SEED: 32,
    VersionByte.MUXED_ACCOUNT: 40,
    VersionByte.PRE_AUTH_TX: 32,
    VersionByte.SHA256_HASH: 32,
    VersionByte.CLAIMABLE_BALANCE: 33,
    VersionByte.LIQUIDITY_POOL: 32,
}


def _checksum(data: bytes) -> bytes:
    return struct.pack("<H", binascii.crc_hqx(data, 0))


def encode_check(version: VersionByte, payload: bytes) -> str:
    """
    Encode a raw payload as a StrKey string.

    Args:
        version: Version byte selecting the key type
        payload: Raw payload bytes

    Returns:
        StrKey string without base32 padding

    Raises:
        InvalidStrKey: If the payload has the wrong size for the version
    """
    _check_payload_size(version, payload)
    data = bytes([version]) + payload
    return base64.b32encode(data + _checksum(data)).decode("ascii").rstrip("=")


def decode_check(version: VersionByte, encoded: str) -> bytes:
    """
    Decode a StrKey string, verifying version byte and checksum.

    Args:
        version: Expected version byte
        encoded: StrKey string

    Returns:
        Raw payload bytes

    Raises:
        InvalidStrKey: If the string is malformed, of another type, or fails the checksum
    """
    if not isinstance(encoded, str) or not encoded:
        raise InvalidStrKey(f"Invalid {version.name.lower()} StrKey: expected a non-empty string")
    if not _BASE32_RE.match(encoded) or len(encoded) % 8 in (1, 3, 6):
        raise InvalidStrKey(f"Invalid {version.name.lower()} StrKey: {encoded!r}")

    padded = encoded + "=" * (-len(encoded) % 8)
    try:
        raw = base64.b32decode(padded)
    except (binascii.Error, ValueError) as e:
        raise InvalidStrKey(f"Invalid {version.name.lower()} StrKey: {encoded!r}", cause=e)

    if len(raw) < 3:
        raise InvalidStrKey(f"Invalid {version.name.lower()} StrKey: {encoded!r}")

    data, checksum = raw[:-2], raw[-2:]
    if data[0] != version:
        raise InvalidStrKey(
            f"Invalid {version.name.lower()} StrKey: unexpected version byte {data[0]}"
        )
    if _checksum(data) != checksum:
        raise InvalidStrKey(f"Invalid {version.name.lower()} StrKey: checksum mismatch")

    payload = data[1:]
    _check_payload_size(version, payload)

    # Reject encodings with non-zero trailing bits
    if base64.b32encode(raw).decode("ascii").rstrip("=") != encoded:
        raise InvalidStrKey(f"Invalid {version.name.lower()} StrKey: non-canonical encoding")
    return payload


def _check_payload_size(version: VersionByte, payload: bytes) -> None:
    expected = _PAYLOAD_SIZES.get(version)
    if expected is not None:
        if len(payload) != expected:
            raise InvalidStrKey(
                f"Invalid {version.name.lower()} payload: expected {expected} bytes, got {len(payload)}"
            )
        return
    # Signed payload: ed25519 key, 4-byte length, payload padded to 4 bytes
    if len(payload) < 40 or len(payload) > 100 or len(payload) % 4:
        raise InvalidStrKey(f"Invalid signed payload size: {len(payload)}")
    inner_len = struct.unpack(">I", payload[32:36])[0]
    if inner_len < 1 or inner_len > 64 or 36 + inner_len + (-inner_len % 4) != len(payload):
        raise InvalidStrKey(f"Invalid signed payload length prefix: {inner_len}")
    if any(payload[36 + inner_len:]):
        raise InvalidStrKey("Invalid signed payload: non-zero padding")


def version_of(encoded: str) -> VersionByte:
    """
    Identify the StrKey type of a string from its first character.

    Raises:
        InvalidStrKey: If the prefix is not a known StrKey type
    """
    prefixes = {
        "G": VersionByte.ED25519_PUBLIC_KEY,
        "S": VersionByte.ED25519_SECRET_SEED,
        "M": VersionByte.MUXED_ACCOUNT,
        "T": VersionByte.PRE_AUTH_TX,
        "X": VersionByte.SHA256_HASH,
        "P": VersionByte.SIGNED_PAYLOAD,
        "B": VersionByte.CLAIMABLE_BALANCE,
        "L": VersionByte.LIQUIDITY_POOL,
    }
    if not isinstance(encoded, str) or encoded[:1] not in prefixes:
        raise InvalidStrKey(f"Unrecognized StrKey: {encoded!r}")
    return prefixes[encoded[0]]


class StrKey:
    """Typed helpers over ``encode_check``/``decode_check``."""

    @staticmethod
    def encode_ed25519_public_key(data: bytes) -> str:
        return encode_check(VersionByte.ED25519_PUBLIC_KEY, data)

    @staticmethod
    def decode_ed25519_public_key(address: str) -> bytes:
        return decode_check(VersionByte.ED25519_PUBLIC_KEY, address)

    @staticmethod
    def is_valid_ed25519_public_key(address: str) -> bool:
        return _is_valid(VersionByte.ED25519_PUBLIC_KEY, address)

    @staticmethod
    def encode_muxed_account(ed25519: bytes, muxed_id: int) -> str:
        if not 0 <= muxed_id <= 0xFFFFFFFFFFFFFFFF:
            raise InvalidStrKey(f"Muxed account id out of range: {muxed_id}")
        return encode_check(VersionByte.MUXED_ACCOUNT, ed25519 + struct.pack(">Q", muxed_id))

    @staticmethod
    def decode_muxed_account(address: str) -> Tuple[bytes, int]:
        """Return ``(ed25519, id)`` for an M... address."""
        payload = decode_check(VersionByte.MUXED_ACCOUNT, address)
        return payload[:32], struct.unpack(">Q", payload[32:])[0]

    @staticmethod
    def encode_pre_auth_tx(data: bytes) -> str:
        return encode_check(VersionByte.PRE_AUTH_TX, data)

    @staticmethod
    def decode_pre_auth_tx(encoded: str) -> bytes:
        return decode_check(VersionByte.PRE_AUTH_TX, encoded)

    @staticmethod
    def encode_sha256_hash(data: bytes) -> str:
        return encode_check(VersionByte.SHA256_HASH, data)

    @staticmethod
    def decode_sha256_hash(encoded: str) -> bytes:
        return decode_check(VersionByte.SHA256_HASH, encoded)

    @staticmethod
    def encode_signed_payload(ed25519: bytes, payload: bytes) -> str:
        if not 1 <= len(payload) <= 64:
            raise InvalidStrKey(f"Signed payload must be 1-64 bytes, got {len(payload)}")
        body = ed25519 + struct.pack(">I", len(payload)) + payload + b"\x00" * (-len(payload) % 4)
        return encode_check(VersionByte.SIGNED_PAYLOAD, body)

    @staticmethod
    def decode_signed_payload(encoded: str) -> Tuple[bytes, bytes]:
        """Return ``(ed25519, payload)`` for a P... signer key."""
        body = decode_check(VersionByte.SIGNED_PAYLOAD, encoded)
        size = struct.unpack(">I", body[32:36])[0]
        return body[:32], body[36:36 + size]

    @staticmethod
    def encode_claimable_balance(balance_hash: bytes) -> str:
        # Leading byte is the ClaimableBalanceIDType (v0)
        return encode_check(VersionByte.CLAIMABLE_BALANCE, b"\x00" + balance_hash)

    @staticmethod
    def decode_claimable_balance(encoded: str) -> bytes:
        payload = decode_check(VersionByte.CLAIMABLE_BALANCE, encoded)
        if payload[0] != 0:
            raise InvalidStrKey(f"Unsupported claimable balance id type: {payload[0]}")
        return payload[1:]

    @staticmethod
    def encode_liquidity_pool(pool_id: bytes) -> str:
        return encode_check(VersionByte.LIQUIDITY_POOL, pool_id)

    @staticmethod
    def decode_liquidity_pool(encoded: str) -> bytes:
        return decode_check(VersionByte.LIQUIDITY_POOL, encoded)


def _is_valid(version: VersionByte, encoded: str) -> bool:
    try:
        decode_check(version, encoded)
        return True
    except InvalidStrKey:
        return False


__all__ = ["StrKey", "VersionByte", "encode_check", "decode_check", "version_of"]
