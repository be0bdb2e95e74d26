"""
Transaction hash derivation.

The hash signed by every signer is
``sha256(sha256(passphrase) || envelope_type || transaction_xdr)``; v0
envelopes are hashed as their v1 equivalent.
"""

import hashlib
from typing import Any, Dict, Optional

from ..crypto.strkey import StrKey
from ..runtime.errors import DecodeError
from .stellar_types import ENVELOPE_TYPE_TX, ENVELOPE_TYPE_TX_FEE_BUMP
from .writer import XdrWriter
from .xdr_json import XdrJsonCodec, default_codec, from_base64


def sha256_bytes(input_bytes: bytes) -> bytes:
    """
    Compute SHA-256 hash of input bytes.

    Args:
        input_bytes: Input bytes to hash

    Returns:
        SHA-256 hash as bytes (32 bytes)
    """
    return hashlib.sha256(input_bytes).digest()


def network_id(passphrase: str) -> bytes:
    """Network id: the SHA-256 of the network passphrase."""
    return sha256_bytes(passphrase.encode("utf-8"))


def _tagged(envelope_type: int, body: bytes) -> bytes:
    w = XdrWriter()
    w.int32(envelope_type)
    return w.to_bytes() + body


def v0_to_v1_transaction(tx_v0: Dict[str, Any]) -> Dict[str, Any]:
    """Rewrite a ``TransactionV0`` tree as the equivalent ``Transaction`` tree."""
    source = StrKey.encode_ed25519_public_key(bytes.fromhex(tx_v0["source_account_ed25519"]))
    time_bounds = tx_v0.get("time_bounds")
    return {
        "source_account": source,
        "fee": tx_v0["fee"],
        "seq_num": tx_v0["seq_num"],
        "cond": {"time": time_bounds} if time_bounds else "none",
        "memo": tx_v0["memo"],
        "operations": tx_v0["operations"],
        "ext": tx_v0.get("ext", "v0"),
    }


def signature_base(envelope: Dict[str, Any], passphrase: str,
                   codec: Optional[XdrJsonCodec] = None) -> bytes:
    """
    Build the signature payload of a decoded ``TransactionEnvelope`` tree.

    Args:
        envelope: Envelope JSON tree (``{"tx": ...}``, ``{"tx_v0": ...}`` or ``{"tx_fee_bump": ...}``)
        passphrase: Network passphrase
        codec: Codec used to re-encode the inner transaction

    Returns:
        Signature payload bytes

    Raises:
        DecodeError: If the envelope is not a recognized transaction envelope
    """
    codec = codec or default_codec()
    if not isinstance(envelope, dict) or len(envelope) != 1:
        raise DecodeError(f"Not a transaction envelope: {envelope!r}")

    arm, inner = next(iter(envelope.items()))
    if arm == "tx":
        tagged = _tagged(ENVELOPE_TYPE_TX, codec.pack("Transaction", inner["tx"]))
    elif arm == "tx_v0":
        tagged = _tagged(ENVELOPE_TYPE_TX, codec.pack("Transaction", v0_to_v1_transaction(inner["tx"])))
    elif arm == "tx_fee_bump":
        tagged = _tagged(ENVELOPE_TYPE_TX_FEE_BUMP, codec.pack("FeeBumpTransaction", inner["tx"]))
    else:
        raise DecodeError(f"Unsupported envelope type: {arm}")
    return network_id(passphrase) + tagged


def transaction_hash(xdr: str, passphrase: str, codec: Optional[XdrJsonCodec] = None) -> str:
    """
    Hash a base64 ``TransactionEnvelope``.

    Args:
        xdr: Base64 envelope XDR
        passphrase: Network passphrase
        codec: Codec to parse the envelope with

    Returns:
        Hex encoded 32-byte transaction hash

    Raises:
        DecodeError: If the envelope cannot be parsed
    """
    codec = codec or default_codec()
    envelope = codec.unpack("TransactionEnvelope", from_base64(xdr))
    return sha256_bytes(signature_base(envelope, passphrase, codec)).hex()


__all__ = [
    "sha256_bytes",
    "network_id",
    "signature_base",
    "transaction_hash",
    "v0_to_v1_transaction",
]
