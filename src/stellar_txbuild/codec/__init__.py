"""
XDR codec: schema-driven JSON <-> XDR conversion and transaction hashing.
"""

from .writer import XdrWriter
from .reader import XdrReader
from .xdr_json import BinaryCodec, XdrJsonCodec, json_to_xdr, xdr_to_json, default_codec
from .hashes import network_id, signature_base, transaction_hash

__all__ = [
    "XdrWriter",
    "XdrReader",
    "BinaryCodec",
    "XdrJsonCodec",
    "json_to_xdr",
    "xdr_to_json",
    "default_codec",
    "network_id",
    "signature_base",
    "transaction_hash",
]
