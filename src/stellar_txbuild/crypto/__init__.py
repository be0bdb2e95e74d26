"""
Key encodings.
"""

from .strkey import StrKey, VersionByte, encode_check, decode_check, version_of

__all__ = ["StrKey", "VersionByte", "encode_check", "decode_check", "version_of"]
