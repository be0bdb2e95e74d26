"""
XDR-JSON binary codec.

Converts between the canonical JSON text of a wire type and its base64 XDR
encoding. The transaction compiler only depends on the ``BinaryCodec``
protocol, so any schema-driven implementation can be injected.
"""

from __future__ import annotations
import base64
import binascii
import json
import logging
from typing import Any, Dict, List, Protocol, Union

from ..canonjson import dumps_canonical, loads_lossless
from ..runtime.errors import DecodeError
from .reader import XdrReader
from .schema import XdrType
from .stellar_types import WIRE_TYPES
from .writer import XdrWriter

logger = logging.getLogger(__name__)


class BinaryCodec(Protocol):
    """Opaque encode/decode service keyed by wire type tag."""

    def encode(self, type_tag: str, json_text: str) -> str:
        ...

    def decode(self, type_tag: str, xdr: str) -> str:
        ...


class XdrJsonCodec:
    """
    Schema-driven codec over ``stellar_types.WIRE_TYPES``.

    ``encode``/``decode`` work on JSON text and base64 strings; the
    ``*_tree``/``*_bytes`` variants skip the text and base64 layers.
    """

    def __init__(self, types: Dict[str, XdrType] = None):
        self._types = types if types is not None else WIRE_TYPES

    def types(self) -> List[str]:
        """List the supported wire type tags."""
        return sorted(self._types)

    def _type(self, type_tag: str) -> XdrType:
        try:
            return self._types[type_tag]
        except KeyError:
            raise DecodeError(f"Unknown XDR type: {type_tag}") from None

    def pack(self, type_tag: str, tree: Any) -> bytes:
        """
        Encode a JSON tree to raw XDR bytes.

        Args:
            type_tag: Wire type tag, e.g. ``"TransactionEnvelope"``
            tree: JSON-shaped value

        Returns:
            XDR bytes

        Raises:
            DecodeError: If the tree does not match the schema
        """
        xdr_type = self._type(type_tag)
        writer = XdrWriter()
        xdr_type.pack(writer, tree, "")
        return writer.to_bytes()

    def unpack(self, type_tag: str, data: bytes) -> Any:
        """
        Decode raw XDR bytes to a JSON tree.

        Raises:
            DecodeError: If the bytes are malformed or have trailing data
        """
        xdr_type = self._type(type_tag)
        reader = XdrReader(data)
        tree = xdr_type.unpack(reader, "")
        if not reader.eof:
            raise DecodeError(f"{reader.remaining} trailing bytes after {type_tag}")
        return tree

    def encode(self, type_tag: str, json_text: Union[str, bytes]) -> str:
        """
        Encode JSON text to base64 XDR.

        Args:
            type_tag: Wire type tag
            json_text: JSON text of the value

        Returns:
            Base64 encoded XDR

        Raises:
            DecodeError: If the text is not JSON or does not match the schema
        """
        try:
            tree = loads_lossless(json_text)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"Invalid JSON: {e}", cause=e)
        data = self.pack(type_tag, tree)
        logger.debug(f"Encoded {type_tag} to {len(data)} XDR bytes")
        return base64.b64encode(data).decode("ascii")

    def decode(self, type_tag: str, xdr: str) -> str:
        """Decode base64 XDR to canonical JSON text."""
        return dumps_canonical(self.unpack(type_tag, from_base64(xdr)))

    def decode_tree(self, type_tag: str, xdr: str) -> Any:
        """Decode base64 XDR to a JSON tree."""
        return self.unpack(type_tag, from_base64(xdr))


def from_base64(xdr: Union[str, bytes]) -> bytes:
    """
    Decode a base64 XDR blob, tolerating surrounding whitespace.

    Raises:
        DecodeError: If the text is not valid base64
    """
    if isinstance(xdr, bytes):
        xdr = xdr.decode("ascii", errors="replace")
    if not isinstance(xdr, str) or not xdr.strip():
        raise DecodeError("XDR input is empty")
    try:
        return base64.b64decode("".join(xdr.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid base64 XDR: {e}", cause=e)


_default_codec = XdrJsonCodec()


def json_to_xdr(type_tag: str, json_text: str) -> str:
    """Encode JSON text as ``type_tag``; the "To XDR" tool."""
    return _default_codec.encode(type_tag, json_text)


def xdr_to_json(type_tag: str, xdr: str) -> str:
    """Decode base64 XDR of ``type_tag`` to canonical JSON text."""
    return _default_codec.decode(type_tag, xdr)


def default_codec() -> XdrJsonCodec:
    return _default_codec


__all__ = [
    "BinaryCodec",
    "XdrJsonCodec",
    "from_base64",
    "json_to_xdr",
    "xdr_to_json",
    "default_codec",
]
