"""
XDR writer.

Big-endian primitives with every item padded to a 4-byte boundary, as
RFC 4506 requires.
"""

import struct
from typing import List


class XdrWriter:
    """
    Append-only XDR byte buffer.

    Range checking is the caller's job; values are packed with ``struct`` and
    raise ``struct.error`` when they do not fit.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._chunks: List[bytes] = []

    def int32(self, v: int) -> None:
        self._chunks.append(struct.pack(">i", v))

    def uint32(self, v: int) -> None:
        self._chunks.append(struct.pack(">I", v))

    def int64(self, v: int) -> None:
        self._chunks.append(struct.pack(">q", v))

    def uint64(self, v: int) -> None:
        self._chunks.append(struct.pack(">Q", v))

    def boolean(self, v: bool) -> None:
        self.int32(1 if v else 0)

    def fixed_opaque(self, v: bytes) -> None:
        """
        Write fixed-length opaque data, zero padded to 4 bytes.

        Args:
            v: Bytes to write
        """
        self._chunks.append(bytes(v))
        pad = -len(v) % 4
        if pad:
            self._chunks.append(b"\x00" * pad)

    def var_opaque(self, v: bytes) -> None:
        """
        Write variable-length opaque data with a uint32 length prefix.

        Args:
            v: Bytes to write
        """
        self.uint32(len(v))
        self.fixed_opaque(v)

    def string(self, s: str) -> None:
        """Write a UTF-8 string as variable-length opaque data."""
        self.var_opaque(s.encode("utf-8"))

    def to_bytes(self) -> bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return b"".join(self._chunks)
