"""
XDR reader.

Mirror of ``XdrWriter``; every read checks bounds and padding and raises
``DecodeError`` on truncated or malformed input.
"""

import builtins
import struct

from ..runtime.errors import DecodeError


class XdrReader:
    """Sequential reader over an XDR byte buffer."""

    def __init__(self, buf: builtins.bytes):
        """
        Initialize reader with byte buffer.

        Args:
            buf: Byte buffer to read from
        """
        self._buf = bytes(buf)
        self._off = 0

    @property
    def eof(self) -> bool:
        """True once every byte has been consumed."""
        return self._off >= len(self._buf)

    @property
    def remaining(self) -> int:
        return len(self._buf) - self._off

    def _take(self, n: int) -> builtins.bytes:
        if n < 0 or self._off + n > len(self._buf):
            raise DecodeError(
                f"Unexpected end of XDR data: need {n} bytes at offset {self._off}, "
                f"have {len(self._buf) - self._off}"
            )
        out = self._buf[self._off:self._off + n]
        self._off += n
        return out

    def int32(self) -> int:
        return struct.unpack(">i", self._take(4))[0]

    def uint32(self) -> int:
        return struct.unpack(">I", self._take(4))[0]

    def int64(self) -> int:
        return struct.unpack(">q", self._take(8))[0]

    def uint64(self) -> int:
        return struct.unpack(">Q", self._take(8))[0]

    def boolean(self) -> bool:
        v = self.int32()
        if v not in (0, 1):
            raise DecodeError(f"Invalid XDR boolean value: {v}")
        return v == 1

    def fixed_opaque(self, n: int) -> builtins.bytes:
        """
        Read ``n`` bytes of opaque data and its zero padding.

        Args:
            n: Number of data bytes

        Returns:
            The data bytes without padding
        """
        out = self._take(n)
        pad = self._take(-n % 4)
        if any(pad):
            raise DecodeError("Non-zero XDR padding")
        return out

    def var_opaque(self, max_length: int = 0xFFFFFFFF) -> builtins.bytes:
        n = self.uint32()
        if n > max_length:
            raise DecodeError(f"XDR opaque length {n} exceeds maximum {max_length}")
        return self.fixed_opaque(n)

    def string(self, max_length: int = 0xFFFFFFFF) -> str:
        """Read a UTF-8 string, rejecting invalid UTF-8."""
        raw = self.var_opaque(max_length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"XDR string is not valid UTF-8: {raw!r}", cause=e)
