"""
Schema-driven XDR type combinators.

Each ``XdrType`` packs a JSON-shaped Python value into an ``XdrWriter`` and
unpacks it back from an ``XdrReader``. The JSON conventions are:

- structs are objects keyed by snake_case field names
- unions are the arm name (void arms) or a single-key object ``{arm: value}``
- enums are snake_case strings, optionals are ``None`` or the value
- opaque data is lowercase hex, integers are exact ``int`` values
- accounts and signer keys are StrKey strings, asset codes plain strings

Every failure raises ``DecodeError`` with a dotted path to the bad node.
"""

from __future__ import annotations
import re
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional as Opt, Sequence, Tuple

from ..crypto.strkey import StrKey
from ..runtime.errors import DecodeError, InvalidStrKey
from .reader import XdrReader
from .writer import XdrWriter

_HEX_RE = re.compile(r"^(?:[0-9a-fA-F]{2})*$")
_ASSET_CODE_RE = re.compile(r"^[a-zA-Z0-9]+$")


class XdrType(ABC):
    """Base class for all schema nodes."""

    name: str = "?"

    @abstractmethod
    def pack(self, w: XdrWriter, value: Any, path: str) -> None:
        """Write ``value`` to ``w``; ``path`` locates the node in error messages."""

    @abstractmethod
    def unpack(self, r: XdrReader, path: str) -> Any:
        """Read a value from ``r`` and return its JSON form."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


def _fail(path: str, message: str) -> DecodeError:
    return DecodeError(f"{path or '<root>'}: {message}", details={"path": path})


def _child(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def _as_int(value: Any, path: str, type_name: str) -> int:
    if isinstance(value, bool):
        raise _fail(path, f"expected {type_name}, got boolean")
    if isinstance(value, int):
        return value
    if isinstance(value, Decimal) and value.is_finite() and value == value.to_integral_value():
        return int(value)
    if isinstance(value, str) and re.fullmatch(r"-?\d+", value):
        return int(value)
    raise _fail(path, f"expected {type_name}, got {value!r}")


class Integer(XdrType):
    """32/64-bit signed or unsigned integer."""

    def __init__(self, name: str, bits: int, signed: bool):
        self.name = name
        self.method = f"{'' if signed else 'u'}int{bits}"
        self.lo = -(1 << (bits - 1)) if signed else 0
        self.hi = (1 << (bits - 1)) - 1 if signed else (1 << bits) - 1

    def pack(self, w, value, path):
        v = _as_int(value, path, self.name)
        if not self.lo <= v <= self.hi:
            raise _fail(path, f"{v} is out of range for {self.name}")
        getattr(w, self.method)(v)

    def unpack(self, r, path):
        return getattr(r, self.method)()


INT32 = Integer("int32", 32, True)
UINT32 = Integer("uint32", 32, False)
INT64 = Integer("int64", 64, True)
UINT64 = Integer("uint64", 64, False)


class Bool(XdrType):
    name = "bool"

    def pack(self, w, value, path):
        if not isinstance(value, bool):
            raise _fail(path, f"expected boolean, got {value!r}")
        w.boolean(value)

    def unpack(self, r, path):
        return r.boolean()


BOOL = Bool()


class Opaque(XdrType):
    """Fixed (``opaque[n]``) or variable (``opaque<n>``) bytes as hex."""

    def __init__(self, size: int, fixed: bool = True, name: Opt[str] = None):
        self.size = size
        self.fixed = fixed
        self.name = name or (f"opaque[{size}]" if fixed else f"opaque<{size}>")

    def pack(self, w, value, path):
        if not isinstance(value, str) or not _HEX_RE.match(value):
            raise _fail(path, f"expected hex string for {self.name}, got {value!r}")
        data = bytes.fromhex(value)
        if self.fixed:
            if len(data) != self.size:
                raise _fail(path, f"expected {self.size} bytes for {self.name}, got {len(data)}")
            w.fixed_opaque(data)
        else:
            if len(data) > self.size:
                raise _fail(path, f"{len(data)} bytes exceeds maximum {self.size} for {self.name}")
            w.var_opaque(data)

    def unpack(self, r, path):
        if self.fixed:
            return r.fixed_opaque(self.size).hex()
        return r.var_opaque(self.size).hex()


class String(XdrType):
    """``string<n>``: UTF-8 text bounded in bytes."""

    def __init__(self, max_length: int):
        self.max_length = max_length
        self.name = f"string<{max_length}>"

    def pack(self, w, value, path):
        if not isinstance(value, str):
            raise _fail(path, f"expected string, got {value!r}")
        encoded = value.encode("utf-8")
        if len(encoded) > self.max_length:
            raise _fail(path, f"string of {len(encoded)} bytes exceeds maximum {self.max_length}")
        w.var_opaque(encoded)

    def unpack(self, r, path):
        return r.string(self.max_length)


class Optional(XdrType):
    """XDR optional (``T*``)."""

    def __init__(self, inner: XdrType):
        self.inner = inner
        self.name = f"{inner.name}*"

    def pack(self, w, value, path):
        if value is None:
            w.boolean(False)
        else:
            w.boolean(True)
            self.inner.pack(w, value, path)

    def unpack(self, r, path):
        return self.inner.unpack(r, path) if r.boolean() else None


class Array(XdrType):
    """Variable (``T<n>``) or fixed (``T[n]``) array as a JSON list."""

    def __init__(self, inner: XdrType, size: int, fixed: bool = False):
        self.inner = inner
        self.size = size
        self.fixed = fixed
        self.name = f"{inner.name}[{size}]" if fixed else f"{inner.name}<{size}>"

    def pack(self, w, value, path):
        if not isinstance(value, (list, tuple)):
            raise _fail(path, f"expected array for {self.name}, got {value!r}")
        if self.fixed and len(value) != self.size:
            raise _fail(path, f"expected exactly {self.size} items, got {len(value)}")
        if len(value) > self.size:
            raise _fail(path, f"{len(value)} items exceeds maximum {self.size}")
        if not self.fixed:
            w.uint32(len(value))
        for i, item in enumerate(value):
            self.inner.pack(w, item, f"{path}[{i}]")

    def unpack(self, r, path):
        n = self.size if self.fixed else r.uint32()
        if n > self.size:
            raise _fail(path, f"array length {n} exceeds maximum {self.size}")
        return [self.inner.unpack(r, f"{path}[{i}]") for i in range(n)]


class Struct(XdrType):
    """Ordered record. Absent optional fields pack as ``None``."""

    def __init__(self, name: str, fields: Sequence[Tuple[str, XdrType]]):
        self.name = name
        self.fields = list(fields)
        self._names = {f for f, _ in self.fields}

    def pack(self, w, value, path):
        if not isinstance(value, dict):
            raise _fail(path, f"expected object for {self.name}, got {value!r}")
        unknown = set(value) - self._names
        if unknown:
            raise _fail(path, f"unknown field(s) for {self.name}: {', '.join(sorted(unknown))}")
        for field_name, field_type in self.fields:
            if field_name not in value:
                if isinstance(field_type, Optional):
                    field_type.pack(w, None, _child(path, field_name))
                    continue
                raise _fail(path, f"missing field '{field_name}' for {self.name}")
            field_type.pack(w, value[field_name], _child(path, field_name))

    def unpack(self, r, path):
        return {
            field_name: field_type.unpack(r, _child(path, field_name))
            for field_name, field_type in self.fields
        }


class Enum(XdrType):
    """Named int32 constants, represented by name."""

    def __init__(self, name: str, members: Dict[str, int]):
        self.name = name
        self.members = dict(members)
        self._by_value = {v: k for k, v in self.members.items()}

    def value_of(self, member: Any, path: str) -> int:
        if not isinstance(member, str) or member not in self.members:
            raise _fail(path, f"unknown {self.name} value {member!r}")
        return self.members[member]

    def name_of(self, value: int, path: str) -> str:
        if value not in self._by_value:
            raise _fail(path, f"unknown {self.name} discriminant {value}")
        return self._by_value[value]

    def pack(self, w, value, path):
        w.int32(self.value_of(value, path))

    def unpack(self, r, path):
        return self.name_of(r.int32(), path)


class Union(XdrType):
    """
    Discriminated union.

    ``arms`` is a list of ``(arm_name, discriminant, type_or_None)``; ``None``
    marks a void arm, which is represented by its bare name.
    """

    def __init__(self, name: str, arms: Sequence[Tuple[str, int, Opt[XdrType]]]):
        self.name = name
        self.arms = {arm: (disc, arm_type) for arm, disc, arm_type in arms}
        self._by_disc = {disc: (arm, arm_type) for arm, disc, arm_type in arms}

    def pack(self, w, value, path):
        if isinstance(value, str):
            arm, payload = value, None
            if arm not in self.arms:
                raise _fail(path, f"unknown {self.name} arm {arm!r}")
            disc, arm_type = self.arms[arm]
            if arm_type is not None:
                raise _fail(path, f"{self.name} arm '{arm}' requires a value")
        elif isinstance(value, dict) and len(value) == 1:
            arm, payload = next(iter(value.items()))
            if arm not in self.arms:
                raise _fail(path, f"unknown {self.name} arm {arm!r}")
            disc, arm_type = self.arms[arm]
            if arm_type is None:
                raise _fail(path, f"{self.name} arm '{arm}' takes no value")
        else:
            raise _fail(path, f"expected {self.name} arm name or single-key object, got {value!r}")

        w.int32(disc)
        if arm_type is not None:
            arm_type.pack(w, payload, _child(path, arm))

    def unpack(self, r, path):
        disc = r.int32()
        if disc not in self._by_disc:
            raise _fail(path, f"unknown {self.name} discriminant {disc}")
        arm, arm_type = self._by_disc[disc]
        if arm_type is None:
            return arm
        return {arm: arm_type.unpack(r, _child(path, arm))}


class Ref(XdrType):
    """Late-bound reference used for recursive types."""

    def __init__(self, name: str, resolve: Callable[[str], XdrType]):
        self.name = name
        self._resolve = resolve

    def pack(self, w, value, path):
        self._resolve(self.name).pack(w, value, path)

    def unpack(self, r, path):
        return self._resolve(self.name).unpack(r, path)


# -- StrKey-backed leaf types -------------------------------------------------

KEY_TYPE_ED25519 = 0
KEY_TYPE_PRE_AUTH_TX = 1
KEY_TYPE_HASH_X = 2
KEY_TYPE_ED25519_SIGNED_PAYLOAD = 3
KEY_TYPE_MUXED_ED25519 = 0x100


def _strkey(path: str, decode: Callable[[str], Any], value: Any) -> Any:
    try:
        return decode(value)
    except InvalidStrKey as e:
        raise _fail(path, e.message)


class AccountId(XdrType):
    """``PublicKey`` union (ed25519 only), represented as a G... address."""

    name = "AccountID"

    def pack(self, w, value, path):
        key = _strkey(path, StrKey.decode_ed25519_public_key, value)
        w.int32(KEY_TYPE_ED25519)
        w.fixed_opaque(key)

    def unpack(self, r, path):
        key_type = r.int32()
        if key_type != KEY_TYPE_ED25519:
            raise _fail(path, f"unsupported public key type {key_type}")
        return StrKey.encode_ed25519_public_key(r.fixed_opaque(32))


class MuxedAccount(XdrType):
    """``MuxedAccount`` union as a G... or M... address."""

    name = "MuxedAccount"

    def pack(self, w, value, path):
        if isinstance(value, str) and value.startswith("M"):
            key, muxed_id = _strkey(path, StrKey.decode_muxed_account, value)
            w.int32(KEY_TYPE_MUXED_ED25519)
            w.uint64(muxed_id)
            w.fixed_opaque(key)
        else:
            key = _strkey(path, StrKey.decode_ed25519_public_key, value)
            w.int32(KEY_TYPE_ED25519)
            w.fixed_opaque(key)

    def unpack(self, r, path):
        key_type = r.int32()
        if key_type == KEY_TYPE_ED25519:
            return StrKey.encode_ed25519_public_key(r.fixed_opaque(32))
        if key_type == KEY_TYPE_MUXED_ED25519:
            muxed_id = r.uint64()
            return StrKey.encode_muxed_account(r.fixed_opaque(32), muxed_id)
        raise _fail(path, f"unsupported muxed account key type {key_type}")


class SignerKey(XdrType):
    """``SignerKey`` union as a G/T/X/P StrKey."""

    name = "SignerKey"

    def pack(self, w, value, path):
        prefix = value[:1] if isinstance(value, str) else ""
        if prefix == "G":
            w.int32(KEY_TYPE_ED25519)
            w.fixed_opaque(_strkey(path, StrKey.decode_ed25519_public_key, value))
        elif prefix == "T":
            w.int32(KEY_TYPE_PRE_AUTH_TX)
            w.fixed_opaque(_strkey(path, StrKey.decode_pre_auth_tx, value))
        elif prefix == "X":
            w.int32(KEY_TYPE_HASH_X)
            w.fixed_opaque(_strkey(path, StrKey.decode_sha256_hash, value))
        elif prefix == "P":
            key, payload = _strkey(path, StrKey.decode_signed_payload, value)
            w.int32(KEY_TYPE_ED25519_SIGNED_PAYLOAD)
            w.fixed_opaque(key)
            w.var_opaque(payload)
        else:
            raise _fail(path, f"expected signer key StrKey (G/T/X/P), got {value!r}")

    def unpack(self, r, path):
        key_type = r.int32()
        if key_type == KEY_TYPE_ED25519:
            return StrKey.encode_ed25519_public_key(r.fixed_opaque(32))
        if key_type == KEY_TYPE_PRE_AUTH_TX:
            return StrKey.encode_pre_auth_tx(r.fixed_opaque(32))
        if key_type == KEY_TYPE_HASH_X:
            return StrKey.encode_sha256_hash(r.fixed_opaque(32))
        if key_type == KEY_TYPE_ED25519_SIGNED_PAYLOAD:
            key = r.fixed_opaque(32)
            payload = r.var_opaque(64)
            return _strkey(path, lambda k: StrKey.encode_signed_payload(k, payload), key)
        raise _fail(path, f"unsupported signer key type {key_type}")


class AssetCode(XdrType):
    """``AssetCode4``/``AssetCode12``: NUL padded ASCII, shown as a string."""

    def __init__(self, size: int):
        self.size = size
        self.name = f"AssetCode{size}"

    def pack(self, w, value, path):
        if not isinstance(value, str) or not _ASSET_CODE_RE.match(value) or len(value) > self.size:
            raise _fail(path, f"invalid {self.name} {value!r}")
        w.fixed_opaque(value.encode("ascii").ljust(self.size, b"\x00"))

    def unpack(self, r, path):
        raw = r.fixed_opaque(self.size).rstrip(b"\x00")
        try:
            return raw.decode("ascii")
        except UnicodeDecodeError as e:
            raise DecodeError(f"{path}: {self.name} is not ASCII: {raw!r}", cause=e)


class ClaimableBalanceId(XdrType):
    """``ClaimableBalanceID`` in the 72-hex form (type prefix + hash)."""

    name = "ClaimableBalanceID"

    def pack(self, w, value, path):
        if not isinstance(value, str) or len(value) != 72 or not _HEX_RE.match(value):
            raise _fail(path, f"expected 72 hex characters for {self.name}, got {value!r}")
        id_type = int(value[:8], 16)
        if id_type != 0:
            raise _fail(path, f"unsupported claimable balance id type {id_type}")
        w.int32(id_type)
        w.fixed_opaque(bytes.fromhex(value[8:]))

    def unpack(self, r, path):
        id_type = r.int32()
        if id_type != 0:
            raise _fail(path, f"unsupported claimable balance id type {id_type}")
        return f"{id_type:08x}{r.fixed_opaque(32).hex()}"


__all__ = [
    "XdrType", "Integer", "Bool", "Opaque", "String", "Optional", "Array",
    "Struct", "Enum", "Union", "Ref", "AccountId", "MuxedAccount", "SignerKey",
    "AssetCode", "ClaimableBalanceId", "INT32", "UINT32", "INT64", "UINT64", "BOOL",
]
