"""
Primitive field codecs.

Pure functions converting individual form values (decimal amounts, prices,
flag lists, signers, assets, ids) into the exact scalar or composite shape
the XDR-JSON schema expects, plus their inverses for display.

Amounts and prices are handled with ``fractions.Fraction`` so no value is
ever routed through a binary float.
"""

from __future__ import annotations
import math
import re
from decimal import Decimal
from fractions import Fraction
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type, Union
from enum import IntFlag

from ..codec.hashes import sha256_bytes
from ..codec.xdr_json import default_codec
from ..crypto.strkey import StrKey
from ..enums import AssetType, SignerKeyType
from ..runtime.errors import (
    DecodeError, InvalidAmount, InvalidAsset, InvalidField, InvalidFraction,
    InvalidSignerKey, InvalidStrKey, UnknownFlag,
)

STROOPS_PER_UNIT = 10_000_000
MAX_INT64 = (1 << 63) - 1
MAX_INT64_STR = str(MAX_INT64)
INT32_MAX = (1 << 31) - 1
LIQUIDITY_POOL_FEE_V18 = 30

_DECIMAL_RE = re.compile(r"^(\d+(\.\d*)?|\.\d+)$")
_INTEGER_RE = re.compile(r"^-?\d+$")
_HEX_RE = re.compile(r"^[0-9a-fA-F]*$")
_ASSET_CODE_RE = re.compile(r"^[a-zA-Z0-9]{1,12}$")


# -- numbers ------------------------------------------------------------------

def _parse_decimal(value: Any, field: str, error: Type[InvalidField]) -> Fraction:
    if isinstance(value, (bool, float)):
        raise error(f"'{field}' must be a decimal string, got {type(value).__name__}", field=field)
    if isinstance(value, int):
        return Fraction(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise error(f"'{field}' must be a finite number", field=field)
        return Fraction(value)
    if isinstance(value, str):
        text = value.strip()
        if not _DECIMAL_RE.match(text):
            raise error(f"'{field}' is not a valid decimal number: {value!r}", field=field)
        return Fraction(text)
    raise error(f"'{field}' must be a decimal string, got {value!r}", field=field)


def encode_integer(value: Any, field: str = "value") -> int:
    """
    Parse an integer form value (int or decimal-digit string).

    Raises:
        InvalidField: If the value is not an integer
    """
    if isinstance(value, bool):
        raise InvalidField(f"'{field}' must be an integer", field=field)
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_RE.match(value.strip()):
        return int(value.strip())
    raise InvalidField(f"'{field}' must be an integer, got {value!r}", field=field)


def encode_amount(value: Any, field: str = "amount") -> int:
    """
    Convert a decimal amount to stroops.

    Args:
        value: Decimal string (or int / Decimal) with at most 7 fractional digits
        field: Field name used in error messages

    Returns:
        Amount scaled by 10^7

    Raises:
        InvalidAmount: If the value is not numeric, negative, too precise or
            does not fit a signed 64-bit integer after scaling
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidAmount(f"'{field}' is required", field=field)
    amount = _parse_decimal(value, field, InvalidAmount)
    if amount < 0:
        raise InvalidAmount(f"'{field}' must not be negative: {value}", field=field)

    scaled = amount * STROOPS_PER_UNIT
    if scaled.denominator != 1:
        raise InvalidAmount(f"'{field}' has more than 7 decimal places: {value}", field=field)
    if scaled.numerator > MAX_INT64:
        raise InvalidAmount(f"'{field}' is too large: {value}", field=field)
    return scaled.numerator


def decode_amount(stroops: int) -> str:
    """Render stroops as the shortest exact decimal string ("100", "0.5")."""
    sign = "-" if stroops < 0 else ""
    whole, frac = divmod(abs(stroops), STROOPS_PER_UNIT)
    if not frac:
        return f"{sign}{whole}"
    return f"{sign}{whole}.{frac:07d}".rstrip("0")


def encode_limit(value: Any, field: str = "limit") -> int:
    """
    Encode a trustline limit.

    The literal maximum signed 64-bit value is emitted as-is; anything else is
    amount-encoded. ``None`` means "no limit".
    """
    if value is None:
        return MAX_INT64
    if isinstance(value, str) and value.strip() == MAX_INT64_STR:
        return MAX_INT64
    return encode_amount(value, field)


def decode_limit(limit: int) -> str:
    return MAX_INT64_STR if limit == MAX_INT64 else decode_amount(limit)


# -- prices -------------------------------------------------------------------

def _div_half_up(numerator: Fraction, denominator: Fraction, places: int = 20) -> Fraction:
    # 20 decimal places, rounded half up
    scale = 10 ** places
    exact = numerator / denominator * scale
    return Fraction(math.floor(exact + Fraction(1, 2)), scale)


def best_rational_approximation(number: Fraction) -> Tuple[int, int]:
    """
    Continued-fraction approximation bounded by int32, as the ledger SDKs do.

    Raises:
        InvalidFraction: If no approximation exists (zero or too large)
    """
    fractions = [(0, 1), (1, 0)]
    x = Fraction(number)
    while True:
        if x > INT32_MAX:
            break
        a = math.floor(x)
        f = x - a
        h = a * fractions[-1][0] + fractions[-2][0]
        k = a * fractions[-1][1] + fractions[-2][1]
        if h > INT32_MAX or k > INT32_MAX:
            break
        fractions.append((h, k))
        if f == 0:
            break
        x = _div_half_up(Fraction(1), f)

    n, d = fractions[-1]
    if n == 0 or d == 0:
        raise InvalidFraction(f"Couldn't find approximation for {number}")
    return n, d


def _fraction_part(value: Any, name: str, field: str) -> int:
    if value is None or value == "":
        raise InvalidFraction(f"'{field}' is missing its {name}", field=field)
    try:
        part = encode_integer(value, field)
    except InvalidField:
        raise InvalidFraction(f"'{field}' {name} must be an integer, got {value!r}", field=field)
    if part <= 0 or part > INT32_MAX:
        raise InvalidFraction(f"'{field}' {name} must be between 1 and {INT32_MAX}, got {part}",
                              field=field)
    return part


def encode_price(value: Any, field: str = "price") -> Dict[str, int]:
    """
    Encode a price as an ``{"n", "d"}`` pair.

    Args:
        value: Decimal string, or an explicit pair (``{"n", "d"}``,
            ``{"numerator", "denominator"}`` or a 2-sequence). The form wrapper
            ``{"type": ..., "value": ...}`` is unwrapped.
        field: Field name used in error messages

    Returns:
        ``{"n": int, "d": int}``

    Raises:
        InvalidFraction: If a part is missing or non-positive, or the decimal
            cannot be approximated
    """
    if isinstance(value, Mapping) and "value" in value:
        value = value["value"]

    if isinstance(value, Mapping):
        n = value.get("n", value.get("numerator"))
        d = value.get("d", value.get("denominator"))
        return {"n": _fraction_part(n, "numerator", field), "d": _fraction_part(d, "denominator", field)}
    if isinstance(value, (list, tuple)):
        if len(value) != 2:
            raise InvalidFraction(f"'{field}' must be a numerator/denominator pair", field=field)
        return {"n": _fraction_part(value[0], "numerator", field),
                "d": _fraction_part(value[1], "denominator", field)}
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidFraction(f"'{field}' is required", field=field)

    price = _parse_decimal(value, field, InvalidFraction)
    if price <= 0:
        raise InvalidFraction(f"'{field}' must be positive: {value}", field=field)
    try:
        n, d = best_rational_approximation(price)
    except InvalidFraction as e:
        raise InvalidFraction(e.message, field=field)
    return {"n": n, "d": d}


def decode_price(price: Mapping[str, int]) -> Dict[str, int]:
    return {"n": price["n"], "d": price["d"]}


# -- flags --------------------------------------------------------------------

def _flag_member(name: Any, vocabulary: Type[IntFlag], field: str) -> IntFlag:
    if isinstance(name, vocabulary):
        return name
    if isinstance(name, str):
        key = name.strip().upper()
        if key in vocabulary.__members__:
            return vocabulary[key]
    raise UnknownFlag(f"Unknown {vocabulary.__name__} '{name}' in '{field}'", field=field)


def encode_flags(names: Optional[Iterable[Any]], vocabulary: Type[IntFlag], field: str = "flags") -> int:
    """
    OR together the bit values of named flags.

    Args:
        names: Flag names (case-insensitive) or members of ``vocabulary``
        vocabulary: ``AccountFlag`` or ``TrustLineFlag``
        field: Field name used in error messages

    Returns:
        Non-negative bitmask (0 for no flags)

    Raises:
        UnknownFlag: If a name is not part of the vocabulary
    """
    if names is None:
        return 0
    if isinstance(names, str):
        names = [names]
    total = 0
    for name in names:
        total |= int(_flag_member(name, vocabulary, field))
    return total


def decode_flags(mask: Optional[int], vocabulary: Type[IntFlag]) -> List[str]:
    """List flag names set in ``mask``, in bit order."""
    if not mask:
        return []
    names = [member.name.lower() for member in vocabulary if mask & member.value]
    known = 0
    for member in vocabulary:
        known |= member.value
    if mask & ~known:
        raise UnknownFlag(f"Unknown {vocabulary.__name__} bits in {mask}")
    return names


# -- signers ------------------------------------------------------------------

_SIGNER_TYPES = {
    "ed25519publickey": SignerKeyType.ED25519_PUBLIC_KEY,
    "ed25519_public_key": SignerKeyType.ED25519_PUBLIC_KEY,
    "sha256hash": SignerKeyType.SHA256_HASH,
    "sha256_hash": SignerKeyType.SHA256_HASH,
    "hash_x": SignerKeyType.SHA256_HASH,
    "preauthtx": SignerKeyType.PRE_AUTH_TX,
    "pre_auth_tx": SignerKeyType.PRE_AUTH_TX,
}


def _signer_type(value: Any, field: str) -> SignerKeyType:
    if isinstance(value, SignerKeyType):
        return value
    if isinstance(value, str) and value.lower() in _SIGNER_TYPES:
        return _SIGNER_TYPES[value.lower()]
    raise InvalidSignerKey(f"Unknown signer key type {value!r}", field=field)


def _hex_payload(key: Any, field: str) -> bytes:
    if not isinstance(key, str) or not _HEX_RE.match(key) or len(key) % 2:
        raise InvalidSignerKey(f"Signer key must be hex encoded, got {key!r}", field=field)
    raw = bytes.fromhex(key)
    if len(raw) != 32:
        raise InvalidSignerKey(f"Signer key must be 32 bytes, got {len(raw)}", field=field)
    return raw


def signer_key_strkey(signer: Mapping[str, Any], field: str = "signer") -> str:
    """
    Convert a form signer to its StrKey representation.

    ``ed25519PublicKey`` addresses pass through; ``sha256Hash`` and
    ``preAuthTx`` hex payloads are checksum encoded (X... / T...).

    Raises:
        InvalidSignerKey: On unknown type, malformed hex or wrong payload length
    """
    if not isinstance(signer, Mapping):
        raise InvalidSignerKey(f"'{field}' must be an object with type and key", field=field)
    signer_type = _signer_type(signer.get("type"), field)
    key = signer.get("key")

    if signer_type is SignerKeyType.ED25519_PUBLIC_KEY:
        if not isinstance(key, str) or not key:
            raise InvalidSignerKey(f"'{field}' public key is required", field=field)
        return key
    raw = _hex_payload(key, field)
    if signer_type is SignerKeyType.SHA256_HASH:
        return StrKey.encode_sha256_hash(raw)
    return StrKey.encode_pre_auth_tx(raw)


def encode_signer_key(signer: Mapping[str, Any], field: str = "signer") -> Dict[str, Any]:
    """
    Encode a form signer as the ``Signer`` struct ``{"key", "weight"}``.

    Raises:
        InvalidSignerKey: If the key is invalid or the weight is missing
    """
    key = signer_key_strkey(signer, field)
    weight = signer.get("weight")
    if weight is None or weight == "":
        raise InvalidSignerKey(f"'{field}' weight is required", field=field)
    try:
        weight = encode_integer(weight, field)
    except InvalidField:
        raise InvalidSignerKey(f"'{field}' weight must be an integer, got {weight!r}", field=field)
    return {"key": key, "weight": weight}


def decode_signer_key(key: str, weight: Optional[int] = None) -> Dict[str, Any]:
    """Inverse of ``signer_key_strkey`` / ``encode_signer_key``."""
    try:
        if key.startswith("G"):
            result = {"type": SignerKeyType.ED25519_PUBLIC_KEY.value, "key": key}
        elif key.startswith("X"):
            result = {"type": SignerKeyType.SHA256_HASH.value, "key": StrKey.decode_sha256_hash(key).hex()}
        elif key.startswith("T"):
            result = {"type": SignerKeyType.PRE_AUTH_TX.value, "key": StrKey.decode_pre_auth_tx(key).hex()}
        else:
            raise InvalidSignerKey(f"Signer key {key!r} has no form representation")
    except InvalidStrKey as e:
        raise InvalidSignerKey(e.message, cause=e)
    if weight is not None:
        result["weight"] = weight
    return result


# -- assets -------------------------------------------------------------------

_ASSET_TYPES = {
    "native": AssetType.NATIVE,
    "credit_alphanum4": AssetType.CREDIT_ALPHANUM4,
    "alphanum4": AssetType.CREDIT_ALPHANUM4,
    "credit_alphanum12": AssetType.CREDIT_ALPHANUM12,
    "alphanum12": AssetType.CREDIT_ALPHANUM12,
    "pool_share": AssetType.POOL_SHARE,
    "liquidity_pool_shares": AssetType.POOL_SHARE,
}


def _asset_type(descriptor: Mapping[str, Any], field: str) -> AssetType:
    raw = descriptor.get("type")
    if isinstance(raw, AssetType):
        return raw
    if raw is None:
        code = descriptor.get("code")
        if isinstance(code, str) and code:
            return AssetType.CREDIT_ALPHANUM4 if len(code) <= 4 else AssetType.CREDIT_ALPHANUM12
        raise InvalidAsset(f"'{field}' asset type is required", field=field)
    if isinstance(raw, str) and raw.lower() in _ASSET_TYPES:
        return _ASSET_TYPES[raw.lower()]
    raise InvalidAsset(f"'{field}' has unknown asset type {raw!r}", field=field)


def _as_descriptor(value: Any, field: str) -> Mapping[str, Any]:
    if isinstance(value, str):
        if value.lower() in ("native", "xlm"):
            return {"type": AssetType.NATIVE}
        if ":" in value:
            code, _, issuer = value.partition(":")
            return {"code": code, "issuer": issuer}
    if isinstance(value, Mapping):
        return value
    raise InvalidAsset(f"'{field}' must be an asset descriptor, got {value!r}", field=field)


def encode_asset(value: Any, field: str = "asset") -> Union[str, Dict[str, Any]]:
    """
    Encode an asset descriptor as the ``Asset`` union.

    Args:
        value: ``{"type", "code", "issuer"}``, ``"native"`` or ``"CODE:ISSUER"``
        field: Field name used in error messages

    Returns:
        ``"native"`` or ``{"credit_alphanumN": {"asset_code", "issuer"}}``

    Raises:
        InvalidAsset: If code or issuer is missing for a credit asset, the code
            does not fit the type, or the type is unknown
    """
    descriptor = _as_descriptor(value, field)
    asset_type = _asset_type(descriptor, field)
    if asset_type is AssetType.NATIVE:
        return AssetType.NATIVE.value
    if asset_type is AssetType.POOL_SHARE:
        raise InvalidAsset(f"'{field}' cannot be a liquidity pool share", field=field)

    code = descriptor.get("code")
    issuer = descriptor.get("issuer")
    if not code:
        raise InvalidAsset(f"'{field}' asset code is required", field=field)
    if not issuer:
        raise InvalidAsset(f"'{field}' asset issuer is required", field=field)
    if not isinstance(code, str) or not _ASSET_CODE_RE.match(code):
        raise InvalidAsset(f"'{field}' asset code must be 1-12 alphanumeric characters", field=field)
    if asset_type is AssetType.CREDIT_ALPHANUM4 and len(code) > 4:
        raise InvalidAsset(f"'{field}' alphanum4 code must be 1-4 characters: {code}", field=field)
    if asset_type is AssetType.CREDIT_ALPHANUM12 and len(code) < 5:
        raise InvalidAsset(f"'{field}' alphanum12 code must be 5-12 characters: {code}", field=field)
    return {asset_type.value: {"asset_code": code, "issuer": issuer}}


def decode_asset(asset: Union[str, Mapping[str, Any]]) -> Dict[str, Any]:
    """Inverse of ``encode_asset``."""
    if asset == AssetType.NATIVE.value:
        return {"type": AssetType.NATIVE.value}
    (asset_type, body), = asset.items()
    return {"type": asset_type, "code": body["asset_code"], "issuer": body["issuer"]}


def encode_assets(values: Optional[Iterable[Any]], field: str = "path") -> List[Any]:
    """Encode an ordered asset list (payment path); ``None`` is an empty path."""
    if values is None:
        return []
    return [encode_asset(v, f"{field}[{i}]") for i, v in enumerate(values)]


def _pool_parameters(descriptor: Mapping[str, Any], field: str) -> Dict[str, Any]:
    if descriptor.get("asset_a") is None or descriptor.get("asset_b") is None:
        raise InvalidAsset(f"'{field}' liquidity pool shares need asset_a and asset_b", field=field)
    fee = descriptor.get("fee", LIQUIDITY_POOL_FEE_V18)
    return {
        "liquidity_pool_constant_product": {
            "asset_a": encode_asset(descriptor["asset_a"], f"{field}.asset_a"),
            "asset_b": encode_asset(descriptor["asset_b"], f"{field}.asset_b"),
            "fee": encode_integer(fee, f"{field}.fee"),
        }
    }


def liquidity_pool_id(asset_a: Any, asset_b: Any, fee: int = LIQUIDITY_POOL_FEE_V18) -> str:
    """
    Compute a constant-product pool id: SHA-256 of its XDR parameters.

    Returns:
        Hex encoded pool id
    """
    params = _pool_parameters({"asset_a": asset_a, "asset_b": asset_b, "fee": fee}, "line")
    try:
        data = default_codec().pack("LiquidityPoolParameters", params)
    except DecodeError as e:
        raise InvalidAsset(f"Invalid liquidity pool parameters: {e.message}", cause=e)
    return sha256_bytes(data).hex()


def encode_change_trust_asset(value: Any, field: str = "line") -> Union[str, Dict[str, Any]]:
    """``ChangeTrustAsset``: an asset or liquidity pool share parameters."""
    descriptor = _as_descriptor(value, field)
    if _asset_type(descriptor, field) is AssetType.POOL_SHARE:
        return {AssetType.POOL_SHARE.value: _pool_parameters(descriptor, field)}
    return encode_asset(descriptor, field)


def decode_change_trust_asset(line: Union[str, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(line, Mapping) and AssetType.POOL_SHARE.value in line:
        params = line[AssetType.POOL_SHARE.value]["liquidity_pool_constant_product"]
        return {
            "type": "liquidity_pool_shares",
            "asset_a": decode_asset(params["asset_a"]),
            "asset_b": decode_asset(params["asset_b"]),
            "fee": params["fee"],
        }
    return decode_asset(line)


def encode_trust_line_asset(value: Any, field: str = "asset") -> Union[str, Dict[str, Any]]:
    """``TrustLineAsset``: an asset or a liquidity pool id."""
    descriptor = _as_descriptor(value, field)
    if _asset_type(descriptor, field) is not AssetType.POOL_SHARE:
        return encode_asset(descriptor, field)
    pool_id = descriptor.get("liquidity_pool_id")
    if pool_id is None:
        params = _pool_parameters(descriptor, field)["liquidity_pool_constant_product"]
        return {AssetType.POOL_SHARE.value: liquidity_pool_id(
            decode_asset(params["asset_a"]), decode_asset(params["asset_b"]), params["fee"])}
    return {AssetType.POOL_SHARE.value: encode_pool_id(pool_id, f"{field}.liquidity_pool_id")}


def decode_trust_line_asset(asset: Union[str, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(asset, Mapping) and AssetType.POOL_SHARE.value in asset:
        return {"type": "liquidity_pool_shares", "liquidity_pool_id": asset[AssetType.POOL_SHARE.value]}
    return decode_asset(asset)


# -- ids and data -------------------------------------------------------------

def encode_pool_id(value: Any, field: str = "liquidity_pool_id") -> str:
    """Normalize a pool id given as hex or an L... StrKey to lowercase hex."""
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("L"):
            try:
                return StrKey.decode_liquidity_pool(text).hex()
            except InvalidStrKey as e:
                raise InvalidField(e.message, field=field, cause=e)
        if len(text) == 64 and _HEX_RE.match(text):
            return text.lower()
    raise InvalidField(f"'{field}' must be a 32-byte hex pool id, got {value!r}", field=field)


def encode_balance_id(value: Any, field: str = "balance_id") -> str:
    """
    Normalize a claimable balance id to the 72-hex form.

    Accepts the 72-hex form, a bare 64-hex hash, or a B... StrKey.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("B"):
            try:
                return "00000000" + StrKey.decode_claimable_balance(text).hex()
            except InvalidStrKey as e:
                raise InvalidField(e.message, field=field, cause=e)
        if _HEX_RE.match(text) and len(text) in (64, 72):
            return text.lower().rjust(72, "0")
    raise InvalidField(f"'{field}' must be a claimable balance id, got {value!r}", field=field)


def encode_data_value(value: Any, field: str = "data_value") -> Optional[str]:
    """Hex encode a data entry value; ``None`` deletes the entry."""
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    if isinstance(value, str):
        return value.encode("utf-8").hex()
    raise InvalidField(f"'{field}' must be a string, got {value!r}", field=field)


def decode_data_value(value: Optional[str]) -> Union[str, bytes, None]:
    if value is None:
        return None
    raw = bytes.fromhex(value)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw


__all__ = [
    "STROOPS_PER_UNIT",
    "MAX_INT64",
    "MAX_INT64_STR",
    "encode_integer",
    "encode_amount",
    "decode_amount",
    "encode_limit",
    "decode_limit",
    "best_rational_approximation",
    "encode_price",
    "decode_price",
    "encode_flags",
    "decode_flags",
    "signer_key_strkey",
    "encode_signer_key",
    "decode_signer_key",
    "encode_asset",
    "decode_asset",
    "encode_assets",
    "encode_change_trust_asset",
    "decode_change_trust_asset",
    "encode_trust_line_asset",
    "decode_trust_line_asset",
    "liquidity_pool_id",
    "encode_pool_id",
    "encode_balance_id",
    "encode_data_value",
    "decode_data_value",
]
