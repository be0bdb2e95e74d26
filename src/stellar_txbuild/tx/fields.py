"""
Declarative operation fields.

Each builder declares its parameters as ``OperationField`` instances. A field
knows its name, whether it is required or has a default, and which primitive
codec turns the form value into its XDR-JSON shape (``encode``) and back
(``decode``).
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Optional, Type
from abc import ABC, abstractmethod
from enum import IntFlag
import logging

from ..runtime.errors import InvalidField, MissingField
from . import primitives
from .predicates import compile_predicate, decompile_predicate, predicate_to_dict

logger = logging.getLogger(__name__)

_MISSING = object()


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


class OperationField(ABC):
    """
    Base class for operation parameters.

    Absent values (missing key, ``None`` or ``""``) resolve to the default when
    one is declared, to ``None`` for optional fields, and raise
    ``MissingField`` otherwise.
    """

    def __init__(self, name: str, required: bool = True, default: Any = _MISSING):
        """
        Initialize operation field.

        Args:
            name: Parameter name, identical to the XDR-JSON field name
            required: Whether the parameter must be supplied
            default: Form value used when the parameter is absent
        """
        self.name = name
        self.required = required
        self.default = default

    @property
    def has_default(self) -> bool:
        return self.default is not _MISSING

    def compile(self, params: Mapping[str, Any], kind: Optional[str] = None) -> Any:
        """
        Resolve and encode this field from a parameter bag.

        Args:
            params: Operation parameters
            kind: Operation kind, used in error messages

        Returns:
            Encoded value (``None`` for an absent optional field)

        Raises:
            MissingField: If the field is required, absent and has no default
        """
        value = params.get(self.name)
        if _is_blank(value):
            if self.has_default:
                return self.encode(self.default)
            if not self.required:
                return None
            raise MissingField(self.name, kind)
        return self.encode(value)

    @abstractmethod
    def encode(self, value: Any) -> Any:
        """Encode a present form value."""
        pass

    def decode(self, value: Any) -> Any:
        """Decode a wire value back into its form value."""
        return value

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.name}, required={self.required})"


class PassthroughField(OperationField):
    """Addresses, names and other values the schema accepts verbatim."""

    def encode(self, value: Any) -> Any:
        return value


class IntegerField(OperationField):

    def encode(self, value: Any) -> int:
        return primitives.encode_integer(value, self.name)


class AmountField(OperationField):

    def encode(self, value: Any) -> int:
        return primitives.encode_amount(value, self.name)

    def decode(self, value: int) -> str:
        return primitives.decode_amount(value)


class LimitField(OperationField):
    """Trustline limit; defaults to the maximum signed 64-bit value."""

    def __init__(self, name: str = "limit"):
        super().__init__(name, required=False, default=primitives.MAX_INT64_STR)

    def encode(self, value: Any) -> int:
        return primitives.encode_limit(value, self.name)

    def decode(self, value: int) -> str:
        return primitives.decode_limit(value)


class PriceField(OperationField):

    def encode(self, value: Any) -> Dict[str, int]:
        return primitives.encode_price(value, self.name)

    def decode(self, value: Mapping[str, int]) -> Dict[str, int]:
        return primitives.decode_price(value)


class AssetField(OperationField):

    def encode(self, value: Any) -> Any:
        return primitives.encode_asset(value, self.name)

    def decode(self, value: Any) -> Dict[str, Any]:
        return primitives.decode_asset(value)


class ChangeTrustAssetField(OperationField):
    """Trustline asset: a regular asset or liquidity pool shares."""

    def encode(self, value: Any) -> Any:
        return primitives.encode_change_trust_asset(value, self.name)

    def decode(self, value: Any) -> Dict[str, Any]:
        return primitives.decode_change_trust_asset(value)


class TrustLineAssetField(OperationField):

    def encode(self, value: Any) -> Any:
        return primitives.encode_trust_line_asset(value, self.name)

    def decode(self, value: Any) -> Dict[str, Any]:
        return primitives.decode_trust_line_asset(value)


class AssetPathField(OperationField):
    """Payment path; an absent path is an empty list."""

    def __init__(self, name: str = "path"):
        super().__init__(name, required=False, default=[])

    def encode(self, value: Any) -> List[Any]:
        if not isinstance(value, (list, tuple)):
            raise InvalidField(f"'{self.name}' must be a list of assets", field=self.name)
        return primitives.encode_assets(value, self.name)

    def decode(self, value: Iterable[Any]) -> List[Dict[str, Any]]:
        return [primitives.decode_asset(asset) for asset in value]


class FlagsField(OperationField):
    """
    Bitmask built from a list of flag names.

    With ``always_emit`` the mask is always present and defaults to 0;
    otherwise an empty mask is left unset (``None``).
    """

    def __init__(self, name: str, vocabulary: Type[IntFlag], always_emit: bool = False):
        super().__init__(name, required=False, default=[] if always_emit else _MISSING)
        self.vocabulary = vocabulary
        self.always_emit = always_emit

    def encode(self, value: Any) -> Optional[int]:
        total = primitives.encode_flags(value, self.vocabulary, self.name)
        if not total and not self.always_emit:
            return None
        return total

    def decode(self, value: Optional[int]) -> List[str]:
        return primitives.decode_flags(value, self.vocabulary)


class SignerField(OperationField):

    def encode(self, value: Any) -> Dict[str, Any]:
        return primitives.encode_signer_key(value, self.name)

    def decode(self, value: Mapping[str, Any]) -> Dict[str, Any]:
        return primitives.decode_signer_key(value["key"], value["weight"])


class SignerKeyField(OperationField):
    """Bare signer key (no weight), as targeted by ``revoke_sponsorship``."""

    def encode(self, value: Any) -> str:
        return primitives.signer_key_strkey(value, self.name)

    def decode(self, value: str) -> Dict[str, Any]:
        return primitives.decode_signer_key(value)


class DataValueField(OperationField):

    def encode(self, value: Any) -> Optional[str]:
        return primitives.encode_data_value(value, self.name)

    def decode(self, value: Optional[str]) -> Any:
        return primitives.decode_data_value(value)


class BalanceIdField(OperationField):

    def encode(self, value: Any) -> str:
        return primitives.encode_balance_id(value, self.name)


class PoolIdField(OperationField):

    def encode(self, value: Any) -> str:
        return primitives.encode_pool_id(value, self.name)


class ClaimantsField(OperationField):
    """Claimant list; each predicate is compiled and wrapped in ``claimant_type_v0``."""

    def encode(self, value: Any) -> List[Dict[str, Any]]:
        if not isinstance(value, (list, tuple)):
            raise InvalidField(f"'{self.name}' must be a list of claimants", field=self.name)
        claimants = []
        for i, claimant in enumerate(value):
            if not isinstance(claimant, Mapping):
                raise InvalidField(f"'{self.name}[{i}]' must be an object", field=self.name)
            destination = claimant.get("destination")
            if _is_blank(destination):
                raise MissingField(f"{self.name}[{i}].destination")
            if claimant.get("predicate") is None:
                raise MissingField(f"{self.name}[{i}].predicate")
            claimants.append({
                "claimant_type_v0": {
                    "destination": destination,
                    "predicate": compile_predicate(claimant["predicate"]),
                },
            })
        return claimants

    def decode(self, value: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        claimants = []
        for claimant in value:
            body = claimant["claimant_type_v0"]
            predicate = decompile_predicate(body["predicate"])
            claimants.append({"destination": body["destination"], "predicate": predicate_to_dict(predicate)})
        return claimants


def compile_fields(fields: Iterable[OperationField], params: Mapping[str, Any],
                   kind: Optional[str] = None) -> Dict[str, Any]:
    """
    Encode every declared field of an operation.

    Parameters not declared by ``fields`` are ignored.

    Args:
        fields: Declared fields
        params: Operation parameters
        kind: Operation kind, used in error messages

    Returns:
        Wire body keyed by field name
    """
    if not isinstance(params, Mapping):
        raise InvalidField(f"Operation parameters must be an object, got {type(params).__name__}")
    body = {field.name: field.compile(params, kind) for field in fields}
    logger.debug(f"Compiled {kind} fields: {sorted(body)}")
    return body


def decompile_fields(fields: Iterable[OperationField], body: Mapping[str, Any]) -> Dict[str, Any]:
    """Decode a wire body into form parameters, dropping unset optionals."""
    params = {}
    for field in fields:
        value = body.get(field.name)
        if value is None:
            continue
        params[field.name] = field.decode(value)
    return params


__all__ = [
    "OperationField",
    "PassthroughField",
    "IntegerField",
    "AmountField",
    "LimitField",
    "PriceField",
    "AssetField",
    "ChangeTrustAssetField",
    "TrustLineAssetField",
    "AssetPathField",
    "FlagsField",
    "SignerField",
    "SignerKeyField",
    "DataValueField",
    "BalanceIdField",
    "PoolIdField",
    "ClaimantsField",
    "compile_fields",
    "decompile_fields",
]
