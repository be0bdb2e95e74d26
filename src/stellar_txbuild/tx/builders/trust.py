"""
Trustline builders: establishing, authorizing, flagging and clawing back.
"""

from __future__ import annotations
from typing import Any, Dict, Mapping

from ...enums import AssetType, OperationKind, TrustLineFlag
from ...runtime.errors import InvalidAsset, InvalidField, MissingField
from ..fields import (
    AmountField, AssetField, ChangeTrustAssetField, FlagsField, LimitField, PassthroughField,
)
from ..primitives import encode_integer
from .base import BaseOperationBuilder

_AUTHORIZE_WORDS = {"true": 1, "false": 0}


class ChangeTrustBuilder(BaseOperationBuilder):
    """Builder for change_trust; an omitted limit means the maximum limit."""

    kind = OperationKind.CHANGE_TRUST
    fields = (
        ChangeTrustAssetField("line"),
        LimitField("limit"),
    )


class AllowTrustBuilder(BaseOperationBuilder):
    """
    Builder for the legacy allow_trust operation.

    The asset is narrowed to its code; ``authorize`` accepts a boolean or the
    integer levels 0-2.
    """

    kind = OperationKind.ALLOW_TRUST

    def compile(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        if not isinstance(params, Mapping):
            raise InvalidField("Operation parameters must be an object")
        trustor = params.get("trustor")
        if trustor is None or trustor == "":
            raise MissingField("trustor", self.kind.value)
        return {
            "trustor": trustor,
            "asset": self._asset_code(params),
            "authorize": self._authorize(params.get("authorize")),
        }

    def _asset_code(self, params: Mapping[str, Any]) -> Dict[str, str]:
        code = params.get("asset_code", params.get("assetCode"))
        if code is None:
            asset = params.get("asset")
            code = asset.get("code") if isinstance(asset, Mapping) else asset
        if code is None or code == "":
            raise MissingField("asset_code", self.kind.value)
        if not isinstance(code, str) or not code.isalnum() or len(code) > 12:
            raise InvalidAsset(f"'asset_code' must be 1-12 alphanumeric characters, got {code!r}",
                               field="asset_code")
        arm = AssetType.CREDIT_ALPHANUM4 if len(code) <= 4 else AssetType.CREDIT_ALPHANUM12
        return {arm.value: code}

    def _authorize(self, value: Any) -> int:
        if value is None or value == "":
            raise MissingField("authorize", self.kind.value)
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, str) and value.strip().lower() in _AUTHORIZE_WORDS:
            return _AUTHORIZE_WORDS[value.strip().lower()]
        level = encode_integer(value, "authorize")
        if level not in (0, 1, 2):
            raise InvalidField(f"'authorize' must be 0, 1 or 2, got {level}", field="authorize")
        return level

    def decompile(self, body: Mapping[str, Any]) -> Dict[str, Any]:
        (_, code), = body["asset"].items()
        return {"trustor": body["trustor"], "asset_code": code, "authorize": body["authorize"]}


class SetTrustLineFlagsBuilder(BaseOperationBuilder):
    """Builder for set_trust_line_flags; both masks are always emitted."""

    kind = OperationKind.SET_TRUST_LINE_FLAGS
    fields = (
        PassthroughField("trustor"),
        AssetField("asset"),
        FlagsField("clear_flags", TrustLineFlag, always_emit=True),
        FlagsField("set_flags", TrustLineFlag, always_emit=True),
    )


class ClawbackBuilder(BaseOperationBuilder):
    kind = OperationKind.CLAWBACK
    fields = (
        AssetField("asset"),
        PassthroughField("from"),
        AmountField("amount"),
    )


__all__ = ["ChangeTrustBuilder", "AllowTrustBuilder", "SetTrustLineFlagsBuilder", "ClawbackBuilder"]
