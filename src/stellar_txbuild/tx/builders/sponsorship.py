"""
Sponsorship builders.

``revoke_sponsorship`` targets either a ledger entry or an account signer.
Its parameters name the target type and carry the target's fields::

    {"type": "trustline", "data": {"account_id": "G...", "asset": {...}}}
    {"type": "signer", "data": {"account_id": "G...", "signer": {"type": "sha256Hash", "key": "..."}}}
"""

from __future__ import annotations
from typing import Any, Dict, Mapping, Tuple

from ...enums import LedgerEntryType, OperationKind
from ...runtime.errors import InvalidField, MissingField
from ..fields import (
    BalanceIdField, IntegerField, OperationField, PassthroughField, PoolIdField,
    SignerKeyField, TrustLineAssetField, compile_fields, decompile_fields,
)
from .base import BaseOperationBuilder, VoidOperationBuilder

SIGNER_TARGET = "signer"

LEDGER_ENTRY_FIELDS: Dict[LedgerEntryType, Tuple[OperationField, ...]] = {
    LedgerEntryType.ACCOUNT: (PassthroughField("account_id"),),
    LedgerEntryType.TRUSTLINE: (PassthroughField("account_id"), TrustLineAssetField("asset")),
    LedgerEntryType.OFFER: (PassthroughField("seller_id"), IntegerField("offer_id")),
    LedgerEntryType.DATA: (PassthroughField("account_id"), PassthroughField("data_name")),
    LedgerEntryType.CLAIMABLE_BALANCE: (BalanceIdField("balance_id"),),
    LedgerEntryType.LIQUIDITY_POOL: (PoolIdField("liquidity_pool_id"),),
}

_SIGNER_ACCOUNT = PassthroughField("account_id")
_SIGNER_KEY = SignerKeyField("signer")


class BeginSponsoringFutureReservesBuilder(BaseOperationBuilder):
    kind = OperationKind.BEGIN_SPONSORING_FUTURE_RESERVES
    fields = (PassthroughField("sponsored_id"),)


class EndSponsoringFutureReservesBuilder(VoidOperationBuilder):
    kind = OperationKind.END_SPONSORING_FUTURE_RESERVES


class RevokeSponsorshipBuilder(BaseOperationBuilder):
    """Builder for revoke_sponsorship (ledger entry or signer target)."""

    kind = OperationKind.REVOKE_SPONSORSHIP

    def _target(self, params: Mapping[str, Any]) -> Tuple[str, Mapping[str, Any]]:
        if not isinstance(params, Mapping):
            raise InvalidField("Operation parameters must be an object")
        target = params.get("revoke_sponsorship", params.get("revokeSponsorship", params))
        if not isinstance(target, Mapping):
            raise InvalidField("'revoke_sponsorship' must be an object", field="revoke_sponsorship")
        target_type = target.get("type")
        if target_type is None or target_type == "":
            raise MissingField("type", self.kind.value)
        data = target.get("data")
        if data is None:
            data = {k: v for k, v in target.items() if k != "type"}
        if not isinstance(data, Mapping):
            raise InvalidField("'data' must be an object", field="data")
        return target_type, data

    def compile(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        target_type, data = self._target(params)
        kind = self.kind.value

        if target_type == SIGNER_TARGET:
            signer = data.get("signer", data.get("signer_key"))
            return {
                "signer": {
                    "account_id": _SIGNER_ACCOUNT.compile(data, kind),
                    "signer_key": _SIGNER_KEY.compile({"signer": signer}, kind),
                }
            }

        try:
            entry_type = LedgerEntryType(target_type)
        except ValueError:
            raise InvalidField(f"Unknown sponsorship target type {target_type!r}", field="type")
        return {"ledger_entry": {entry_type.value: compile_fields(LEDGER_ENTRY_FIELDS[entry_type], data, kind)}}

    def decompile(self, body: Mapping[str, Any]) -> Dict[str, Any]:
        if "signer" in body:
            signer = body["signer"]
            return {
                "type": SIGNER_TARGET,
                "data": {
                    "account_id": signer["account_id"],
                    "signer": _SIGNER_KEY.decode(signer["signer_key"]),
                },
            }
        (entry_type, entry), = body["ledger_entry"].items()
        fields = LEDGER_ENTRY_FIELDS[LedgerEntryType(entry_type)]
        return {"type": entry_type, "data": decompile_fields(fields, entry)}


__all__ = [
    "LEDGER_ENTRY_FIELDS",
    "BeginSponsoringFutureReservesBuilder",
    "EndSponsoringFutureReservesBuilder",
    "RevokeSponsorshipBuilder",
]
