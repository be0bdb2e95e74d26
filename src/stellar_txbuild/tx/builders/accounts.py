"""
Account operation builders: creation, options, merge, data entries and
sequence bumps.
"""

from __future__ import annotations
from typing import Any, Dict, Mapping

from ...enums import AccountFlag, OperationKind
from ...runtime.errors import InvalidField, MissingField
from ..fields import (
    AmountField, DataValueField, FlagsField, IntegerField, PassthroughField, SignerField,
)
from .base import BaseOperationBuilder, VoidOperationBuilder


class CreateAccountBuilder(BaseOperationBuilder):
    """Builder for create_account operations."""

    kind = OperationKind.CREATE_ACCOUNT
    fields = (
        PassthroughField("destination"),
        AmountField("starting_balance"),
    )


class SetOptionsBuilder(BaseOperationBuilder):
    """
    Builder for set_options operations.

    Every parameter is optional; flag lists that add up to nothing are left
    unset rather than emitted as 0.
    """

    kind = OperationKind.SET_OPTIONS
    fields = (
        PassthroughField("inflation_dest", required=False),
        FlagsField("clear_flags", AccountFlag),
        FlagsField("set_flags", AccountFlag),
        IntegerField("master_weight", required=False),
        IntegerField("low_threshold", required=False),
        IntegerField("med_threshold", required=False),
        IntegerField("high_threshold", required=False),
        PassthroughField("home_domain", required=False),
        SignerField("signer", required=False),
    )


class AccountMergeBuilder(BaseOperationBuilder):
    """Builder for account_merge; the body is the destination address itself."""

    kind = OperationKind.ACCOUNT_MERGE

    def compile(self, params: Mapping[str, Any]) -> str:
        if not isinstance(params, Mapping):
            raise InvalidField("Operation parameters must be an object")
        destination = params.get("destination")
        if destination is None and len(params) == 1:
            # the build form keys the single value by whatever name it used
            destination = next(iter(params.values()))
        if destination is None or destination == "":
            raise MissingField("destination", self.kind.value)
        return destination

    def decompile(self, body: str) -> Dict[str, Any]:
        return {"destination": body}


class InflationBuilder(VoidOperationBuilder):
    kind = OperationKind.INFLATION


class ManageDataBuilder(BaseOperationBuilder):
    """Builder for manage_data; omitting ``data_value`` deletes the entry."""

    kind = OperationKind.MANAGE_DATA
    fields = (
        PassthroughField("data_name"),
        DataValueField("data_value", required=False),
    )


class BumpSequenceBuilder(BaseOperationBuilder):
    kind = OperationKind.BUMP_SEQUENCE
    fields = (IntegerField("bump_to"),)


__all__ = [
    "CreateAccountBuilder",
    "SetOptionsBuilder",
    "AccountMergeBuilder",
    "InflationBuilder",
    "ManageDataBuilder",
    "BumpSequenceBuilder",
]
