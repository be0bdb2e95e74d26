"""
Claimable balance builders.
"""

from __future__ import annotations

from ...enums import OperationKind
from ..fields import AmountField, AssetField, BalanceIdField, ClaimantsField
from .base import BaseOperationBuilder


class CreateClaimableBalanceBuilder(BaseOperationBuilder):
    """
    Builder for create_claimable_balance.

    ``claimants`` is a list of ``{"destination", "predicate"}``; see
    ``stellar_txbuild.tx.predicates`` for the accepted predicate forms.
    """

    kind = OperationKind.CREATE_CLAIMABLE_BALANCE
    fields = (
        AssetField("asset"),
        AmountField("amount"),
        ClaimantsField("claimants"),
    )


class ClaimClaimableBalanceBuilder(BaseOperationBuilder):
    kind = OperationKind.CLAIM_CLAIMABLE_BALANCE
    fields = (BalanceIdField("balance_id"),)


class ClawbackClaimableBalanceBuilder(BaseOperationBuilder):
    kind = OperationKind.CLAWBACK_CLAIMABLE_BALANCE
    fields = (BalanceIdField("balance_id"),)


__all__ = [
    "CreateClaimableBalanceBuilder",
    "ClaimClaimableBalanceBuilder",
    "ClawbackClaimableBalanceBuilder",
]
