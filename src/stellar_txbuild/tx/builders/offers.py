"""
DEX offer builders.
"""

from __future__ import annotations

from ...enums import OperationKind
from ..fields import AmountField, AssetField, IntegerField, PriceField
from .base import BaseOperationBuilder


class ManageSellOfferBuilder(BaseOperationBuilder):
    """Builder for manage_sell_offer; ``offer_id`` 0 creates a new offer."""

    kind = OperationKind.MANAGE_SELL_OFFER
    fields = (
        AssetField("selling"),
        AssetField("buying"),
        AmountField("amount"),
        PriceField("price"),
        IntegerField("offer_id"),
    )


class ManageBuyOfferBuilder(BaseOperationBuilder):
    """Builder for manage_buy_offer; ``offer_id`` 0 creates a new offer."""

    kind = OperationKind.MANAGE_BUY_OFFER
    fields = (
        AssetField("selling"),
        AssetField("buying"),
        AmountField("buy_amount"),
        PriceField("price"),
        IntegerField("offer_id"),
    )


class CreatePassiveSellOfferBuilder(BaseOperationBuilder):
    kind = OperationKind.CREATE_PASSIVE_SELL_OFFER
    fields = (
        AssetField("selling"),
        AssetField("buying"),
        AmountField("amount"),
        PriceField("price"),
    )


__all__ = ["ManageSellOfferBuilder", "ManageBuyOfferBuilder", "CreatePassiveSellOfferBuilder"]
