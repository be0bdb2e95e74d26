"""
Payment operation builders.
"""

from __future__ import annotations

from ...enums import OperationKind
from ..fields import AmountField, AssetField, AssetPathField, PassthroughField
from .base import BaseOperationBuilder


class PaymentBuilder(BaseOperationBuilder):
    """Builder for payment operations."""

    kind = OperationKind.PAYMENT
    fields = (
        PassthroughField("destination"),
        AssetField("asset"),
        AmountField("amount"),
    )


class PathPaymentStrictReceiveBuilder(BaseOperationBuilder):
    """Builder for path_payment_strict_receive operations."""

    kind = OperationKind.PATH_PAYMENT_STRICT_RECEIVE
    fields = (
        AssetField("send_asset"),
        AmountField("send_max"),
        PassthroughField("destination"),
        AssetField("dest_asset"),
        AmountField("dest_amount"),
        AssetPathField("path"),
    )


class PathPaymentStrictSendBuilder(BaseOperationBuilder):
    """Builder for path_payment_strict_send operations."""

    kind = OperationKind.PATH_PAYMENT_STRICT_SEND
    fields = (
        AssetField("send_asset"),
        AmountField("send_amount"),
        PassthroughField("destination"),
        AssetField("dest_asset"),
        AmountField("dest_min"),
        AssetPathField("path"),
    )


__all__ = [
    "PaymentBuilder",
    "PathPaymentStrictReceiveBuilder",
    "PathPaymentStrictSendBuilder",
]
