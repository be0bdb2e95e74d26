"""
Liquidity pool builders.
"""

from __future__ import annotations

from ...enums import OperationKind
from ..fields import AmountField, PoolIdField, PriceField
from .base import BaseOperationBuilder


class LiquidityPoolDepositBuilder(BaseOperationBuilder):
    """Builder for liquidity_pool_deposit; prices bound the deposit ratio."""

    kind = OperationKind.LIQUIDITY_POOL_DEPOSIT
    fields = (
        PoolIdField("liquidity_pool_id"),
        AmountField("max_amount_a"),
        AmountField("max_amount_b"),
        PriceField("min_price"),
        PriceField("max_price"),
    )


class LiquidityPoolWithdrawBuilder(BaseOperationBuilder):
    kind = OperationKind.LIQUIDITY_POOL_WITHDRAW
    fields = (
        PoolIdField("liquidity_pool_id"),
        AmountField("amount"),
        AmountField("min_amount_a"),
        AmountField("min_amount_b"),
    )


__all__ = ["LiquidityPoolDepositBuilder", "LiquidityPoolWithdrawBuilder"]
