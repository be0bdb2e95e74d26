"""
Operation builder registry.

Maps every ``OperationKind`` to its builder. The mapping is checked when the
module is imported so a kind without a builder fails immediately rather than
at compile time.
"""

from __future__ import annotations
from typing import Any, Dict, List, Mapping, Type, Union
import logging

from ...enums import OperationKind
from ...runtime.errors import UnsupportedOperation
from ..models import OperationDraft
from .base import BaseOperationBuilder
from .accounts import (
    AccountMergeBuilder, BumpSequenceBuilder, CreateAccountBuilder, InflationBuilder,
    ManageDataBuilder, SetOptionsBuilder,
)
from .claimable import (
    ClaimClaimableBalanceBuilder, ClawbackClaimableBalanceBuilder, CreateClaimableBalanceBuilder,
)
from .liquidity import LiquidityPoolDepositBuilder, LiquidityPoolWithdrawBuilder
from .offers import CreatePassiveSellOfferBuilder, ManageBuyOfferBuilder, ManageSellOfferBuilder
from .payments import PathPaymentStrictReceiveBuilder, PathPaymentStrictSendBuilder, PaymentBuilder
from .sponsorship import (
    BeginSponsoringFutureReservesBuilder, EndSponsoringFutureReservesBuilder, RevokeSponsorshipBuilder,
)
from .trust import AllowTrustBuilder, ChangeTrustBuilder, ClawbackBuilder, SetTrustLineFlagsBuilder

logger = logging.getLogger(__name__)

_BUILDERS: List[Type[BaseOperationBuilder]] = [
    CreateAccountBuilder,
    PaymentBuilder,
    PathPaymentStrictReceiveBuilder,
    ManageSellOfferBuilder,
    CreatePassiveSellOfferBuilder,
    SetOptionsBuilder,
    ChangeTrustBuilder,
    AllowTrustBuilder,
    AccountMergeBuilder,
    InflationBuilder,
    ManageDataBuilder,
    BumpSequenceBuilder,
    ManageBuyOfferBuilder,
    PathPaymentStrictSendBuilder,
    CreateClaimableBalanceBuilder,
    ClaimClaimableBalanceBuilder,
    BeginSponsoringFutureReservesBuilder,
    EndSponsoringFutureReservesBuilder,
    RevokeSponsorshipBuilder,
    ClawbackBuilder,
    ClawbackClaimableBalanceBuilder,
    SetTrustLineFlagsBuilder,
    LiquidityPoolDepositBuilder,
    LiquidityPoolWithdrawBuilder,
]

# Builder registry - maps operation kinds to builder classes
BUILDER_REGISTRY: Dict[OperationKind, Type[BaseOperationBuilder]] = {
    builder_cls.kind: builder_cls for builder_cls in _BUILDERS
}


def _check_registry() -> None:
    missing = [kind.value for kind in OperationKind if kind not in BUILDER_REGISTRY]
    if missing:
        raise RuntimeError(f"No operation builder registered for: {', '.join(missing)}")


_check_registry()


def resolve_kind(kind: Union[str, OperationKind]) -> OperationKind:
    """
    Resolve an operation kind name.

    Raises:
        UnsupportedOperation: If the name is not a known operation kind
    """
    if isinstance(kind, OperationKind):
        return kind
    try:
        return OperationKind(kind)
    except ValueError:
        raise UnsupportedOperation(kind)


def get_builder_for(kind: Union[str, OperationKind]) -> BaseOperationBuilder:
    """
    Get an operation builder for the specified kind.

    Args:
        kind: Operation kind (e.g. 'payment', 'change_trust')

    Returns:
        Operation builder instance

    Raises:
        UnsupportedOperation: If the kind is not supported
    """
    builder_cls = BUILDER_REGISTRY.get(resolve_kind(kind))
    if builder_cls is None:
        raise UnsupportedOperation(kind)
    return builder_cls()


def compile_operation(draft: Union[OperationDraft, Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Compile one operation draft into an ``Operation`` tree.

    Args:
        draft: Operation draft (model or mapping with ``kind`` / ``params``)

    Returns:
        ``{"source_account": str | None, "body": <OperationBody>}``

    Raises:
        UnsupportedOperation: If the kind is not supported
        TxBuildError: Any field failure, unchanged
    """
    draft = OperationDraft.coerce(draft)
    builder = get_builder_for(draft.kind)
    body = builder.to_body(draft.params)
    logger.debug(f"Compiled {builder.kind.value} operation")
    return {
        "source_account": draft.source_account or None,
        "body": body,
    }


def decompile_operation(operation: Mapping[str, Any]) -> OperationDraft:
    """Decode an ``Operation`` tree into an ``OperationDraft``."""
    body = operation["body"]
    if isinstance(body, str):
        kind, value = body, None
    else:
        (kind, value), = body.items()
    builder = get_builder_for(kind)
    return OperationDraft(
        kind=builder.kind.value,
        source_account=operation.get("source_account"),
        params=builder.decompile(value),
    )


def list_operation_kinds() -> List[str]:
    """
    Get list of all supported operation kinds.

    Returns:
        Operation kind names in XDR order
    """
    return [kind.value for kind in BUILDER_REGISTRY]


def register_builder(builder_cls: Type[BaseOperationBuilder]) -> None:
    """
    Register a replacement builder for its kind.

    Args:
        builder_cls: Builder class
    """
    BUILDER_REGISTRY[builder_cls.kind] = builder_cls


__all__ = [
    "BUILDER_REGISTRY",
    "resolve_kind",
    "get_builder_for",
    "compile_operation",
    "decompile_operation",
    "list_operation_kinds",
    "register_builder",
]
