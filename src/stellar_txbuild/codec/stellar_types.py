"""
Stellar transaction XDR schema.

Declares the subset of ``Stellar-transaction.x`` / ``Stellar-ledger-entries.x``
needed to encode and decode classic transaction envelopes. ``WIRE_TYPES``
maps the wire type tags accepted by ``XdrJsonCodec`` to their schema nodes.
"""

from typing import Dict

from ..enums import OperationKind
from .schema import (
    XdrType, Opaque, String, Optional, Array, Struct, Enum, Union, Ref,
    AccountId, MuxedAccount, SignerKey, AssetCode, ClaimableBalanceId,
    INT32, UINT32, INT64, UINT64,
)

WIRE_TYPES: Dict[str, XdrType] = {}


def lookup(name: str) -> XdrType:
    return WIRE_TYPES[name]


def _register(xdr_type: XdrType) -> XdrType:
    WIRE_TYPES[xdr_type.name] = xdr_type
    return xdr_type


HASH = Opaque(32, name="Hash")
UINT256 = Opaque(32, name="uint256")
POOL_ID = Opaque(32, name="PoolID")
ACCOUNT_ID = AccountId()
MUXED_ACCOUNT = _register(MuxedAccount())
SIGNER_KEY = _register(SignerKey())
CLAIMABLE_BALANCE_ID = ClaimableBalanceId()

ENVELOPE_TYPE_TX_V0 = 0
ENVELOPE_TYPE_TX = 2
ENVELOPE_TYPE_TX_FEE_BUMP = 5

# -- assets -------------------------------------------------------------------

ALPHA_NUM_4 = _register(Struct("AlphaNum4", [
    ("asset_code", AssetCode(4)),
    ("issuer", ACCOUNT_ID),
]))

ALPHA_NUM_12 = _register(Struct("AlphaNum12", [
    ("asset_code", AssetCode(12)),
    ("issuer", ACCOUNT_ID),
]))

ASSET = _register(Union("Asset", [
    ("native", 0, None),
    ("credit_alphanum4", 1, ALPHA_NUM_4),
    ("credit_alphanum12", 2, ALPHA_NUM_12),
]))

LIQUIDITY_POOL_PARAMETERS = _register(Union("LiquidityPoolParameters", [
    ("liquidity_pool_constant_product", 0, Struct("LiquidityPoolConstantProductParameters", [
        ("asset_a", ASSET),
        ("asset_b", ASSET),
        ("fee", INT32),
    ])),
]))

CHANGE_TRUST_ASSET = _register(Union("ChangeTrustAsset", [
    ("native", 0, None),
    ("credit_alphanum4", 1, ALPHA_NUM_4),
    ("credit_alphanum12", 2, ALPHA_NUM_12),
    ("pool_share", 3, LIQUIDITY_POOL_PARAMETERS),
]))

TRUST_LINE_ASSET = _register(Union("TrustLineAsset", [
    ("native", 0, None),
    ("credit_alphanum4", 1, ALPHA_NUM_4),
    ("credit_alphanum12", 2, ALPHA_NUM_12),
    ("pool_share", 3, POOL_ID),
]))

ASSET_CODE = _register(Union("AssetCode", [
    ("credit_alphanum4", 1, AssetCode(4)),
    ("credit_alphanum12", 2, AssetCode(12)),
]))

PRICE = _register(Struct("Price", [("n", INT32), ("d", INT32)]))

SIGNER = _register(Struct("Signer", [("key", SIGNER_KEY), ("weight", UINT32)]))

# -- claimable balances -------------------------------------------------------

CLAIM_PREDICATE = _register(Union("ClaimPredicate", [
    ("unconditional", 0, None),
    ("and", 1, Array(Ref("ClaimPredicate", lookup), 2)),
    ("or", 2, Array(Ref("ClaimPredicate", lookup), 2)),
    ("not", 3, Optional(Ref("ClaimPredicate", lookup))),
    ("before_absolute_time", 4, INT64),
    ("before_relative_time", 5, INT64),
]))

CLAIMANT = _register(Union("Claimant", [
    ("claimant_type_v0", 0, Struct("ClaimantV0", [
        ("destination", ACCOUNT_ID),
        ("predicate", CLAIM_PREDICATE),
    ])),
]))

# -- ledger keys --------------------------------------------------------------

LEDGER_KEY = _register(Union("LedgerKey", [
    ("account", 0, Struct("LedgerKeyAccount", [("account_id", ACCOUNT_ID)])),
    ("trustline", 1, Struct("LedgerKeyTrustLine", [
        ("account_id", ACCOUNT_ID),
        ("asset", TRUST_LINE_ASSET),
    ])),
    ("offer", 2, Struct("LedgerKeyOffer", [("seller_id", ACCOUNT_ID), ("offer_id", INT64)])),
    ("data", 3, Struct("LedgerKeyData", [("account_id", ACCOUNT_ID), ("data_name", String(64))])),
    ("claimable_balance", 4, Struct("LedgerKeyClaimableBalance", [
        ("balance_id", CLAIMABLE_BALANCE_ID),
    ])),
    ("liquidity_pool", 5, Struct("LedgerKeyLiquidityPool", [("liquidity_pool_id", POOL_ID)])),
]))

# -- operations ---------------------------------------------------------------

_ASSET_PATH = Array(ASSET, 5)

_OPERATION_BODIES: Dict[OperationKind, XdrType] = {
    OperationKind.CREATE_ACCOUNT: Struct("CreateAccountOp", [
        ("destination", ACCOUNT_ID),
        ("starting_balance", INT64),
    ]),
    OperationKind.PAYMENT: Struct("PaymentOp", [
        ("destination", MUXED_ACCOUNT),
        ("asset", ASSET),
        ("amount", INT64),
    ]),
    OperationKind.PATH_PAYMENT_STRICT_RECEIVE: Struct("PathPaymentStrictReceiveOp", [
        ("send_asset", ASSET),
        ("send_max", INT64),
        ("destination", MUXED_ACCOUNT),
        ("dest_asset", ASSET),
        ("dest_amount", INT64),
        ("path", _ASSET_PATH),
    ]),
    OperationKind.MANAGE_SELL_OFFER: Struct("ManageSellOfferOp", [
        ("selling", ASSET),
        ("buying", ASSET),
        ("amount", INT64),
        ("price", PRICE),
        ("offer_id", INT64),
    ]),
    OperationKind.CREATE_PASSIVE_SELL_OFFER: Struct("CreatePassiveSellOfferOp", [
        ("selling", ASSET),
        ("buying", ASSET),
        ("amount", INT64),
        ("price", PRICE),
    ]),
    OperationKind.SET_OPTIONS: Struct("SetOptionsOp", [
        ("inflation_dest", Optional(ACCOUNT_ID)),
        ("clear_flags", Optional(UINT32)),
        ("set_flags", Optional(UINT32)),
        ("master_weight", Optional(UINT32)),
        ("low_threshold", Optional(UINT32)),
        ("med_threshold", Optional(UINT32)),
        ("high_threshold", Optional(UINT32)),
        ("home_domain", Optional(String(32))),
        ("signer", Optional(SIGNER)),
    ]),
    OperationKind.CHANGE_TRUST: Struct("ChangeTrustOp", [
        ("line", CHANGE_TRUST_ASSET),
        ("limit", INT64),
    ]),
    OperationKind.ALLOW_TRUST: Struct("AllowTrustOp", [
        ("trustor", ACCOUNT_ID),
        ("asset", ASSET_CODE),
        ("authorize", UINT32),
    ]),
    OperationKind.ACCOUNT_MERGE: MUXED_ACCOUNT,
    OperationKind.MANAGE_DATA: Struct("ManageDataOp", [
        ("data_name", String(64)),
        ("data_value", Optional(Opaque(64, fixed=False, name="DataValue"))),
    ]),
    OperationKind.BUMP_SEQUENCE: Struct("BumpSequenceOp", [("bump_to", INT64)]),
    OperationKind.MANAGE_BUY_OFFER: Struct("ManageBuyOfferOp", [
        ("selling", ASSET),
        ("buying", ASSET),
        ("buy_amount", INT64),
        ("price", PRICE),
        ("offer_id", INT64),
    ]),
    OperationKind.PATH_PAYMENT_STRICT_SEND: Struct("PathPaymentStrictSendOp", [
        ("send_asset", ASSET),
        ("send_amount", INT64),
        ("destination", MUXED_ACCOUNT),
        ("dest_asset", ASSET),
        ("dest_min", INT64),
        ("path", _ASSET_PATH),
    ]),
    OperationKind.CREATE_CLAIMABLE_BALANCE: Struct("CreateClaimableBalanceOp", [
        ("asset", ASSET),
        ("amount", INT64),
        ("claimants", Array(CLAIMANT, 10)),
    ]),
    OperationKind.CLAIM_CLAIMABLE_BALANCE: Struct("ClaimClaimableBalanceOp", [
        ("balance_id", CLAIMABLE_BALANCE_ID),
    ]),
    OperationKind.BEGIN_SPONSORING_FUTURE_RESERVES: Struct("BeginSponsoringFutureReservesOp", [
        ("sponsored_id", ACCOUNT_ID),
    ]),
    OperationKind.REVOKE_SPONSORSHIP: Union("RevokeSponsorshipOp", [
        ("ledger_entry", 0, LEDGER_KEY),
        ("signer", 1, Struct("RevokeSponsorshipOpSigner", [
            ("account_id", ACCOUNT_ID),
            ("signer_key", SIGNER_KEY),
        ])),
    ]),
    OperationKind.CLAWBACK: Struct("ClawbackOp", [
        ("asset", ASSET),
        ("from", MUXED_ACCOUNT),
        ("amount", INT64),
    ]),
    OperationKind.CLAWBACK_CLAIMABLE_BALANCE: Struct("ClawbackClaimableBalanceOp", [
        ("balance_id", CLAIMABLE_BALANCE_ID),
    ]),
    OperationKind.SET_TRUST_LINE_FLAGS: Struct("SetTrustLineFlagsOp", [
        ("trustor", ACCOUNT_ID),
        ("asset", ASSET),
        ("clear_flags", UINT32),
        ("set_flags", UINT32),
    ]),
    OperationKind.LIQUIDITY_POOL_DEPOSIT: Struct("LiquidityPoolDepositOp", [
        ("liquidity_pool_id", POOL_ID),
        ("max_amount_a", INT64),
        ("max_amount_b", INT64),
        ("min_price", PRICE),
        ("max_price", PRICE),
    ]),
    OperationKind.LIQUIDITY_POOL_WITHDRAW: Struct("LiquidityPoolWithdrawOp", [
        ("liquidity_pool_id", POOL_ID),
        ("amount", INT64),
        ("min_amount_a", INT64),
        ("min_amount_b", INT64),
    ]),
}

# inflation and end_sponsoring_future_reserves have void bodies
OPERATION_BODY = _register(Union("OperationBody", [
    (kind.value, kind.discriminant, _OPERATION_BODIES.get(kind)) for kind in OperationKind
]))

OPERATION = _register(Struct("Operation", [
    ("source_account", Optional(MUXED_ACCOUNT)),
    ("body", OPERATION_BODY),
]))

# -- transactions -------------------------------------------------------------

TIME_BOUNDS = _register(Struct("TimeBounds", [("min_time", UINT64), ("max_time", UINT64)]))
LEDGER_BOUNDS = _register(Struct("LedgerBounds", [("min_ledger", UINT32), ("max_ledger", UINT32)]))

PRECONDITIONS = _register(Union("Preconditions", [
    ("none", 0, None),
    ("time", 1, TIME_BOUNDS),
    ("v2", 2, Struct("PreconditionsV2", [
        ("time_bounds", Optional(TIME_BOUNDS)),
        ("ledger_bounds", Optional(LEDGER_BOUNDS)),
        ("min_seq_num", Optional(INT64)),
        ("min_seq_age", UINT64),
        ("min_seq_ledger_gap", UINT32),
        ("extra_signers", Array(SIGNER_KEY, 2)),
    ])),
]))

MEMO = _register(Union("Memo", [
    ("none", 0, None),
    ("text", 1, String(28)),
    ("id", 2, UINT64),
    ("hash", 3, HASH),
    ("return", 4, HASH),
]))

_EXT_V0 = Union("TransactionExt", [("v0", 0, None)])
_OPERATIONS = Array(OPERATION, 100)

TRANSACTION = _register(Struct("Transaction", [
    ("source_account", MUXED_ACCOUNT),
    ("fee", UINT32),
    ("seq_num", INT64),
    ("cond", PRECONDITIONS),
    ("memo", MEMO),
    ("operations", _OPERATIONS),
    ("ext", _EXT_V0),
]))

TRANSACTION_V0 = _register(Struct("TransactionV0", [
    ("source_account_ed25519", UINT256),
    ("fee", UINT32),
    ("seq_num", INT64),
    ("time_bounds", Optional(TIME_BOUNDS)),
    ("memo", MEMO),
    ("operations", _OPERATIONS),
    ("ext", _EXT_V0),
]))

DECORATED_SIGNATURE = _register(Struct("DecoratedSignature", [
    ("hint", Opaque(4, name="SignatureHint")),
    ("signature", Opaque(64, fixed=False, name="Signature")),
]))

_SIGNATURES = Array(DECORATED_SIGNATURE, 20)

TRANSACTION_V0_ENVELOPE = _register(Struct("TransactionV0Envelope", [
    ("tx", TRANSACTION_V0),
    ("signatures", _SIGNATURES),
]))

TRANSACTION_V1_ENVELOPE = _register(Struct("TransactionV1Envelope", [
    ("tx", TRANSACTION),
    ("signatures", _SIGNATURES),
]))

FEE_BUMP_TRANSACTION = _register(Struct("FeeBumpTransaction", [
    ("fee_source", MUXED_ACCOUNT),
    ("fee", INT64),
    ("inner_tx", Union("FeeBumpTransactionInnerTx", [
        ("tx", ENVELOPE_TYPE_TX, TRANSACTION_V1_ENVELOPE),
    ])),
    ("ext", Union("FeeBumpTransactionExt", [("v0", 0, None)])),
]))

FEE_BUMP_TRANSACTION_ENVELOPE = _register(Struct("FeeBumpTransactionEnvelope", [
    ("tx", FEE_BUMP_TRANSACTION),
    ("signatures", _SIGNATURES),
]))

TRANSACTION_ENVELOPE = _register(Union("TransactionEnvelope", [
    ("tx_v0", ENVELOPE_TYPE_TX_V0, TRANSACTION_V0_ENVELOPE),
    ("tx", ENVELOPE_TYPE_TX, TRANSACTION_V1_ENVELOPE),
    ("tx_fee_bump", ENVELOPE_TYPE_TX_FEE_BUMP, FEE_BUMP_TRANSACTION_ENVELOPE),
]))


__all__ = ["WIRE_TYPES", "lookup", "ENVELOPE_TYPE_TX_V0", "ENVELOPE_TYPE_TX", "ENVELOPE_TYPE_TX_FEE_BUMP"]
