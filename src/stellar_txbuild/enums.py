"""
Enumerations shared by the compiler, the builders and the XDR schema.

String values are the snake_case names used by the XDR-JSON representation.
"""

from enum import Enum, IntFlag


class OperationKind(str, Enum):
    """Classic operation kinds, in XDR ``OperationType`` order."""

    CREATE_ACCOUNT = "create_account"
    PAYMENT = "payment"
    PATH_PAYMENT_STRICT_RECEIVE = "path_payment_strict_receive"
    MANAGE_SELL_OFFER = "manage_sell_offer"
    CREATE_PASSIVE_SELL_OFFER = "create_passive_sell_offer"
    SET_OPTIONS = "set_options"
    CHANGE_TRUST = "change_trust"
    ALLOW_TRUST = "allow_trust"
    ACCOUNT_MERGE = "account_merge"
    INFLATION = "inflation"
    MANAGE_DATA = "manage_data"
    BUMP_SEQUENCE = "bump_sequence"
    MANAGE_BUY_OFFER = "manage_buy_offer"
    PATH_PAYMENT_STRICT_SEND = "path_payment_strict_send"
    CREATE_CLAIMABLE_BALANCE = "create_claimable_balance"
    CLAIM_CLAIMABLE_BALANCE = "claim_claimable_balance"
    BEGIN_SPONSORING_FUTURE_RESERVES = "begin_sponsoring_future_reserves"
    END_SPONSORING_FUTURE_RESERVES = "end_sponsoring_future_reserves"
    REVOKE_SPONSORSHIP = "revoke_sponsorship"
    CLAWBACK = "clawback"
    CLAWBACK_CLAIMABLE_BALANCE = "clawback_claimable_balance"
    SET_TRUST_LINE_FLAGS = "set_trust_line_flags"
    LIQUIDITY_POOL_DEPOSIT = "liquidity_pool_deposit"
    LIQUIDITY_POOL_WITHDRAW = "liquidity_pool_withdraw"

    @property
    def discriminant(self) -> int:
        """XDR ``OperationType`` value."""
        return list(OperationKind).index(self)


class AssetType(str, Enum):
    NATIVE = "native"
    CREDIT_ALPHANUM4 = "credit_alphanum4"
    CREDIT_ALPHANUM12 = "credit_alphanum12"
    POOL_SHARE = "pool_share"


class MemoType(str, Enum):
    NONE = "none"
    TEXT = "text"
    ID = "id"
    HASH = "hash"
    RETURN = "return"


class SignerKeyType(str, Enum):
    """Signer key tags as entered in the build form."""

    ED25519_PUBLIC_KEY = "ed25519PublicKey"
    SHA256_HASH = "sha256Hash"
    PRE_AUTH_TX = "preAuthTx"


class LedgerEntryType(str, Enum):
    """Ledger entry types that can be targeted by ``revoke_sponsorship``."""

    ACCOUNT = "account"
    TRUSTLINE = "trustline"
    OFFER = "offer"
    DATA = "data"
    CLAIMABLE_BALANCE = "claimable_balance"
    LIQUIDITY_POOL = "liquidity_pool"


class AccountFlag(IntFlag):
    """Account flags settable through ``set_options``."""

    AUTH_REQUIRED = 1
    AUTH_REVOCABLE = 2
    AUTH_IMMUTABLE = 4
    AUTH_CLAWBACK_ENABLED = 8


class TrustLineFlag(IntFlag):
    """Trustline flags used by ``set_trust_line_flags``."""

    AUTHORIZED = 1
    AUTHORIZED_TO_MAINTAIN_LIABILITIES = 2
    CLAWBACK_ENABLED = 4


__all__ = [
    "OperationKind",
    "AssetType",
    "MemoType",
    "SignerKeyType",
    "LedgerEntryType",
    "AccountFlag",
    "TrustLineFlag",
]
