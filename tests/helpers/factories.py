"""
Test factories for creating drafts and keys consistently.

Addresses are derived from repeated seed bytes so every test run sees the
same values.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional

from stellar_txbuild.crypto.strkey import StrKey

ZERO_ADDRESS = "GAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAWHF"


def mk_raw_key(seed: int) -> bytes:
    """32 bytes of ``seed``."""
    return bytes([seed % 256]) * 32


def mk_address(seed: int = 1) -> str:
    """
    Create a deterministic G... address.

    Args:
        seed: Byte value repeated to form the public key

    Returns:
        StrKey encoded account address
    """
    return StrKey.encode_ed25519_public_key(mk_raw_key(seed))


def mk_muxed_address(seed: int = 1, muxed_id: int = 42) -> str:
    return StrKey.encode_muxed_account(mk_raw_key(seed), muxed_id)


def mk_asset(code: str = "USD", issuer_seed: int = 9) -> Dict[str, Any]:
    """Create a credit asset descriptor with the type chosen by code length."""
    asset_type = "credit_alphanum4" if len(code) <= 4 else "credit_alphanum12"
    return {"type": asset_type, "code": code, "issuer": mk_address(issuer_seed)}


def mk_operation(kind: str, source_account: Optional[str] = None, **params) -> Dict[str, Any]:
    op = {"kind": kind, "params": params}
    if source_account is not None:
        op["source_account"] = source_account
    return op


def mk_draft(operations: Optional[List[Dict[str, Any]]] = None, **overrides) -> Dict[str, Any]:
    """
    Create a transaction draft mapping.

    Args:
        operations: Operation drafts (a single payment by default)
        **overrides: Top-level draft fields to replace

    Returns:
        Draft mapping accepted by ``TransactionDraft``
    """
    if operations is None:
        operations = [mk_operation("payment", destination=mk_address(2),
                                   asset={"type": "native"}, amount="10")]
    draft = {
        "source_account": mk_address(1),
        "seq_num": "1234567890",
        "fee": "100",
        "time_bounds": {},
        "memo": {},
        "operations": operations,
    }
    draft.update(overrides)
    return draft


def minimal_params(kind: str) -> Dict[str, Any]:
    """
    Minimal valid parameters for every operation kind.

    Args:
        kind: Operation kind name

    Returns:
        Parameter bag that compiles without errors
    """
    native = {"type": "native"}
    usd = mk_asset("USD")
    pool_id = "ab" * 32
    balance_id = "00000000" + "cd" * 32
    return {
        "create_account": {"destination": mk_address(2), "starting_balance": "1"},
        "payment": {"destination": mk_address(2), "asset": native, "amount": "10"},
        "path_payment_strict_receive": {
            "send_asset": native, "send_max": "5", "destination": mk_address(2),
            "dest_asset": usd, "dest_amount": "4",
        },
        "manage_sell_offer": {
            "selling": native, "buying": usd, "amount": "100", "price": "1.5", "offer_id": "0",
        },
        "create_passive_sell_offer": {"selling": usd, "buying": native, "amount": "1", "price": "2"},
        "set_options": {},
        "change_trust": {"line": usd},
        "allow_trust": {"trustor": mk_address(3), "asset_code": "USD", "authorize": True},
        "account_merge": {"destination": mk_address(2)},
        "inflation": {},
        "manage_data": {"data_name": "config", "data_value": "on"},
        "bump_sequence": {"bump_to": "99"},
        "manage_buy_offer": {
            "selling": native, "buying": usd, "buy_amount": "3", "price": "0.5", "offer_id": 7,
        },
        "path_payment_strict_send": {
            "send_asset": usd, "send_amount": "5", "destination": mk_address(2),
            "dest_asset": native, "dest_min": "1", "path": [mk_asset("EUR")],
        },
        "create_claimable_balance": {
            "asset": native, "amount": "2",
            "claimants": [{"destination": mk_address(4), "predicate": {"unconditional": True}}],
        },
        "claim_claimable_balance": {"balance_id": balance_id},
        "begin_sponsoring_future_reserves": {"sponsored_id": mk_address(5)},
        "end_sponsoring_future_reserves": {},
        "revoke_sponsorship": {"type": "account", "data": {"account_id": mk_address(5)}},
        "clawback": {"asset": usd, "from": mk_address(6), "amount": "1"},
        "clawback_claimable_balance": {"balance_id": balance_id},
        "set_trust_line_flags": {"trustor": mk_address(3), "asset": usd},
        "liquidity_pool_deposit": {
            "liquidity_pool_id": pool_id, "max_amount_a": "10", "max_amount_b": "20",
            "min_price": "0.5", "max_price": "2",
        },
        "liquidity_pool_withdraw": {
            "liquidity_pool_id": pool_id, "amount": "5", "min_amount_a": "1", "min_amount_b": "1",
        },
    }[kind]
