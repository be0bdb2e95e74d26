"""
Transaction parser: XDR back to JSON trees and editable drafts.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union
import logging

from ..canonjson import dumps_canonical
from ..codec.hashes import sha256_bytes, signature_base
from ..codec.xdr_json import XdrJsonCodec, default_codec
from ..enums import MemoType
from ..runtime.config import NetworkConfig, TESTNET, get_network
from ..runtime.errors import DecodeError, HashFailure, InvalidDraft, TxBuildError
from .builders.registry import decompile_operation
from .models import TransactionDraft

logger = logging.getLogger(__name__)

ENVELOPE_TYPE_TAG = "TransactionEnvelope"


@dataclass(frozen=True)
class ParsedTransaction:
    """A decoded envelope with its hash on a given network."""

    envelope: Dict[str, Any] = field(repr=False)
    envelope_type: str
    network: NetworkConfig
    hash: Optional[str] = None
    hash_error: Optional[HashFailure] = None

    @property
    def json_text(self) -> str:
        return dumps_canonical(self.envelope)

    @property
    def transaction(self) -> Dict[str, Any]:
        """The signed transaction body (inner ``tx``)."""
        return self.envelope[self.envelope_type]["tx"]

    @property
    def signatures(self):
        return self.envelope[self.envelope_type]["signatures"]


def decode_envelope(xdr: str, codec: Optional[XdrJsonCodec] = None) -> Dict[str, Any]:
    """
    Decode a base64 ``TransactionEnvelope`` into its JSON tree.

    Raises:
        DecodeError: If the blob is not a valid envelope
    """
    codec = codec or default_codec()
    return codec.decode_tree(ENVELOPE_TYPE_TAG, xdr)


def parse_transaction(xdr: str, network: Union[str, NetworkConfig] = TESTNET,
                      codec: Optional[XdrJsonCodec] = None) -> ParsedTransaction:
    """
    Decode an envelope and hash it for ``network``.

    Args:
        xdr: Base64 envelope XDR
        network: Network name or config providing the passphrase
        codec: Schema codec

    Returns:
        ParsedTransaction

    Raises:
        DecodeError: If the blob is not a valid envelope
    """
    if isinstance(network, str):
        network = get_network(network)
    codec = codec or default_codec()
    envelope = decode_envelope(xdr, codec)
    (envelope_type, _), = envelope.items()

    try:
        tx_hash = sha256_bytes(signature_base(envelope, network.passphrase, codec)).hex()
    except (TxBuildError, KeyError, TypeError, ValueError) as e:
        logger.warning(f"Decoded envelope could not be hashed: {e}")
        return ParsedTransaction(envelope, envelope_type, network,
                                 hash_error=HashFailure(f"Unable to hash transaction: {e}", cause=e))
    return ParsedTransaction(envelope, envelope_type, network, hash=tx_hash)


def _time_bounds(cond: Any) -> Dict[str, Any]:
    if cond == "none":
        return {}
    if isinstance(cond, Mapping) and "time" in cond:
        bounds = cond["time"]
        return {"min_time": bounds["min_time"] or None, "max_time": bounds["max_time"] or None}
    raise InvalidDraft("Only time-bound preconditions can be edited as a draft",
                       details={"field": "time_bounds"})


def _memo(memo: Any) -> Dict[str, Any]:
    if memo == MemoType.NONE.value:
        return {}
    (memo_type, value), = memo.items()
    return {"type": memo_type, "value": value}


def draft_from_envelope(envelope: Union[str, Mapping[str, Any]],
                        codec: Optional[XdrJsonCodec] = None) -> TransactionDraft:
    """
    Rebuild an editable draft from an envelope.

    Args:
        envelope: Base64 envelope XDR or an already decoded tree
        codec: Schema codec

    Returns:
        TransactionDraft whose compilation reproduces the envelope body

    Raises:
        DecodeError: If the blob is not a valid envelope
        InvalidDraft: If the envelope is not a v1 transaction envelope or
            uses preconditions a draft cannot express, or holds values
            a draft rejects (such as a negative sequence number)
    """
    if isinstance(envelope, str):
        envelope = decode_envelope(envelope, codec)
    if not isinstance(envelope, Mapping) or len(envelope) != 1:
        raise DecodeError(f"Not a transaction envelope: {envelope!r}")
    (envelope_type, inner), = envelope.items()
    if envelope_type != "tx":
        raise InvalidDraft(f"Only 'tx' envelopes can be converted to drafts, got '{envelope_type}'")

    tx = inner["tx"]
    operations = [decompile_operation(op) for op in tx["operations"]]
    if not operations:
        raise InvalidDraft("Transaction has no operations", details={"field": "operations"})
    base_fee, remainder = divmod(tx["fee"], len(operations))
    if remainder:
        raise InvalidDraft(f"Fee {tx['fee']} is not a multiple of {len(operations)} operations",
                           details={"field": "fee"})

    return TransactionDraft.coerce({
        "source_account": tx["source_account"],
        "seq_num": tx["seq_num"],
        "fee": base_fee,
        "time_bounds": _time_bounds(tx["cond"]),
        "memo": _memo(tx["memo"]),
        "operations": operations,
    })


__all__ = ["ParsedTransaction", "decode_envelope", "parse_transaction", "draft_from_envelope"]
