"""
Transaction compiler.

Turns a ``TransactionDraft`` into a ``TransactionEnvelope`` XDR blob and its
hash. Compilation is all-or-nothing: a draft that fails anywhere before the
bytes exist yields an exception and no output. A failure to derive the hash
afterwards is recorded on the result instead.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union
import logging

from ..canonjson import dumps_canonical
from ..codec.hashes import transaction_hash
from ..codec.xdr_json import BinaryCodec, XdrJsonCodec, default_codec
from ..enums import MemoType
from ..runtime.config import CompilerConfig, FUTURENET, NetworkConfig, PUBLIC, TESTNET, get_network
from ..runtime.errors import EncodeFailure, HashFailure, InvalidDraft, TxBuildError
from .builders.registry import compile_operation
from .models import CompiledTransaction, Memo, TimeBounds, TransactionDraft

logger = logging.getLogger(__name__)

DraftLike = Union[TransactionDraft, Mapping[str, Any]]


def compile_time_bounds(time_bounds: Optional[TimeBounds]) -> Dict[str, Any]:
    """Compile the ``time`` precondition; absent bounds are 0."""
    time_bounds = time_bounds or TimeBounds()
    return {
        "time": {
            "min_time": time_bounds.min_time or 0,
            "max_time": time_bounds.max_time or 0,
        }
    }


def compile_memo(memo: Optional[Memo]) -> Union[str, Dict[str, Any]]:
    """Compile the memo union; text memos are strings, id memos integers."""
    if memo is None or memo.type is MemoType.NONE:
        return MemoType.NONE.value
    if memo.type is MemoType.ID:
        return {MemoType.ID.value: int(memo.value)}
    if memo.type is MemoType.TEXT:
        return {MemoType.TEXT.value: str(memo.value)}
    return {memo.type.value: str(memo.value).lower()}


@dataclass(frozen=True)
class CompileOutcome:
    """Success value or typed failure of one compilation, for display code."""

    result: Optional[CompiledTransaction] = None
    error: Optional[TxBuildError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> Optional[str]:
        """Failure message, verbatim."""
        return self.error.message if self.error is not None else None

    @property
    def field(self) -> Optional[str]:
        return self.error.field if self.error is not None else None


class TransactionCompiler:
    """
    Compiles transaction drafts for one network.

    Stateless between calls: the same draft always produces the same bytes
    and hash.
    """

    def __init__(self, config: Optional[CompilerConfig] = None, codec: Optional[BinaryCodec] = None,
                 hash_codec: Optional[XdrJsonCodec] = None):
        """
        Initialize the compiler.

        Args:
            config: Network and envelope configuration (testnet by default)
            codec: Binary codec used to encode the envelope JSON
            hash_codec: Schema codec used to re-read the bytes for hashing
        """
        self.config = config or CompilerConfig()
        self.codec = codec or default_codec()
        self.hash_codec = hash_codec or default_codec()

    @classmethod
    def for_network(cls, network: Union[str, NetworkConfig], **kwargs) -> TransactionCompiler:
        """
        Create a compiler for a named network.

        Args:
            network: Network name (public/mainnet, testnet, futurenet) or config
            **kwargs: Additional arguments passed to __init__

        Returns:
            Configured compiler
        """
        if isinstance(network, str):
            network = get_network(network)
        return cls(CompilerConfig(network=network), **kwargs)

    @property
    def network(self) -> NetworkConfig:
        return self.config.network

    def build_envelope_tree(self, draft: DraftLike) -> Dict[str, Any]:
        """
        Assemble the ``TransactionEnvelope`` JSON tree for a draft.

        Args:
            draft: Transaction draft (model or mapping)

        Returns:
            Envelope tree with an empty signature list

        Raises:
            InvalidDraft: If the draft is malformed or has no operations
            TxBuildError: Any operation field failure, unchanged
        """
        draft = TransactionDraft.coerce(draft)
        if not draft.operations:
            raise InvalidDraft("Transaction must contain at least one operation",
                               details={"field": "operations"})

        operations: List[Dict[str, Any]] = []
        for index, operation in enumerate(draft.operations):
            try:
                operations.append(compile_operation(operation))
            except TxBuildError as e:
                e.details.setdefault("operation", index)
                raise

        tx = {
            "source_account": draft.source_account,
            "fee": draft.fee * len(operations),
            "seq_num": draft.seq_num,
            "cond": compile_time_bounds(draft.time_bounds),
            "memo": compile_memo(draft.memo),
            "operations": operations,
            "ext": "v0",
        }
        return {"tx": {"tx": tx, "signatures": []}}

    def encode(self, envelope: Dict[str, Any]) -> str:
        """
        Encode an envelope tree through the binary codec.

        Raises:
            EncodeFailure: If serialization or the codec fails
        """
        try:
            json_text = dumps_canonical(envelope)
            return self.codec.encode(self.config.envelope_type, json_text)
        except Exception as e:
            message = e.message if isinstance(e, TxBuildError) else str(e)
            raise EncodeFailure(message, details=getattr(e, "details", None), cause=e)

    def hash(self, xdr: str) -> str:
        """
        Derive the transaction hash for the configured network.

        Raises:
            HashFailure: If the bytes cannot be parsed as an envelope
        """
        try:
            return transaction_hash(xdr, self.config.passphrase, self.hash_codec)
        except (TxBuildError, KeyError, TypeError, ValueError) as e:
            raise HashFailure(f"Unable to hash transaction: {e}", cause=e)

    def compile(self, draft: DraftLike) -> CompiledTransaction:
        """
        Compile a draft to XDR and hash it.

        Args:
            draft: Transaction draft (model or mapping)

        Returns:
            CompiledTransaction; ``hash_error`` is set if only hashing failed

        Raises:
            InvalidDraft: If the draft is malformed or has no operations
            EncodeFailure: If the codec rejects the envelope
            TxBuildError: Any operation field failure, unchanged
        """
        envelope = self.build_envelope_tree(draft)
        xdr = self.encode(envelope)
        json_text = dumps_canonical(envelope)
        logger.debug(f"Compiled {len(envelope['tx']['tx']['operations'])} operation(s) "
                     f"for {self.network.name}")

        try:
            tx_hash = self.hash(xdr)
        except HashFailure as e:
            logger.warning(f"Compiled transaction could not be hashed: {e.message}")
            return CompiledTransaction(xdr=xdr, envelope=envelope, json_text=json_text, hash_error=e)
        return CompiledTransaction(xdr=xdr, envelope=envelope, json_text=json_text, hash=tx_hash)

    def try_compile(self, draft: DraftLike) -> CompileOutcome:
        """Compile a draft, returning failures as a ``CompileOutcome``."""
        try:
            return CompileOutcome(result=self.compile(draft))
        except TxBuildError as e:
            logger.debug(f"Compilation failed: {e.message}")
            return CompileOutcome(error=e)


def compile_transaction(draft: DraftLike, network: Union[str, NetworkConfig] = TESTNET,
                        codec: Optional[BinaryCodec] = None) -> CompiledTransaction:
    """
    Compile a draft with a one-off compiler.

    Args:
        draft: Transaction draft (model or mapping)
        network: Network name or config used for the hash
        codec: Optional binary codec

    Returns:
        CompiledTransaction
    """
    return TransactionCompiler.for_network(network, codec=codec).compile(draft)


def mainnet_compiler(**kwargs) -> TransactionCompiler:
    """Create a compiler for the public network."""
    return TransactionCompiler.for_network(PUBLIC, **kwargs)


def testnet_compiler(**kwargs) -> TransactionCompiler:
    """Create a compiler for testnet."""
    return TransactionCompiler.for_network(TESTNET, **kwargs)


def futurenet_compiler(**kwargs) -> TransactionCompiler:
    """Create a compiler for futurenet."""
    return TransactionCompiler.for_network(FUTURENET, **kwargs)


__all__ = [
    "TransactionCompiler",
    "CompileOutcome",
    "compile_time_bounds",
    "compile_memo",
    "compile_transaction",
    "mainnet_compiler",
    "testnet_compiler",
    "futurenet_compiler",
]
