"""
Transaction building: drafts, primitive codecs, operation builders, the
transaction compiler and its inverse.
"""

from .models import TimeBounds, Memo, OperationDraft, TransactionDraft, CompiledTransaction
from .predicates import (
    Predicate, Unconditional, And, Or, Not, BeforeRelativeTime, BeforeAbsoluteTime,
    parse_predicate, compile_predicate, decompile_predicate,
)
from .builders import (
    BUILDER_REGISTRY, get_builder_for, compile_operation, decompile_operation,
    list_operation_kinds, register_builder,
)
from .compiler import (
    TransactionCompiler, CompileOutcome, compile_transaction,
    mainnet_compiler, testnet_compiler, futurenet_compiler,
)
from .parser import ParsedTransaction, decode_envelope, parse_transaction, draft_from_envelope
from .session import BuildSession

__all__ = [
    "TimeBounds",
    "Memo",
    "OperationDraft",
    "TransactionDraft",
    "CompiledTransaction",
    "Predicate",
    "Unconditional",
    "And",
    "Or",
    "Not",
    "BeforeRelativeTime",
    "BeforeAbsoluteTime",
    "parse_predicate",
    "compile_predicate",
    "decompile_predicate",
    "BUILDER_REGISTRY",
    "get_builder_for",
    "compile_operation",
    "decompile_operation",
    "list_operation_kinds",
    "register_builder",
    "TransactionCompiler",
    "CompileOutcome",
    "compile_transaction",
    "mainnet_compiler",
    "testnet_compiler",
    "futurenet_compiler",
    "ParsedTransaction",
    "decode_envelope",
    "parse_transaction",
    "draft_from_envelope",
    "BuildSession",
]
