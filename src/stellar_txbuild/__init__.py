"""
stellar-txbuild - Stellar classic transaction builder

Compiles form-style transaction drafts into canonical XDR-JSON trees, base64
``TransactionEnvelope`` XDR and transaction hashes, and parses envelopes back
into editable drafts.
"""

from .enums import *
from .runtime.errors import *
from .runtime.config import (
    NetworkConfig, CompilerConfig, PUBLIC, TESTNET, FUTURENET, NETWORKS, get_network
)
from .canonjson import dumps_canonical, loads_lossless
from .crypto import StrKey
from .keys import MuxedAccountInfo, create_muxed_account, parse_muxed_account
from .codec import (
    BinaryCodec, XdrJsonCodec, json_to_xdr, xdr_to_json, network_id, transaction_hash
)
from .tx import *

__version__ = "0.1.0"
__all__ = [
    # Enums
    "OperationKind", "AssetType", "MemoType", "SignerKeyType", "LedgerEntryType",
    "AccountFlag", "TrustLineFlag",

    # Errors
    "ErrorCode", "TxBuildError", "InvalidField", "MissingField", "InvalidAmount",
    "InvalidFraction", "UnknownFlag", "InvalidSignerKey", "InvalidAsset", "InvalidPredicate",
    "InvalidStrKey", "InvalidDraft", "UnsupportedOperation", "DecodeError", "EncodeFailure",
    "HashFailure",

    # Configuration
    "NetworkConfig", "CompilerConfig", "PUBLIC", "TESTNET", "FUTURENET", "NETWORKS", "get_network",

    # Encodings
    "dumps_canonical", "loads_lossless", "StrKey",
    "MuxedAccountInfo", "create_muxed_account", "parse_muxed_account",
    "BinaryCodec", "XdrJsonCodec", "json_to_xdr", "xdr_to_json", "network_id", "transaction_hash",

    # Drafts and compilation
    "TimeBounds", "Memo", "OperationDraft", "TransactionDraft", "CompiledTransaction",
    "Predicate", "Unconditional", "And", "Or", "Not", "BeforeRelativeTime", "BeforeAbsoluteTime",
    "parse_predicate", "compile_predicate", "decompile_predicate",
    "BUILDER_REGISTRY", "get_builder_for", "compile_operation", "decompile_operation",
    "list_operation_kinds", "register_builder",
    "TransactionCompiler", "CompileOutcome", "compile_transaction",
    "mainnet_compiler", "testnet_compiler", "futurenet_compiler",
    "ParsedTransaction", "decode_envelope", "parse_transaction", "draft_from_envelope",
    "BuildSession",

    "__version__",
]
