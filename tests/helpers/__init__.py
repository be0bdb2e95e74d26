from .factories import (
    ZERO_ADDRESS, mk_raw_key, mk_address, mk_muxed_address, mk_asset, mk_operation, mk_draft,
    minimal_params,
)
from .parity import assert_hex_equal, operation_body

__all__ = [
    "ZERO_ADDRESS",
    "mk_raw_key",
    "mk_address",
    "mk_muxed_address",
    "mk_asset",
    "mk_operation",
    "mk_draft",
    "minimal_params",
    "assert_hex_equal",
    "operation_body",
]
