"""
Byte-level comparison helpers for XDR tests.
"""

from typing import Any, Dict


def assert_hex_equal(actual: bytes, expected_hex: str, ctx: str) -> None:
    """
    Assert that actual bytes match an expected hex string.

    Args:
        actual: Actual bytes
        expected_hex: Expected hex string (spaces ignored)
        ctx: Context string for the failure message
    """
    expected_hex = expected_hex.replace(" ", "").lower()
    actual_hex = actual.hex()
    if actual_hex == expected_hex:
        return

    # first differing 4-byte XDR word
    for offset in range(0, max(len(actual_hex), len(expected_hex)), 8):
        if actual_hex[offset:offset + 8] != expected_hex[offset:offset + 8]:
            break
    raise AssertionError(
        f"XDR mismatch in {ctx} at byte {offset // 2}: "
        f"expected {expected_hex[offset:offset + 8] or '<end>'}, "
        f"got {actual_hex[offset:offset + 8] or '<end>'}"
    )


def operation_body(envelope: Dict[str, Any], index: int = 0) -> Any:
    """Return the ``OperationBody`` of operation ``index`` in an envelope tree."""
    return envelope["tx"]["tx"]["operations"][index]["body"]
