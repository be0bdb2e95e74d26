"""
Account address helpers.
"""

from .muxed import MuxedAccountInfo, create_muxed_account, parse_muxed_account

__all__ = ["MuxedAccountInfo", "create_muxed_account", "parse_muxed_account"]
