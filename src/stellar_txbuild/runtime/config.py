"""
Network and compiler configuration.

The compiler itself never talks to a network; the only per-network value it
needs is the passphrase used to derive transaction hashes.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class NetworkConfig:
    """A Stellar network identified by its passphrase."""

    name: str
    passphrase: str


PUBLIC = NetworkConfig("public", "Public Global Stellar Network ; September 2015")
TESTNET = NetworkConfig("testnet", "Test SDF Network ; September 2015")
FUTURENET = NetworkConfig("futurenet", "Test SDF Future Network ; October 2022")

NETWORKS: Dict[str, NetworkConfig] = {
    PUBLIC.name: PUBLIC,
    "mainnet": PUBLIC,
    TESTNET.name: TESTNET,
    FUTURENET.name: FUTURENET,
}


def get_network(name: str) -> NetworkConfig:
    """
    Look up a network preset by name.

    Args:
        name: Network name (public/mainnet, testnet, futurenet), case-insensitive

    Returns:
        Network configuration

    Raises:
        ValueError: If the name is unknown
    """
    try:
        return NETWORKS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown network: {name}") from None


@dataclass
class CompilerConfig:
    """Configuration for the transaction compiler."""

    network: NetworkConfig = field(default_factory=lambda: TESTNET)
    envelope_type: str = "TransactionEnvelope"

    @property
    def passphrase(self) -> str:
        return self.network.passphrase


__all__ = [
    "NetworkConfig",
    "CompilerConfig",
    "PUBLIC",
    "TESTNET",
    "FUTURENET",
    "NETWORKS",
    "get_network",
]
