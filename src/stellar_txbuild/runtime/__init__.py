"""
Runtime support: error model and configuration.
"""

from .errors import *
from .config import (
    NetworkConfig, CompilerConfig, PUBLIC, TESTNET, FUTURENET, NETWORKS, get_network
)
