"""
Test bootstrap:
- Make the ``helpers`` package importable from every test directory
- Provide shared compiler / codec fixtures
"""
import sys
import pathlib

import pytest

TESTS_DIR = pathlib.Path(__file__).parent

if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))


@pytest.fixture
def compiler():
    """A testnet transaction compiler."""
    from stellar_txbuild.tx.compiler import testnet_compiler
    return testnet_compiler()


@pytest.fixture
def codec():
    """The default schema codec."""
    from stellar_txbuild.codec.xdr_json import default_codec
    return default_codec()


@pytest.fixture
def builder_registry():
    """Registry of all operation builders."""
    from stellar_txbuild.tx.builders.registry import BUILDER_REGISTRY
    return BUILDER_REGISTRY.copy()
