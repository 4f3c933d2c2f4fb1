"""
Shared fixtures for the lite client tests.
"""

import sys
import pathlib

import pytest

# Make tests/helpers importable regardless of how pytest is invoked
TESTS_DIR = pathlib.Path(__file__).parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from helpers import MockTransport, mk_transaction_cell  # noqa: E402

from ton_history.client import TransactionClient  # noqa: E402


@pytest.fixture
def transport():
    """Empty mock transport; tests queue the responses they need."""
    return MockTransport()


@pytest.fixture
def client(transport):
    """Client wired to the mock transport and the real bag-of-cells decoder."""
    return TransactionClient(transport=transport)


@pytest.fixture
def tx_cell():
    """A single well-formed transaction cell."""
    return mk_transaction_cell(lt=47_000_000_000_001, prev_lt=46_999_999_999_000)
