"""
Shared pytest fixtures for contract and gateway tests.
"""

import asyncio

import pytest
import pytest_asyncio

from http_server.server import MAX_BODY_BYTES, HTTPServer
from ledgerkv.client import LedgerKVClient
from ledgerkv.contract.context import TransactionContext
from ledgerkv.contract.contract import KeyValueContract
from ledgerkv.contract.dispatcher import ContractDispatcher
from ledgerkv.models.memory_state import InMemoryLedgerState
from serve import register_routes


@pytest.fixture
def ledger():
    """Provide an empty in-memory ledger state."""
    return InMemoryLedgerState()


@pytest.fixture
def contract():
    """Provide a KeyValueContract instance."""
    return KeyValueContract()


@pytest.fixture
def ctx(ledger):
    """Provide a transaction context bound to the ledger fixture."""
    return TransactionContext(ledger)


@pytest.fixture
def dispatcher(contract, ledger):
    """Provide a dispatcher over the contract and ledger fixtures."""
    return ContractDispatcher(contract, ledger)


@pytest.fixture
def sample_batch():
    """Provide sample hex-encoded entries."""
    return {
        "6b657931": "76616c756531",
        "6b657932": "76616c756532",
        "6b657933": "76616c756533",
    }


@pytest.fixture
def max_body_bytes():
    """Body limit for the gateway fixture; override to test the limit."""
    return MAX_BODY_BYTES


@pytest_asyncio.fixture
async def gateway(dispatcher, ledger, max_body_bytes):
    """Start the gateway on a free port and yield a client for it."""
    server = HTTPServer(host="127.0.0.1", port=0, max_body_bytes=max_body_bytes)
    await register_routes(server, dispatcher)

    test_server = await asyncio.start_server(
        server.handle_client, server.host, server.port
    )
    actual_port = test_server.sockets[0].getsockname()[1]

    client = LedgerKVClient(server.host, actual_port)

    try:
        yield client, ledger
    finally:
        test_server.close()
        await test_server.wait_closed()
