from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest

from txdecode.core.models import LogEvent, Transaction
from txdecode.decoding.decoder import TransactionDecoder
from txdecode.decoding.registry import DecoderRegistry

POOL_ABI = [
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "address", "name": "owner", "type": "address"},
            {"indexed": False, "internalType": "uint256", "name": "amount", "type": "uint256"},
        ],
        "name": "Deposit",
        "type": "event",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "address", "name": "owner", "type": "address"},
            {"indexed": False, "internalType": "uint256", "name": "amount", "type": "uint256"},
        ],
        "name": "Withdraw",
        "type": "event",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": False, "internalType": "address", "name": "sender", "type": "address"},
        ],
        "name": "Sync",
        "type": "event",
    },
]

POOL_ADDRESS = "0x00000000000000000000000000000000000000aa"
OTHER_ADDRESS = "0x00000000000000000000000000000000000000bb"


class FakeClient:
    """Stand-in for CovalentClient usable as an async context manager."""

    def __init__(self, prices: list | None = None) -> None:
        self.get_token_prices = AsyncMock(return_value=prices or [])
        self.closed = False

    async def __aenter__(self) -> "FakeClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.closed = True


@pytest.fixture
def registry() -> DecoderRegistry:
    return DecoderRegistry()


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def make_decoder(fake_client: FakeClient) -> Callable[[DecoderRegistry], TransactionDecoder]:
    def _make(registry: DecoderRegistry) -> TransactionDecoder:
        decoder = TransactionDecoder(registry)
        decoder._make_client = lambda api_key: fake_client  # type: ignore[method-assign]
        return decoder

    return _make


def make_log(topic0: str, address: str = POOL_ADDRESS, *, topics: tuple[str, ...] = (), data: str = "0x", **kwargs) -> LogEvent:
    return LogEvent(raw_log_topics=(topic0, *topics), raw_log_data=data, sender_address=address, **kwargs)


def make_tx(*logs: LogEvent) -> Transaction:
    return Transaction(tx_hash="0xtx", block_signed_at="2024-03-01T12:00:00Z", log_events=tuple(logs))
