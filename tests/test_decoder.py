import asyncio
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from conftest import OTHER_ADDRESS, POOL_ABI, POOL_ADDRESS, FakeClient, make_log, make_tx
from txdecode.abi_events import get_event_topic0
from txdecode.core.models import DecodedEvent, DecodeOptions, EventProtocol
from txdecode.decoding.decoder import TransactionDecoder
from txdecode.decoding.registry import DecoderRegistry

DEPOSIT_T0 = get_event_topic0(POOL_ABI, "Deposit")
WITHDRAW_T0 = get_event_topic0(POOL_ABI, "Withdraw")
SYNC_T0 = get_event_topic0(POOL_ABI, "Sync")


def _event(name: str) -> DecodedEvent:
    return DecodedEvent(action="Test", category="Others", name=name, protocol=EventProtocol(None, None))


@pytest.fixture
def pool_registry(registry: DecoderRegistry) -> DecoderRegistry:
    registry.register_config("eth-mainnet", "pool", POOL_ADDRESS)
    return registry


@pytest.mark.asyncio
async def test_decode_reverse_emission_order_and_skips_unknown(pool_registry: DecoderRegistry, make_decoder: Any) -> None:
    deposit = AsyncMock(return_value=_event("Deposit"))
    withdraw = AsyncMock(return_value=_event("Withdraw"))
    pool_registry.on("pool:Deposit", ["eth-mainnet"], POOL_ABI, deposit)
    pool_registry.fallback("Withdraw", POOL_ABI, withdraw)
    pool_registry.freeze()

    l1 = make_log(SYNC_T0)  # no decoder
    l2 = make_log(DEPOSIT_T0)
    l3 = make_log(WITHDRAW_T0, OTHER_ADDRESS)
    tx = make_tx(l1, l2, l3)

    events = await make_decoder(pool_registry).decode("eth-mainnet", tx, "key")

    assert [e.name for e in events] == ["Withdraw", "Deposit"]
    assert tx.log_events == (l1, l2, l3)


@pytest.mark.asyncio
async def test_decode_routes_to_chain_decoder_not_fallback(pool_registry: DecoderRegistry, make_decoder: Any) -> None:
    chain_fn = AsyncMock(return_value=_event("chain"))
    fallback_fn = AsyncMock(return_value=_event("fallback"))
    pool_registry.fallback("Deposit", POOL_ABI, fallback_fn)
    pool_registry.on("pool:Deposit", ["eth-mainnet"], POOL_ABI, chain_fn)

    events = await make_decoder(pool_registry).decode("eth-mainnet", make_tx(make_log(DEPOSIT_T0)), "key")

    assert [e.name for e in events] == ["chain"]
    fallback_fn.assert_not_awaited()


@pytest.mark.asyncio
async def test_decode_passes_arguments(
    pool_registry: DecoderRegistry, make_decoder: Any, fake_client: FakeClient
) -> None:
    fn = AsyncMock(return_value=_event("Deposit"))
    pool_registry.on("pool:Deposit", ["eth-mainnet"], POOL_ABI, fn)
    log = make_log(DEPOSIT_T0)
    tx = make_tx(log)
    options = DecodeOptions(raw_logs=True)

    await make_decoder(pool_registry).decode("eth-mainnet", tx, "key", options)

    fn.assert_awaited_once_with(log, tx, "eth-mainnet", fake_client, options)
    assert fake_client.closed


@pytest.mark.asyncio
async def test_decode_default_options(pool_registry: DecoderRegistry, make_decoder: Any) -> None:
    fn = AsyncMock(return_value=_event("Deposit"))
    pool_registry.on("pool:Deposit", ["eth-mainnet"], POOL_ABI, fn)

    await make_decoder(pool_registry).decode("eth-mainnet", make_tx(make_log(DEPOSIT_T0)), "key")

    assert fn.await_args.args[4] == DecodeOptions(raw_logs=False)


@pytest.mark.asyncio
async def test_decode_empty_transaction(pool_registry: DecoderRegistry, make_decoder: Any) -> None:
    assert await make_decoder(pool_registry).decode("eth-mainnet", make_tx(), "key") == []


@pytest.mark.asyncio
async def test_decode_unknown_chain_uses_fallback_only(pool_registry: DecoderRegistry, make_decoder: Any) -> None:
    pool_registry.on("pool:Deposit", ["eth-mainnet"], POOL_ABI, AsyncMock(return_value=_event("chain")))

    events = await make_decoder(pool_registry).decode("base-mainnet", make_tx(make_log(DEPOSIT_T0)), "key")

    assert events == []


@pytest.mark.asyncio
async def test_decode_failure_aborts_whole_transaction(
    pool_registry: DecoderRegistry, make_decoder: Any, fake_client: FakeClient
) -> None:
    deposit = AsyncMock(return_value=_event("Deposit"))
    withdraw = AsyncMock(side_effect=ValueError("bad log data"))
    pool_registry.on("pool:Deposit", ["eth-mainnet"], POOL_ABI, deposit)
    pool_registry.on("pool:Withdraw", ["eth-mainnet"], POOL_ABI, withdraw)

    tx = make_tx(make_log(DEPOSIT_T0), make_log(WITHDRAW_T0))

    with pytest.raises(ValueError, match="bad log data"):
        await make_decoder(pool_registry).decode("eth-mainnet", tx, "key")

    withdraw.assert_awaited_once()
    deposit.assert_not_awaited()
    assert fake_client.closed


@pytest.mark.asyncio
async def test_decode_awaits_sequentially(pool_registry: DecoderRegistry, make_decoder: Any) -> None:
    calls: list[str] = []

    def recorder(name: str) -> Any:
        async def fn(*args: Any) -> DecodedEvent:
            calls.append(f"start:{name}")
            await asyncio.sleep(0)
            calls.append(f"end:{name}")
            return _event(name)

        return fn

    pool_registry.on("pool:Deposit", ["eth-mainnet"], POOL_ABI, recorder("Deposit"))
    pool_registry.on("pool:Withdraw", ["eth-mainnet"], POOL_ABI, recorder("Withdraw"))

    await make_decoder(pool_registry).decode(
        "eth-mainnet", make_tx(make_log(DEPOSIT_T0), make_log(WITHDRAW_T0)), "key"
    )

    assert calls == ["start:Withdraw", "end:Withdraw", "start:Deposit", "end:Deposit"]


@pytest.mark.asyncio
async def test_decoder_builds_client_from_credentials(registry: DecoderRegistry) -> None:
    decoder = TransactionDecoder(registry, base_url="https://example.test/v1", timeout_s=5, max_connections=4)
    client = decoder._make_client("secret")

    assert client.base_url == "https://example.test/v1"
    assert client.client.headers["Authorization"] == "Bearer secret"
    await client.aclose()


def test_decoder_passes_pool_settings_to_client(registry: DecoderRegistry) -> None:
    decoder = TransactionDecoder(registry, base_url="https://example.test/v1", timeout_s=5, max_connections=4)

    with patch("txdecode.decoding.decoder.CovalentClient") as client_cls:
        decoder._make_client("secret")

    client_cls.assert_called_once_with(
        "secret", base_url="https://example.test/v1", timeout_s=5, max_connections=4
    )
