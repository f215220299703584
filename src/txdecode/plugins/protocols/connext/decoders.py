"""Connext router and bridge event decoders."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from txdecode.abi_events import AbiJson, decode_event_log
from txdecode.core.constants import DecodedAction, DecodedEventCategory
from txdecode.core.interfaces import DecodeFunction, IPricingClient
from txdecode.core.models import (
    DecodedEvent,
    DecodeOptions,
    DetailType,
    EventDetail,
    EventProtocol,
    LogEvent,
    Transaction,
)
from txdecode.decoding.registry import DecoderRegistry
from txdecode.plugins.pricing import get_token_data, make_token

ABIS_DIR = Path(__file__).parent / "abis"
ROUTER_ABI: AbiJson = json.loads((ABIS_DIR / "connext-router.abi.json").read_text())
CALLER_ABI: AbiJson = json.loads((ABIS_DIR / "connext-call.abi.json").read_text())

CHAINS = ["eth-mainnet"]

DOMAIN_ID_TO_CHAIN_NAME: dict[int, str] = {
    6648936: "Ethereum Mainnet",
    1886350457: "Polygon",
    1869640809: "Optimism",
    1634886255: "Arbitrum One",
    6778479: "Gnosis Chain",
    6450786: "BNB Chain",
    1818848877: "Linea",
    1835365481: "Metis",
    1650553709: "Base",
}

# (heading, argument name, detail type)
Field = tuple[str, str, DetailType]


def _protocol(log_event: LogEvent) -> EventProtocol:
    return EventProtocol(name=log_event.sender_name, logo=log_event.sender_logo_url)


def _decode(abi: AbiJson, event_name: str, log_event: LogEvent) -> dict[str, Any]:
    return decode_event_log(abi, event_name, log_event.raw_log_topics, log_event.raw_log_data)


def _details_decoder(
    abi: AbiJson,
    event_name: str,
    action: DecodedAction,
    fields: Sequence[Field],
) -> DecodeFunction:
    """Build a decoder whose output is just the listed arguments as details."""

    async def decode(
        log_event: LogEvent,
        tx: Transaction,
        chain_name: str,
        client: IPricingClient,
        options: DecodeOptions,
    ) -> DecodedEvent:
        decoded = _decode(abi, event_name, log_event)
        return DecodedEvent(
            action=action.value,
            category=DecodedEventCategory.DEX.value,
            name=event_name,
            protocol=_protocol(log_event),
            details=[EventDetail(heading, str(decoded[arg]), typ) for heading, arg, typ in fields],
            raw_log=log_event if options.raw_logs else None,
        )

    decode.__name__ = f"decode_{event_name}"
    return decode


async def decode_xcalled(
    log_event: LogEvent,
    tx: Transaction,
    chain_name: str,
    client: IPricingClient,
    options: DecodeOptions,
) -> DecodedEvent:
    decoded = _decode(CALLER_ABI, "XCalled", log_event)
    params = decoded["params"]

    token_data = await get_token_data(client, chain_name, tx, decoded["asset"])
    tokens = [
        make_token("Bridged Amount", params["bridgedAmt"], token_data),
        make_token("Amount", decoded["amount"], token_data),
    ]

    details = [
        EventDetail("Transfer ID", decoded["transferId"], "address"),
        EventDetail("Nonce", str(decoded["nonce"])),
        EventDetail("Message Hash", decoded["messageHash"]),
        EventDetail("Origin Domain", DOMAIN_ID_TO_CHAIN_NAME.get(params["originDomain"])),
        EventDetail("Destination Domain", DOMAIN_ID_TO_CHAIN_NAME.get(params["destinationDomain"])),
        EventDetail("Canonical Domain", str(params["canonicalDomain"])),
        EventDetail("To", params["to"], "address"),
        EventDetail("Delegate", params["delegate"], "address"),
        EventDetail("Receive Local", "True" if params["receiveLocal"] else "False"),
        EventDetail("Call Data", params["callData"]),
        EventDetail("Slippage", str(params["slippage"])),
        EventDetail("Origin Sender", params["originSender"], "address"),
        EventDetail("Normalized In", str(params["normalizedIn"])),
        EventDetail("Canonical ID", params["canonicalId"]),
        EventDetail("Asset", decoded["asset"], "address"),
        EventDetail("Local", decoded["local"], "address"),
        EventDetail("Message Body", decoded["messageBody"]),
    ]

    return DecodedEvent(
        action=DecodedAction.TRANSFERRED.value,
        category=DecodedEventCategory.BRIDGE.value,
        name="XCalled",
        protocol=_protocol(log_event),
        details=details,
        tokens=tokens,
        raw_log=log_event if options.raw_logs else None,
    )


async def decode_transfer_relayer_fees_increased(
    log_event: LogEvent,
    tx: Transaction,
    chain_name: str,
    client: IPricingClient,
    options: DecodeOptions,
) -> DecodedEvent:
    decoded = _decode(CALLER_ABI, "TransferRelayerFeesIncreased", log_event)
    token_data = await get_token_data(client, chain_name, tx, decoded["asset"])

    return DecodedEvent(
        action=DecodedAction.UPDATE.value,
        category=DecodedEventCategory.BRIDGE.value,
        name="TransferRelayerFeesIncreased",
        protocol=_protocol(log_event),
        details=[
            EventDetail("Transfer ID", decoded["transferId"], "address"),
            EventDetail("Asset", decoded["asset"], "address"),
            EventDetail("Caller", decoded["caller"], "address"),
        ],
        tokens=[make_token("Increase", decoded["increase"], token_data)],
        raw_log=log_event if options.raw_logs else None,
    )


ROUTER_EVENTS: list[tuple[str, DecodedAction, list[Field]]] = [
    (
        "RouterLiquidityAdded",
        DecodedAction.ADD_LIQUIDITY,
        [
            ("Router", "router", "address"),
            ("Local", "local", "address"),
            ("Key", "key", "text"),
            ("Amount", "amount", "text"),
            ("Caller", "caller", "address"),
        ],
    ),
    (
        "RouterAdded",
        DecodedAction.ADD_ROUTER,
        [("Router", "router", "address"), ("Caller", "caller", "address")],
    ),
    (
        "RouterRemoved",
        DecodedAction.REMOVE_ROUTER,
        [("Router", "router", "address"), ("Caller", "caller", "address")],
    ),
    (
        "RouterRecipientSet",
        DecodedAction.UPDATE,
        [
            ("Router", "router", "address"),
            ("Previous Recipient", "prevRecipient", "address"),
            ("New Recipient", "newRecipient", "address"),
        ],
    ),
    (
        "RouterInitialized",
        DecodedAction.INIT_ROUTER,
        [("Router", "router", "address")],
    ),
    (
        "RouterOwnerAccepted",
        DecodedAction.UPDATE,
        [
            ("Router", "router", "address"),
            ("Previous Owner", "prevOwner", "address"),
            ("New Owner", "newOwner", "address"),
        ],
    ),
    (
        "RouterOwnerProposed",
        DecodedAction.UPDATE,
        [
            ("Router", "router", "address"),
            ("Previous Proposed", "prevProposed", "address"),
            ("New Proposed", "newProposed", "address"),
        ],
    ),
    (
        "RouterLiquidityRemoved",
        DecodedAction.REMOVE_LIQUIDITY,
        [
            ("Router", "router", "address"),
            ("To", "to", "address"),
            ("Local", "local", "address"),
            ("Key", "key", "text"),
            ("Amount", "amount", "text"),
            ("Caller", "caller", "address"),
        ],
    ),
]

CALLER_EVENTS: list[tuple[str, DecodedAction, list[Field]]] = [
    (
        "ExternalCalldataExecuted",
        DecodedAction.UPDATE,
        [
            ("Transfer ID", "transferId", "address"),
            ("Success", "success", "text"),
            ("Return Data", "returnData", "text"),
        ],
    ),
    (
        "SlippageUpdated",
        DecodedAction.UPDATE,
        [("Transfer ID", "transferId", "address"), ("Slippage", "slippage", "text")],
    ),
]


def register(registry: DecoderRegistry) -> None:
    """Register every Connext decoder; configs must already be loaded."""
    for event_name, action, fields in ROUTER_EVENTS:
        registry.on(
            f"connext:{event_name}",
            CHAINS,
            ROUTER_ABI,
            _details_decoder(ROUTER_ABI, event_name, action, fields),
        )
    registry.on("connext:XCalled", CHAINS, CALLER_ABI, decode_xcalled)
    for event_name, action, fields in CALLER_EVENTS:
        registry.on(
            f"connext:{event_name}",
            CHAINS,
            CALLER_ABI,
            _details_decoder(CALLER_ABI, event_name, action, fields),
        )
    registry.on(
        "connext:TransferRelayerFeesIncreased",
        CHAINS,
        CALLER_ABI,
        decode_transfer_relayer_fees_increased,
    )
