"""Signature-only fallbacks for ERC20 `Transfer` and `Approval`.

ERC721 shares both signatures but indexes the token id, so a 4-topic log is
reported as an NFT event instead. Legacy tokens that index nothing emit a
1-topic log with every argument in the data section.
"""

from __future__ import annotations

import json
from pathlib import Path

from txdecode.abi_events import AbiJson, decode_event_log, parse_topic_field
from txdecode.core.constants import DecodedAction, DecodedEventCategory
from txdecode.core.interfaces import IPricingClient
from txdecode.core.models import (
    DecodedEvent,
    DecodeOptions,
    EventDetail,
    EventProtocol,
    LogEvent,
    Transaction,
)
from txdecode.decoding.registry import DecoderRegistry
from txdecode.plugins.pricing import get_token_data, make_token

ERC20_ABI: AbiJson = json.loads((Path(__file__).parent / "abis" / "erc20.abi.json").read_text())
# Same signatures with every argument in data
ERC20_UNINDEXED_ABI: AbiJson = [
    {**entry, "inputs": [{**i, "indexed": False} for i in entry["inputs"]]} for entry in ERC20_ABI
]


def _token_abi(topics: tuple[str, ...]) -> AbiJson:
    return ERC20_UNINDEXED_ABI if len(topics) == 1 else ERC20_ABI


def _protocol(log_event: LogEvent) -> EventProtocol:
    return EventProtocol(name=log_event.sender_name, logo=log_event.sender_logo_url)


async def decode_transfer(
    log_event: LogEvent,
    tx: Transaction,
    chain_name: str,
    client: IPricingClient,
    options: DecodeOptions,
) -> DecodedEvent:
    topics = log_event.raw_log_topics
    raw_log = log_event if options.raw_logs else None

    if len(topics) == 4:
        return DecodedEvent(
            action=DecodedAction.TRANSFERRED.value,
            category=DecodedEventCategory.NFT.value,
            name="Transfer",
            protocol=_protocol(log_event),
            details=[
                EventDetail("From", parse_topic_field(topics[1], "address"), "address"),
                EventDetail("To", parse_topic_field(topics[2], "address"), "address"),
                EventDetail("Token ID", str(parse_topic_field(topics[3], "uint256"))),
            ],
            raw_log=raw_log,
        )

    decoded = decode_event_log(_token_abi(topics), "Transfer", topics, log_event.raw_log_data)
    token_data = await get_token_data(client, chain_name, tx, log_event.sender_address)
    return DecodedEvent(
        action=DecodedAction.TRANSFERRED.value,
        category=DecodedEventCategory.TOKEN.value,
        name="Transfer",
        protocol=_protocol(log_event),
        details=[
            EventDetail("From", decoded["from"], "address"),
            EventDetail("To", decoded["to"], "address"),
        ],
        tokens=[make_token("Value", decoded["value"], token_data)],
        raw_log=raw_log,
    )


async def decode_approval(
    log_event: LogEvent,
    tx: Transaction,
    chain_name: str,
    client: IPricingClient,
    options: DecodeOptions,
) -> DecodedEvent:
    topics = log_event.raw_log_topics
    if len(topics) == 4:
        return DecodedEvent(
            action=DecodedAction.APPROVAL.value,
            category=DecodedEventCategory.NFT.value,
            name="Approval",
            protocol=_protocol(log_event),
            details=[
                EventDetail("Owner", parse_topic_field(topics[1], "address"), "address"),
                EventDetail("Approved", parse_topic_field(topics[2], "address"), "address"),
                EventDetail("Token ID", str(parse_topic_field(topics[3], "uint256"))),
            ],
            raw_log=log_event if options.raw_logs else None,
        )

    decoded = decode_event_log(_token_abi(topics), "Approval", topics, log_event.raw_log_data)
    token_data = await get_token_data(client, chain_name, tx, log_event.sender_address)
    return DecodedEvent(
        action=DecodedAction.APPROVAL.value,
        category=DecodedEventCategory.TOKEN.value,
        name="Approval",
        protocol=_protocol(log_event),
        details=[
            EventDetail("Owner", decoded["owner"], "address"),
            EventDetail("Spender", decoded["spender"], "address"),
        ],
        tokens=[make_token("Value", decoded["value"], token_data)],
        raw_log=log_event if options.raw_logs else None,
    )


def register(registry: DecoderRegistry) -> None:
    registry.fallback("Transfer", ERC20_ABI, decode_transfer)
    registry.fallback("Approval", ERC20_ABI, decode_approval)
