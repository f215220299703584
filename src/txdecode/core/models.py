"""Core data models for transaction log decoding.

This module defines:
- `LogEvent` / `Transaction`: read-only inputs supplied by the data source.
- `ContractConfig` / `ProtocolConfig`: per-(chain, protocol, address) config.
- `DecodedEvent` and its parts: the display-ready output of a decode function.
- `DecodeOptions`, `RegistryStats`: small DTOs around the registry.

Design notes
------------
- Addresses and topics are lowercased on construction from API payloads so
  registry lookups never miss on case.
- Inputs are frozen; decoding never mutates the caller's transaction.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal

DetailType = Literal["address", "text"]


# === Inputs ===


@dataclass(slots=True, frozen=True)
class LogEvent:
    """One emitted log, as returned by the blockchain-data API."""

    raw_log_topics: tuple[str, ...]  # lowercased 0x..., topic0 first
    raw_log_data: str  # "0x..."
    sender_address: str  # lowercased 0x...
    sender_name: str | None = None
    sender_logo_url: str | None = None
    sender_contract_decimals: int | None = None
    sender_contract_ticker_symbol: str | None = None
    block_signed_at: str | None = None
    log_offset: int | None = None
    tx_hash: str | None = None
    # Not provided by the current data source; used when present.
    sender_factory_address: str | None = None

    @property
    def topic0(self) -> str | None:
        return self.raw_log_topics[0] if self.raw_log_topics else None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> LogEvent:
        factory = payload.get("sender_factory_address")
        return cls(
            raw_log_topics=tuple(t.lower() for t in payload.get("raw_log_topics") or ()),
            raw_log_data=str(payload.get("raw_log_data") or "0x"),
            sender_address=str(payload.get("sender_address") or "").lower(),
            sender_name=payload.get("sender_name"),
            sender_logo_url=payload.get("sender_logo_url"),
            sender_contract_decimals=payload.get("sender_contract_decimals"),
            sender_contract_ticker_symbol=payload.get("sender_contract_ticker_symbol"),
            block_signed_at=payload.get("block_signed_at"),
            log_offset=payload.get("log_offset"),
            tx_hash=(payload.get("tx_hash") or "").lower() or None,
            sender_factory_address=factory.lower() if factory else None,
        )


@dataclass(slots=True, frozen=True)
class Transaction:
    """A transaction and its logs in emission order."""

    tx_hash: str
    block_signed_at: str  # ISO-8601 timestamp
    log_events: tuple[LogEvent, ...] = ()
    block_height: int | None = None
    from_address: str | None = None
    to_address: str | None = None
    value: str | None = None
    successful: bool | None = None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Transaction:
        return cls(
            tx_hash=str(payload.get("tx_hash") or "").lower(),
            block_signed_at=str(payload.get("block_signed_at") or ""),
            log_events=tuple(LogEvent.from_api(le) for le in payload.get("log_events") or ()),
            block_height=payload.get("block_height"),
            from_address=(payload.get("from_address") or "").lower() or None,
            to_address=(payload.get("to_address") or "").lower() or None,
            value=payload.get("value"),
            successful=payload.get("successful"),
        )


# === Registry records ===


@dataclass(slots=True, frozen=True)
class ContractConfig:
    """Per-address protocol config entry stored in the registry."""

    is_factory: bool = False


@dataclass(slots=True, frozen=True)
class ProtocolConfig:
    """One config contribution from a protocol plugin."""

    address: str
    is_factory: bool
    protocol_name: str
    chain_name: str


@dataclass(slots=True, frozen=True)
class RegistryStats:
    protocols: int
    configs: int
    decoders: int
    fallbacks: int


@dataclass(slots=True, frozen=True)
class DecodeOptions:
    """Per-call decoding options forwarded to every decode function."""

    raw_logs: bool = False


# === Output ===


@dataclass(slots=True)
class EventProtocol:
    name: str | None
    logo: str | None


@dataclass(slots=True)
class EventDetail:
    heading: str
    value: str | None
    type: DetailType = "text"


@dataclass(slots=True)
class EventToken:
    heading: str
    value: str
    decimals: int | None = None
    pretty_quote: str | None = None
    ticker_symbol: str | None = None
    ticker_logo: str | None = None


@dataclass(slots=True)
class DecodedEvent:
    """Normalized, display-ready record produced by one decode function."""

    action: str
    category: str
    name: str
    protocol: EventProtocol
    details: list[EventDetail] = field(default_factory=list)
    tokens: list[EventToken] | None = None
    raw_log: LogEvent | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain JSON-able data, omitting absent optional parts."""
        out = asdict(self)
        if self.tokens is None:
            out.pop("tokens")
        if self.raw_log is None:
            out.pop("raw_log")
        else:
            out["raw_log"]["raw_log_topics"] = list(self.raw_log.raw_log_topics)
        return out
