"""ABI event helpers: topic hashing and log decoding.

- `get_event_topic0(abi, event_name)` is the signature hasher used by the registry.
- `decode_event_log(...)` is the decoding primitive used by plugins.

Both raise `SchemaError` when the ABI cannot be read or the event is missing.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, Literal

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError
from eth_utils.abi import event_signature_to_log_topic
from pydantic import BaseModel, ValidationError

from txdecode.core.errors import SchemaError


class AbiInput(BaseModel):
    indexed: bool = False
    internalType: str | None = None
    name: str
    type: str
    components: Sequence[AbiInput] | None = None


class AbiEvent(BaseModel):
    anonymous: bool = False
    inputs: Sequence[AbiInput]
    name: str
    type: Literal["event"]


AbiInput.model_rebuild()


AbiJson = Iterable[dict[str, Any]]
AbiSpec = AbiJson | Path


def canonical_type(abi_input: AbiInput) -> str:
    """Return the canonical ABI type, expanding tuples into `(t1,t2,...)`."""
    if not abi_input.type.startswith("tuple"):
        return abi_input.type
    suffix = abi_input.type[len("tuple"):]  # "", "[]", "[2]"...
    inner = ",".join(canonical_type(c) for c in abi_input.components or ())
    return f"({inner}){suffix}"


def get_event_signature(event: AbiEvent) -> str:
    return f"{event.name}({','.join(canonical_type(event_input) for event_input in event.inputs)})"


def _load_abi(abi: AbiSpec) -> AbiJson:
    if isinstance(abi, Path):
        return json.loads(abi.read_text())
    return abi


def get_events_from_abi(abi: AbiSpec) -> dict[str, AbiEvent]:
    """Return the ABI's events keyed by name (first declaration wins on overloads)."""
    events: dict[str, AbiEvent] = {}
    try:
        for entry in _load_abi(abi):
            if entry.get("type") != "event":
                continue
            event = AbiEvent.model_validate(entry)
            events.setdefault(event.name, event)
    except (ValidationError, AttributeError, json.JSONDecodeError) as e:
        raise SchemaError(f"malformed event ABI: {e}") from e
    return events


def get_event(abi: AbiSpec, event_name: str) -> AbiEvent:
    event = get_events_from_abi(abi).get(event_name)
    if event is None:
        raise SchemaError(f"event {event_name!r} not found in ABI")
    return event


def get_event_topic0(abi: AbiSpec, event_name: str) -> str:
    """Return the lowercased 0x topic hash identifying `event_name` in `abi`."""
    event = get_event(abi, event_name)
    return "0x" + event_signature_to_log_topic(get_event_signature(event)).hex()


# ---- Log decoding ----

def _is_hashed_topic(abi_type: str) -> bool:
    """Indexed dynamic values are stored as their keccak hash."""
    if abi_type.endswith("]"):
        return True
    return abi_type in ("string", "bytes") or abi_type.startswith("tuple")


def parse_topic_field(topic_hex: str, abi_type: str) -> Any:
    """Parse one indexed topic according to the declared type."""
    h = topic_hex.lower()
    if _is_hashed_topic(abi_type):
        return h
    if abi_type == "address":
        return "0x" + h[-40:]
    if abi_type == "bool":
        return int(h, 16) != 0
    if abi_type.startswith("uint"):
        return int(h, 16)
    if abi_type.startswith("int"):
        # Two's complement on the declared width
        v = int(h, 16) % 2**256
        bits = int(abi_type[3:]) if abi_type != "int" else 256
        v &= (1 << bits) - 1
        if v >= 2 ** (bits - 1):
            v -= 2**bits
        return v
    # bytesN and anything else: raw hex
    return h


def _normalize(value: Any, abi_input: AbiInput | None = None) -> Any:
    """Convert eth_abi output into plain JSON-friendly Python values."""
    if abi_input is not None and abi_input.type.startswith("tuple"):
        if abi_input.type == "tuple":
            return {
                c.name: _normalize(v, c)
                for c, v in zip(abi_input.components or (), value)
            }
        element = abi_input.model_copy(update={"type": "tuple"})
        return [_normalize(v, element) for v in value]
    if isinstance(value, bytes):
        return "0x" + value.hex()
    if isinstance(value, str) and value.startswith("0x") and len(value) == 42:
        return value.lower()
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    return value


def decode_event_log(
    abi: AbiSpec,
    event_name: str,
    topics: Sequence[str],
    data: str | bytes,
) -> dict[str, Any]:
    """Decode a raw log (topics + data) into a mapping of argument name → value."""
    event = get_event(abi, event_name)
    indexed = [i for i in event.inputs if i.indexed]
    non_indexed = [i for i in event.inputs if not i.indexed]

    if len(topics) < len(indexed) + 1:
        raise SchemaError(
            f"{event_name}: expected {len(indexed) + 1} topics, got {len(topics)}"
        )

    out: dict[str, Any] = {}
    for tpc, abi_input in zip(topics[1:], indexed):
        out[abi_input.name] = parse_topic_field(tpc, abi_input.type)

    raw = bytes.fromhex(data[2:] if data.startswith("0x") else data) if isinstance(data, str) else data
    if non_indexed:
        try:
            values = abi_decode([canonical_type(i) for i in non_indexed], raw)
        except DecodingError as e:
            raise SchemaError(f"{event_name}: cannot decode log data: {e}") from e
        for abi_input, v in zip(non_indexed, values):
            out[abi_input.name] = _normalize(v, abi_input)
    return out
