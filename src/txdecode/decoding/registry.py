"""Decoder registry: protocol configs, decode functions and lookup indices.

The registry owns four write-once structures, all filled during startup:

- `configs`:            chain → protocol → address → ContractConfig
- `decoding_functions`: append-only function table; functions are referenced
                        everywhere else by their index in this list
- `decoders`:           chain → address → topic0 → function index
- `fallbacks`:          topic0 → function index

`on()` materializes one `decoders` entry per address known for the
(chain, protocol) at call time, so a protocol's configs must be registered
before its decoders. Once `freeze()` is called the registry is read-only and
safe to share between concurrent `decode` calls.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from txdecode.abi_events import AbiSpec, get_event_topic0
from txdecode.core.errors import ConfigurationError, RegistryFrozenError, SchemaError
from txdecode.core.interfaces import DecodeFunction
from txdecode.core.models import ContractConfig, LogEvent, ProtocolConfig, RegistryStats

logger = logging.getLogger(__name__)

Configs = dict[str, dict[str, dict[str, ContractConfig]]]
Decoders = dict[str, dict[str, dict[str, int]]]
Fallbacks = dict[str, int]


def split_event_id(event_id: str) -> tuple[str, str]:
    """Split `"protocol:EventName"` into its two parts."""
    protocol, sep, event_name = event_id.partition(":")
    if not sep or not protocol or not event_name or ":" in event_name:
        raise SchemaError(f"invalid event id {event_id!r}, expected 'protocol:EventName'")
    return protocol, event_name


class DecoderRegistry:
    """Owned registry built once at startup and injected into the dispatcher."""

    def __init__(self) -> None:
        self.configs: Configs = {}
        self.decoders: Decoders = {}
        self.fallbacks: Fallbacks = {}
        self.decoding_functions: list[DecodeFunction] = []
        self._frozen = False

    # ---- lifecycle ----

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Mark initialization as complete; further registrations raise."""
        self._frozen = True

    def _ensure_writable(self) -> None:
        if self._frozen:
            raise RegistryFrozenError("registry is frozen; register plugins before decoding")

    # ---- config store ----

    def register_config(self, chain_name: str, protocol: str, address: str, is_factory: bool = False) -> None:
        """Upsert one contract config; the address is stored lowercased."""
        self._ensure_writable()
        if not chain_name or not protocol or not address:
            raise ValueError("chain_name, protocol and address must be non-empty")
        self.configs.setdefault(chain_name, {}).setdefault(protocol, {})[address.lower()] = ContractConfig(
            is_factory=is_factory
        )

    def register_configs(self, configs: Iterable[ProtocolConfig]) -> None:
        for c in configs:
            self.register_config(c.chain_name, c.protocol_name, c.address, c.is_factory)

    # ---- function table ----

    def append_function(self, decoding_function: DecodeFunction) -> int:
        """Append to the function table and return the new, stable index."""
        self._ensure_writable()
        self.decoding_functions.append(decoding_function)
        return len(self.decoding_functions) - 1

    # ---- registration entry points ----

    def on(
        self,
        event_id: str,
        chain_names: Iterable[str],
        abi: AbiSpec,
        decoding_function: DecodeFunction,
    ) -> int:
        """Register a decoder for `"protocol:EventName"` on every configured address of each chain."""
        self._ensure_writable()
        protocol, event_name = split_event_id(event_id)
        topic0 = get_event_topic0(abi, event_name)

        # Validate every chain before touching the function table or indices
        chains = list(dict.fromkeys(chain_names))
        for chain_name in chains:
            if not self.configs.get(chain_name, {}).get(protocol):
                raise ConfigurationError(f"config for {protocol} does not exist on {chain_name}")

        index = self.append_function(decoding_function)
        for chain_name in chains:
            chain_decoders = self.decoders.setdefault(chain_name, {})
            for address in self.configs[chain_name][protocol]:
                by_topic = chain_decoders.setdefault(address, {})
                if topic0 in by_topic:
                    logger.warning(
                        "%s overwrites decoder #%d for %s on %s (%s)",
                        event_id,
                        by_topic[topic0],
                        address,
                        chain_name,
                        topic0,
                    )
                by_topic[topic0] = index
        return index

    def fallback(self, event_name: str, abi: AbiSpec, decoding_function: DecodeFunction) -> int:
        """Register a chain/address-independent decoder for an event signature."""
        self._ensure_writable()
        topic0 = get_event_topic0(abi, event_name)
        index = self.append_function(decoding_function)
        previous = self.fallbacks.get(topic0)
        if previous is not None:
            logger.warning("fallback %s overwrites fallback #%d (%s)", event_name, previous, topic0)
        self.fallbacks[topic0] = index
        return index

    # ---- read side ----

    def resolve(self, chain_name: str, log_event: LogEvent) -> int | None:
        """Return the function index for a log: address, then factory address, then fallback."""
        topic0 = log_event.topic0
        if topic0 is None:
            return None
        topic0 = topic0.lower()
        chain_decoders = self.decoders.get(chain_name, {})
        for address in (log_event.sender_address, log_event.sender_factory_address):
            if not address:
                continue
            index = chain_decoders.get(address.lower(), {}).get(topic0)
            if index is not None:
                return index
        return self.fallbacks.get(topic0)

    def get_function(self, index: int) -> DecodeFunction:
        return self.decoding_functions[index]

    def stats(self) -> RegistryStats:
        """Counts reported after initialization."""
        protocols = {p for chain in self.configs.values() for p in chain}
        configs = sum(len(addresses) for chain in self.configs.values() for addresses in chain.values())
        return RegistryStats(
            protocols=len(protocols),
            configs=configs,
            decoders=len(self.decoding_functions),
            fallbacks=len(self.fallbacks),
        )
