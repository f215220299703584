"""Transaction decoder: dispatch each log to its registered decode function.

Logs are processed in reverse emission order so the outermost action of a
transaction comes first. Each resolved decode function is awaited before the
next log is considered; failures propagate and abort the whole transaction.
"""

from __future__ import annotations

import logging

from txdecode.clients.covalent import CovalentClient
from txdecode.core.config import DEFAULT_BASE_URL
from txdecode.core.models import DecodedEvent, DecodeOptions, Transaction
from txdecode.decoding.registry import DecoderRegistry

logger = logging.getLogger(__name__)


class TransactionDecoder:
    """Read-only consumer of a frozen `DecoderRegistry`.

    Parameters
    ----------
    registry : DecoderRegistry
        Registry populated by the plugin pass.
    base_url : str
        Data API root handed to the per-call client.
    timeout_s : int
        Per-operation timeout for the per-call client.
    max_connections : int
        Connection pool size for the per-call client.
    """

    def __init__(
        self,
        registry: DecoderRegistry,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout_s: int = 20,
        max_connections: int = 16,
    ) -> None:
        self.registry = registry
        self.base_url = base_url
        self.timeout_s = timeout_s
        self.max_connections = max_connections

    def _make_client(self, api_key: str) -> CovalentClient:
        return CovalentClient(
            api_key,
            base_url=self.base_url,
            timeout_s=self.timeout_s,
            max_connections=self.max_connections,
        )

    async def decode(
        self,
        chain_name: str,
        tx: Transaction,
        api_key: str,
        options: DecodeOptions | None = None,
    ) -> list[DecodedEvent]:
        """Decode every recognized log of `tx`, last-emitted first."""
        options = options or DecodeOptions()
        events: list[DecodedEvent] = []
        async with self._make_client(api_key) as client:
            for log_event in reversed(tx.log_events):
                index = self.registry.resolve(chain_name, log_event)
                if index is None:
                    logger.debug(
                        "no decoder for %s from %s on %s",
                        log_event.topic0,
                        log_event.sender_address,
                        chain_name,
                    )
                    continue
                decoding_function = self.registry.get_function(index)
                event = await decoding_function(log_event, tx, chain_name, client, options)
                events.append(event)
        return events


async def decode_transaction(
    registry: DecoderRegistry,
    chain_name: str,
    tx: Transaction,
    api_key: str,
    options: DecodeOptions | None = None,
) -> list[DecodedEvent]:
    """One-off convenience wrapper around `TransactionDecoder.decode`."""
    return await TransactionDecoder(registry).decode(chain_name, tx, api_key, options)
