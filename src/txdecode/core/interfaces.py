from __future__ import annotations

from typing import Protocol, runtime_checkable

from txdecode.clients.covalent import TokenPrices
from txdecode.core.models import DecodedEvent, DecodeOptions, LogEvent, Transaction


# ---------------------------------------------------------------------------
# IPricingClient
# ---------------------------------------------------------------------------

@runtime_checkable
class IPricingClient(Protocol):
    """
    Blockchain-data client as seen by decode functions.

    Domain expectations:
    - A missing price is an empty list, never an exception.
    - Callers must degrade gracefully (no quote) when nothing is returned.
    """

    async def get_token_prices(
        self,
        chain_name: str,
        quote_currency: str,
        contract_address: str,
        *,
        from_date: str | None = None,
        to_date: str | None = None,
    ) -> list[TokenPrices]:
        ...


# ---------------------------------------------------------------------------
# DecodeFunction
# ---------------------------------------------------------------------------

class DecodeFunction(Protocol):
    """
    Async plugin callable that turns one log into a DecodedEvent.

    Implementations may perform further async I/O through `client`
    (price lookups) and may raise; the dispatcher does not catch.
    """

    async def __call__(
        self,
        log_event: LogEvent,
        tx: Transaction,
        chain_name: str,
        client: IPricingClient,
        options: DecodeOptions,
    ) -> DecodedEvent:
        ...
