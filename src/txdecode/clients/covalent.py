"""Async client for the Covalent (GoldRush) blockchain-data API.

This module provides:
- `CovalentClient`: an httpx-based client with sane timeouts/connection limits
- Pydantic models for the pricing payload (`TokenPrices`, `PriceItem`)

Decode functions use `get_token_prices` to enrich raw amounts; the CLI uses
`get_transaction` to fetch the transaction to decode.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict

from txdecode.core.config import DEFAULT_BASE_URL
from txdecode.core.errors import ClientError
from txdecode.core.models import Transaction

logger = logging.getLogger(__name__)


class LogoUrls(BaseModel):
    model_config = ConfigDict(extra="ignore")

    token_logo_url: str | None = None


class PriceItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    date: str | None = None
    price: float | None = None
    pretty_price: str | None = None


class TokenPrices(BaseModel):
    """Price history for one asset, as returned by the pricing endpoint."""

    model_config = ConfigDict(extra="ignore")

    contract_address: str | None = None
    contract_name: str | None = None
    contract_ticker_symbol: str | None = None
    contract_decimals: int | None = None
    quote_currency: str | None = None
    logo_urls: LogoUrls | None = None
    prices: list[PriceItem] = []

    @property
    def latest_price(self) -> float | None:
        return self.prices[0].price if self.prices else None

    @property
    def logo_url(self) -> str | None:
        return self.logo_urls.token_logo_url if self.logo_urls else None


class CovalentClient:
    """Minimal async client for the Covalent API.

    Parameters
    ----------
    api_key : str
        Credential sent as a bearer token.
    base_url : str
        API root, without trailing slash.
    timeout_s : int
        Per-operation timeout in seconds (connect/read/write).
    max_connections : int
        Maximum concurrent connections to keep in the pool.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout_s: int = 20,
        max_connections: int = 16,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=httpx.Timeout(
                connect=timeout_s,
                read=timeout_s,
                write=timeout_s,
                pool=max(30, timeout_s * 3),
            ),
            limits=httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max(1, max_connections // 2),
            ),
            http2=True,
        )

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any] | None:
        """GET a JSON envelope and return its `data`, or None when not found."""
        r = await self.client.get(path, params=params)
        if r.status_code == 404:
            return None
        try:
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ClientError(f"API error on {path}: {e}", status_code=r.status_code) from e
        body = r.json()
        if body.get("error"):
            raise ClientError(
                f"API error: {body.get('error_code')} {body.get('error_message')}",
                status_code=body.get("error_code"),
            )
        return body.get("data")

    async def get_token_prices(
        self,
        chain_name: str,
        quote_currency: str,
        contract_address: str,
        *,
        from_date: str | None = None,
        to_date: str | None = None,
    ) -> list[TokenPrices]:
        """Return historical prices for an asset; empty when the API has none."""
        params = {k: v for k, v in (("from", from_date), ("to", to_date)) if v}
        data = await self._get(
            f"/pricing/historical_by_addresses_v2/{chain_name}/{quote_currency}/{contract_address.lower()}/",
            params=params,
        )
        if not data:
            logger.debug("no price data for %s on %s", contract_address, chain_name)
            return []
        return [TokenPrices.model_validate(item) for item in data]

    async def get_transaction(self, chain_name: str, tx_hash: str) -> Transaction:
        """Fetch a transaction with its log events."""
        data = await self._get(f"/{chain_name}/transaction_v2/{tx_hash}/")
        items = (data or {}).get("items") or []
        if not items:
            raise ClientError(f"transaction {tx_hash} not found on {chain_name}", status_code=404)
        return Transaction.from_api(items[0])

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> CovalentClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
