"""Price enrichment shared by decode plugins.

Missing price data is never an error: the token entry is still produced,
just without a quote, symbol or logo.
"""

from __future__ import annotations

from txdecode.clients.covalent import TokenPrices
from txdecode.core.constants import DEFAULT_QUOTE_CURRENCY
from txdecode.core.interfaces import IPricingClient
from txdecode.core.models import EventToken, Transaction
from txdecode.utils import prettify_currency, scale_amount, timestamp_parser


async def get_token_data(
    client: IPricingClient,
    chain_name: str,
    tx: Transaction,
    asset: str,
) -> TokenPrices | None:
    """Return the asset's price record for the transaction's day, if any."""
    date = timestamp_parser(tx.block_signed_at, "%Y-%m-%d")
    token_data = await client.get_token_prices(
        chain_name,
        DEFAULT_QUOTE_CURRENCY,
        asset,
        from_date=date,
        to_date=date,
    )
    return token_data[0] if token_data else None


def make_token(heading: str, amount: int | str, token_data: TokenPrices | None) -> EventToken:
    """Build a token entry; quote is None when price or decimals are unknown."""
    if token_data is None:
        return EventToken(heading=heading, value=str(amount))

    price = token_data.latest_price
    pretty_quote = None
    if price is not None:
        pretty_quote = prettify_currency(price * scale_amount(amount, token_data.contract_decimals))
    return EventToken(
        heading=heading,
        value=str(amount),
        decimals=token_data.contract_decimals,
        pretty_quote=pretty_quote,
        ticker_symbol=token_data.contract_ticker_symbol,
        ticker_logo=token_data.logo_url,
    )
