import asyncio
import json
import logging

import click
from rich.console import Console
from rich.table import Table

from txdecode.core.errors import DecoderError

console = Console()
logger = logging.getLogger(__name__)


@click.group()
@click.option("--log-level", default=None, help="Override TXDECODE_LOG_LEVEL (DEBUG, INFO, ...)")
def cli(log_level: str | None) -> None:
    """Decode transaction event logs into readable events."""
    from txdecode.log import setup_logging

    setup_logging(log_level)


@cli.command("decode")
@click.option("--chain", "chain_name", required=True, help="Chain name, e.g. eth-mainnet")
@click.option("--tx-hash", required=True, help="Transaction hash to decode")
@click.option("--raw-logs/--no-raw-logs", default=None, help="Embed the raw log in each decoded event")
@click.option("--timeout", "timeout_s", type=int, default=None, help="Abort the whole decode after N seconds")
def decode_cmd(chain_name: str, tx_hash: str, raw_logs: bool | None, timeout_s: int | None) -> None:
    """Fetch a transaction and print its decoded events as JSON."""
    from txdecode.clients.covalent import CovalentClient
    from txdecode.core.config import load_config
    from txdecode.core.models import DecodeOptions
    from txdecode.decoding.decoder import TransactionDecoder
    from txdecode.plugins import build_registry

    try:
        config = load_config()
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    options = DecodeOptions(raw_logs=config.raw_logs if raw_logs is None else raw_logs)
    registry = build_registry()
    decoder = TransactionDecoder(
        registry,
        base_url=config.base_url,
        timeout_s=config.timeout_s,
        max_connections=config.max_connections,
    )

    async def run() -> list[dict]:
        async with CovalentClient(
            config.api_key,
            base_url=config.base_url,
            timeout_s=config.timeout_s,
            max_connections=config.max_connections,
        ) as client:
            tx = await client.get_transaction(chain_name, tx_hash)
        logger.info("decoding %d logs of %s", len(tx.log_events), tx.tx_hash)
        events = await asyncio.wait_for(
            decoder.decode(chain_name, tx, config.api_key, options),
            timeout=timeout_s,
        )
        return [event.to_dict() for event in events]

    try:
        events = asyncio.run(run())
    except (DecoderError, asyncio.TimeoutError) as e:
        raise click.ClickException(f"{type(e).__name__}: {e}") from e

    click.echo(json.dumps(events, indent=2))


@cli.command("stats")
def stats_cmd() -> None:
    """Load all plugins and print registry counts."""
    from txdecode.plugins import build_registry

    stats = build_registry().stats()
    table = Table(title="decoder registry")
    table.add_column("item")
    table.add_column("count", justify="right")
    table.add_row("protocols", f"{stats.protocols:,}")
    table.add_row("configs", f"{stats.configs:,}")
    table.add_row("decoders", f"{stats.decoders:,}")
    table.add_row("fallbacks", f"{stats.fallbacks:,}")
    console.print(table)


if __name__ == "__main__":
    cli()
