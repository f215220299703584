import asyncio
import json
import sys

from txdecode.clients.covalent import CovalentClient
from txdecode.core.config import load_config
from txdecode.core.models import DecodeOptions
from txdecode.decoding.decoder import TransactionDecoder
from txdecode.log import setup_logging
from txdecode.plugins import build_registry

CHAIN = "eth-mainnet"

config = load_config()
setup_logging(config.log_level)
registry = build_registry()
decoder = TransactionDecoder(
    registry,
    base_url=config.base_url,
    timeout_s=config.timeout_s,
    max_connections=config.max_connections,
)


async def decode_many(tx_hashes: list[str]):
    async with CovalentClient(config.api_key, base_url=config.base_url) as client:
        txs = [await client.get_transaction(CHAIN, h) for h in tx_hashes]
    # The frozen registry is shared by all concurrent decode calls
    results = await asyncio.gather(
        *(decoder.decode(CHAIN, tx, config.api_key, DecodeOptions(raw_logs=False)) for tx in txs)
    )
    return {tx.tx_hash: [e.to_dict() for e in events] for tx, events in zip(txs, results)}


if __name__ == "__main__":
    print(json.dumps(asyncio.run(decode_many(sys.argv[1:])), indent=2))
