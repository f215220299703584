"""Decoder registry and transaction dispatch.

This package provides:
- DecoderRegistry: configs, function table, chain and fallback indices
- TransactionDecoder: per-transaction dispatch in reverse emission order
"""

from txdecode.decoding.decoder import TransactionDecoder, decode_transaction
from txdecode.decoding.registry import DecoderRegistry, split_event_id

__all__ = [
    "DecoderRegistry",
    "TransactionDecoder",
    "decode_transaction",
    "split_event_id",
]
