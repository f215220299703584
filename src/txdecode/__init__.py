from __future__ import annotations

from .core.errors import ConfigurationError, DecoderError, SchemaError
from .core.models import DecodedEvent, DecodeOptions, LogEvent, Transaction
from .decoding.decoder import TransactionDecoder, decode_transaction
from .decoding.registry import DecoderRegistry
from .plugins import build_registry

__all__ = [
    "build_registry",
    "DecoderRegistry",
    "TransactionDecoder",
    "decode_transaction",
    "DecodedEvent",
    "DecodeOptions",
    "LogEvent",
    "Transaction",
    "ConfigurationError",
    "DecoderError",
    "SchemaError",
]
