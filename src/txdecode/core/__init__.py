"""Core data models, configuration, errors and constants.

This package provides:
- Data models (LogEvent, Transaction, DecodedEvent, ProtocolConfig, ...)
- Configuration (DecoderConfig, load_config)
- Error hierarchy (ConfigurationError, SchemaError, ...)
"""

from txdecode.core.config import DecoderConfig, load_config
from txdecode.core.errors import (
    ClientError,
    ConfigurationError,
    DecoderError,
    RegistryFrozenError,
    SchemaError,
)
from txdecode.core.models import (
    ContractConfig,
    DecodedEvent,
    DecodeOptions,
    EventDetail,
    EventProtocol,
    EventToken,
    LogEvent,
    ProtocolConfig,
    RegistryStats,
    Transaction,
)

__all__ = [
    "DecoderConfig",
    "load_config",
    "ClientError",
    "ConfigurationError",
    "DecoderError",
    "RegistryFrozenError",
    "SchemaError",
    "ContractConfig",
    "DecodedEvent",
    "DecodeOptions",
    "EventDetail",
    "EventProtocol",
    "EventToken",
    "LogEvent",
    "ProtocolConfig",
    "RegistryStats",
    "Transaction",
]
