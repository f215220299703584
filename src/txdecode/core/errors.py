"""Exception hierarchy for the decoder.

Startup-time errors (`ConfigurationError`, `SchemaError`, `RegistryFrozenError`)
abort initialization. `ClientError` surfaces from the data client during
dispatch. Errors raised by decode functions are never wrapped.
"""

from __future__ import annotations


class DecoderError(Exception):
    """Base class for all txdecode errors."""


class ConfigurationError(DecoderError):
    """A decoder was registered for a (chain, protocol) with no contract configs."""


class SchemaError(DecoderError):
    """An event ABI, event name or event id could not be turned into a topic hash."""


class RegistryFrozenError(DecoderError):
    """A registration was attempted after the registry was frozen."""


class ClientError(DecoderError):
    """The blockchain-data API returned an unrecoverable error."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
