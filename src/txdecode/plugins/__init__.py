"""Bundled decoder plugins and the startup registration pass.

`build_registry()` is the single place plugins are loaded. Order matters:
every protocol's configs are registered first, then every protocol's
decoders, then the fallbacks, and the registry is frozen.

Adding a protocol only requires a package under `protocols/` exposing
`CONFIGS` and `register(registry)`, listed in `PROTOCOLS`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from types import ModuleType

from txdecode.decoding.registry import DecoderRegistry
from txdecode.plugins.fallbacks import erc20
from txdecode.plugins.protocols import connext

logger = logging.getLogger(__name__)

PROTOCOLS: tuple[ModuleType, ...] = (connext,)
FALLBACKS: tuple[ModuleType, ...] = (erc20,)


def build_registry(
    protocols: Sequence[ModuleType] = PROTOCOLS,
    fallbacks: Sequence[ModuleType] = FALLBACKS,
    *,
    freeze: bool = True,
) -> DecoderRegistry:
    """Create a registry populated by the given plugins."""
    logger.info("Initializing decoder registry...")
    registry = DecoderRegistry()

    for protocol in protocols:
        registry.register_configs(protocol.CONFIGS)
    for protocol in protocols:
        protocol.register(registry)
    for fb in fallbacks:
        fb.register(registry)

    if freeze:
        registry.freeze()

    stats = registry.stats()
    logger.info("%s protocols found", f"{stats.protocols:,}")
    logger.info("%s configs generated", f"{stats.configs:,}")
    logger.info("%s decoders generated", f"{stats.decoders:,}")
    logger.info("%s fallbacks generated", f"{stats.fallbacks:,}")
    return registry
