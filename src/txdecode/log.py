import logging
import os

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(log_level: str | None = None) -> None:
    """Install a rich console handler on the root logger.

    An explicit `log_level` wins over `TXDECODE_LOG_LEVEL`; INFO when neither is set.
    """
    log_level = log_level or os.getenv("TXDECODE_LOG_LEVEL")

    level = logging.getLevelName((log_level or "INFO").upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
