"""Formatting helpers shared by decode plugins."""

from __future__ import annotations

import math
from datetime import datetime, timezone


def timestamp_parser(timestamp: str, fmt: str = "%Y-%m-%d") -> str:
    """Reformat an ISO-8601 timestamp (e.g. `block_signed_at`) with `fmt` in UTC."""
    dt = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime(fmt)


def prettify_currency(value: float | None, currency_symbol: str = "$") -> str | None:
    """Format a quote as `$1,234.56`; None when there is nothing to show."""
    if value is None or math.isnan(value):
        return None
    if value != 0 and abs(value) < 0.01:
        return f"{'-' if value < 0 else ''}<{currency_symbol}0.01"
    sign = "-" if value < 0 else ""
    return f"{sign}{currency_symbol}{abs(value):,.2f}"


def scale_amount(raw: int | str, decimals: int | None) -> float:
    """Convert an integer token amount into units using `decimals` (0 when unknown)."""
    return int(raw) / 10 ** (decimals or 0)
