from __future__ import annotations

from enum import Enum


class DecodedAction(str, Enum):
    ADD_LIQUIDITY = "Add Liquidity"
    REMOVE_LIQUIDITY = "Remove Liquidity"
    ADD_ROUTER = "Add Router"
    REMOVE_ROUTER = "Remove Router"
    INIT_ROUTER = "Initialize Router"
    UPDATE = "Update"
    TRANSFERRED = "Transferred"
    APPROVAL = "Approval"
    SWAPPED = "Swapped"


class DecodedEventCategory(str, Enum):
    DEX = "DEX"
    BRIDGE = "Bridge"
    TOKEN = "Token"
    NFT = "NFT"
    LENDING = "Lending"
    OTHERS = "Others"


DEFAULT_QUOTE_CURRENCY = "USD"
