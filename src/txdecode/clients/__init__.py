from txdecode.clients.covalent import CovalentClient, TokenPrices

__all__ = ["CovalentClient", "TokenPrices"]
