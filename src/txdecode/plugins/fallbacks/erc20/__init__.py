from txdecode.plugins.fallbacks.erc20.fallback import register

__all__ = ["register"]
