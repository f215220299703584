from txdecode.plugins.protocols.connext.configs import CONFIGS
from txdecode.plugins.protocols.connext.decoders import register

__all__ = ["CONFIGS", "register"]
