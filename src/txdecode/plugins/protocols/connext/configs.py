from txdecode.core.models import ProtocolConfig

CONFIGS: list[ProtocolConfig] = [
    ProtocolConfig(
        address="0x8898b472c54c31894e3b9bb83cea802a5d0e63c6",
        is_factory=False,
        protocol_name="connext",
        chain_name="eth-mainnet",
    ),
]
