import pytest

from txdecode.core.config import DEFAULT_BASE_URL, load_config


def test_load_config_requires_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("COVALENT_API_KEY", raising=False)
    with pytest.raises(ValueError, match="COVALENT_API_KEY"):
        load_config()


def test_load_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COVALENT_API_KEY", "cqt_key")
    for name in ("COVALENT_BASE_URL", "TXDECODE_TIMEOUT_S", "TXDECODE_RAW_LOGS", "TXDECODE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    config = load_config()

    assert config.api_key == "cqt_key"
    assert config.base_url == DEFAULT_BASE_URL
    assert config.timeout_s == 20
    assert config.raw_logs is False
    assert config.log_level == "INFO"


def test_load_config_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COVALENT_API_KEY", "cqt_key")
    monkeypatch.setenv("COVALENT_BASE_URL", "https://proxy.test/v1/")
    monkeypatch.setenv("TXDECODE_TIMEOUT_S", "5")
    monkeypatch.setenv("TXDECODE_RAW_LOGS", "true")
    monkeypatch.setenv("TXDECODE_LOG_LEVEL", "debug")

    config = load_config()

    assert config.base_url == "https://proxy.test/v1"
    assert config.timeout_s == 5
    assert config.raw_logs is True
    assert config.log_level == "DEBUG"
