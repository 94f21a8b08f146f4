import pytest

from ledger_submitter.config.app_config import AppConfig
from ledger_submitter.domain.errors import ConfigError

SETTINGS = """
[network]
rpc_url = "http://localhost:5005"
timeout_seconds = 7.5

[signing]
address = "gM4Fpv2QuHY4knJsQyYGKEHFGw3eMBwc1U"
secret = "s3q5ZGX2ToGgkHMyZQtf5t1pTmmKp"

[classifier]
legacy_fail_band = false

[store]
path = "txs.json"
"""


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "settings.toml"
    path.write_text(SETTINGS, encoding="utf-8")
    return str(path)


def test_load_from_toml(settings_file):
    cfg = AppConfig.load(settings_file, environ={})
    assert cfg.network.rpc_url == "http://localhost:5005"
    assert cfg.network.timeout_seconds == 7.5
    assert cfg.signing.address.startswith("gM4F")
    assert cfg.classifier.legacy_fail_band is False
    assert cfg.store.path == "txs.json"
    assert cfg.scheduler.interval_seconds == 5.0
    assert cfg.loaded_files == ["settings.toml"]


def test_env_overrides_are_recorded(settings_file):
    env = {
        "SUBMITTER__CLASSIFIER__LEGACY_FAIL_BAND": "true",
        "SUBMITTER__SCHEDULER__INTERVAL_SECONDS": "2",
        "SUBMITTER__NETWORK__RPC_URL": "http://node:5005",
        "OTHER__IGNORED": "1",
    }
    cfg = AppConfig.load(settings_file, environ=env)
    assert cfg.classifier.legacy_fail_band is True
    assert cfg.scheduler.interval_seconds == 2.0
    assert cfg.network.rpc_url == "http://node:5005"
    keys = {o.key for o in cfg.overrides}
    assert {"classifier.legacy_fail_band", "network.rpc_url"} <= keys


def test_env_only_config_keeps_numeric_secret_as_string():
    env = {
        "SUBMITTER__NETWORK__RPC_URL": "http://node:5005",
        "SUBMITTER__SIGNING__ADDRESS": "12345",
        "SUBMITTER__SIGNING__SECRET": "67890",
    }
    cfg = AppConfig.load(None, environ=env)
    assert cfg.signing.secret == "67890"
    assert cfg.signing.address == "12345"


def test_secret_not_in_repr(settings_file):
    cfg = AppConfig.load(settings_file, environ={})
    assert "s3q5ZGX2" not in repr(cfg.signing)


@pytest.mark.parametrize(
    "env",
    [
        {"SUBMITTER__SIGNING__ADDRESS": "a", "SUBMITTER__SIGNING__SECRET": "s"},
        {"SUBMITTER__NETWORK__RPC_URL": "http://x", "SUBMITTER__SIGNING__SECRET": "s"},
        {"SUBMITTER__NETWORK__RPC_URL": "http://x", "SUBMITTER__SIGNING__ADDRESS": "a"},
        {
            "SUBMITTER__NETWORK__RPC_URL": "http://x",
            "SUBMITTER__SIGNING__ADDRESS": "a",
            "SUBMITTER__SIGNING__SECRET": "s",
            "SUBMITTER__NETWORK__TIMEOUT_SECONDS": "0",
        },
        {
            "SUBMITTER__NETWORK__RPC_URL": "http://x",
            "SUBMITTER__SIGNING__ADDRESS": "a",
            "SUBMITTER__SIGNING__SECRET": "s",
            "SUBMITTER__CLASSIFIER__LEGACY_FAIL_BAND": "maybe",
        },
    ],
)
def test_invalid_config_raises(env):
    with pytest.raises(ConfigError):
        AppConfig.load(None, environ=env)


def test_missing_settings_file(tmp_path):
    with pytest.raises(ConfigError):
        AppConfig.load(str(tmp_path / "nope.toml"), environ={})
