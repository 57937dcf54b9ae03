from __future__ import annotations

from nodejoin_cli import config


def _use_tmp_config_dir(monkeypatch, tmp_path) -> None:
    def _config_dir(_: str) -> str:
        return str(tmp_path)

    monkeypatch.setattr(config, "user_config_dir", _config_dir)


def test_load_config_defaults_when_missing(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(monkeypatch, tmp_path)

    cfg = config.load_config()

    assert cfg.ssh_keys_url == ""
    assert cfg.fetch_timeout_s == 15.0
    assert cfg.env_file == config.ENV_FILE_DEFAULT


def test_save_and_load_round_trip(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(monkeypatch, tmp_path)
    cfg = config.AppConfig(
        ssh_keys_url="https://meta.example/keys",
        fetch_timeout_s=3.0,
        env_file="/tmp/k3s.env",
        status_paths=["/tmp/a"],
    )

    path = config.save_config(cfg)
    loaded = config.load_config()

    assert path.endswith("config.toml")
    assert loaded == cfg


def test_from_toml_ignores_bad_values() -> None:
    cfg = config.from_toml(
        {
            "ssh_keys_url": "meta.example/keys",
            "fetch_timeout_s": "soon",
            "env_file": "",
            "status": {"paths": ["/a", 3, ""]},
        }
    )

    assert cfg.ssh_keys_url == "https://meta.example/keys"
    assert cfg.fetch_timeout_s == 15.0
    assert cfg.env_file == config.ENV_FILE_DEFAULT
    assert cfg.status_paths == ["/a"]


def test_resolve_ssh_keys_url_env_override(monkeypatch) -> None:
    cfg = config.default_config()
    cfg.ssh_keys_url = "https://from-config.example/keys"
    monkeypatch.setenv(config.ENV_SSH_KEYS_URL, "127.0.0.1:8080/keys")

    assert config.resolve_ssh_keys_url(cfg) == "http://127.0.0.1:8080/keys"


def test_resolve_ssh_keys_url_from_config(monkeypatch) -> None:
    cfg = config.default_config()
    cfg.ssh_keys_url = "https://from-config.example/keys"
    monkeypatch.delenv(config.ENV_SSH_KEYS_URL, raising=False)

    assert config.resolve_ssh_keys_url(cfg) == "https://from-config.example/keys"


def test_resolve_fetch_timeout(monkeypatch) -> None:
    cfg = config.default_config()
    monkeypatch.setenv(config.ENV_FETCH_TIMEOUT, "2.5")
    assert config.resolve_fetch_timeout(cfg) == 2.5

    monkeypatch.setenv(config.ENV_FETCH_TIMEOUT, "not-a-number")
    assert config.resolve_fetch_timeout(cfg) == 15.0


def test_normalize_keys_url() -> None:
    assert config.normalize_keys_url("example.com/keys") == "https://example.com/keys"
    assert config.normalize_keys_url("localhost:8000/keys") == "http://localhost:8000/keys"
    assert config.normalize_keys_url("  ") == ""
    assert config.normalize_keys_url("http://example.com/keys") == "http://example.com/keys"
