from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from nodejoin_client.keys import DEFAULT_FETCH_TIMEOUT_S
from nodejoin_client.manifest import DEFAULT_STATUS_PATHS

APP_NAME = "nodejoin"
CONFIG_FILENAME = "config.toml"
ENV_FILE_DEFAULT = "/etc/rancher/k3s/k3s-agent.env"
ENV_SSH_KEYS_URL = "NODEJOIN_SSH_KEYS_URL"
ENV_FETCH_TIMEOUT = "NODEJOIN_FETCH_TIMEOUT"


@dataclass
class AppConfig:
    ssh_keys_url: str = ""
    fetch_timeout_s: float = DEFAULT_FETCH_TIMEOUT_S
    env_file: str = ENV_FILE_DEFAULT
    status_paths: list[str] = field(default_factory=lambda: list(DEFAULT_STATUS_PATHS))


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig()


def normalize_keys_url(raw: str | None) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    host = value.split("/", 1)[0]
    host = host.split(":", 1)[0].lower()
    if host in {"localhost", "127.0.0.1", "0.0.0.0"}:
        scheme = "http://"
    else:
        scheme = "https://"
    return f"{scheme}{value}"


def _parse_timeout(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        return None
    if timeout <= 0:
        return None
    return timeout


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return {
        "ssh_keys_url": cfg.ssh_keys_url,
        "fetch_timeout_s": cfg.fetch_timeout_s,
        "env_file": cfg.env_file,
        "status": {"paths": list(cfg.status_paths)},
    }


def from_toml(data: dict[str, Any]) -> AppConfig:
    cfg = default_config()
    cfg.ssh_keys_url = normalize_keys_url(str(data.get("ssh_keys_url") or ""))
    timeout = _parse_timeout(data.get("fetch_timeout_s"))
    if timeout is not None:
        cfg.fetch_timeout_s = timeout
    env_file = str(data.get("env_file") or "").strip()
    if env_file:
        cfg.env_file = env_file
    status_raw = data.get("status") or {}
    if isinstance(status_raw, dict):
        paths = status_raw.get("paths")
        if isinstance(paths, list):
            cfg.status_paths = [str(p) for p in paths if isinstance(p, str) and p.strip()]
    return cfg


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return from_toml(data)
    except FileNotFoundError:
        return default_config()


def resolve_ssh_keys_url(cfg: AppConfig) -> str:
    env_value = os.getenv(ENV_SSH_KEYS_URL, "").strip()
    if env_value:
        return normalize_keys_url(env_value)
    return cfg.ssh_keys_url


def resolve_fetch_timeout(cfg: AppConfig) -> float:
    env_value = _parse_timeout(os.getenv(ENV_FETCH_TIMEOUT, "").strip() or None)
    if env_value is not None:
        return env_value
    return cfg.fetch_timeout_s


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
