from __future__ import annotations

import urllib.parse

from .errors import InvalidServerURLError, VariableNotFoundError

K3S_URL_KEY = "K3S_URL"
DEFAULT_API_PORT = 6443
ALTERNATE_PORT = 8443

_SCHEMES = ("http://", "https://")


def format_server_url(value: str) -> str:
    """Qualify a bare host/IP as ``https://<host>:6443``; URLs pass through."""
    if value.lower().startswith(_SCHEMES):
        return value
    return f"https://{value}:{DEFAULT_API_PORT}"


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_env_data(data: bytes | str) -> dict[str, str]:
    text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
    env: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key.startswith("export "):
            key = key[len("export "):].strip()
        if not key:
            continue
        env[key] = _unquote(value.strip())
    return env


def _split_host(hostinfo: str) -> str:
    if hostinfo.startswith("["):
        end = hostinfo.find("]")
        return hostinfo[:end + 1] if end > 1 else ""
    return hostinfo.partition(":")[0]


def with_port(url: str, port: int) -> str:
    """Replace the port of ``url``; scheme, host and the rest stay as written."""
    value = url if "://" in url else f"https://{url}"
    try:
        parts = urllib.parse.urlsplit(value)
    except ValueError as e:
        raise InvalidServerURLError(f"invalid server URL: {url!r}") from e
    # urlsplit lowercases the scheme and .hostname lowercases the host
    scheme = value.split("://", 1)[0]
    userinfo, sep, hostinfo = parts.netloc.rpartition("@")
    host = _split_host(hostinfo)
    if not host:
        raise InvalidServerURLError(f"invalid server URL: {url!r}")
    netloc = f"{userinfo}{sep}{host}:{port}"
    return urllib.parse.urlunsplit((scheme, netloc, parts.path, parts.query, parts.fragment))


def server_url_from_env_data(data: bytes | str) -> str:
    env = parse_env_data(data)
    value = env.get(K3S_URL_KEY, "").strip()
    if not value:
        raise VariableNotFoundError(K3S_URL_KEY)
    return with_port(value, ALTERNATE_PORT)
