from .errors import (
    InvalidKeyError,
    InvalidServerURLError,
    NetworkError,
    NodejoinError,
    NoKeyFoundError,
    StatusError,
    VariableNotFoundError,
)
from .keys import SshPublicKey, extract_keys, parse_authorized_key
from .manifest import NodeStatus, get_status, render_manifest
from .server_url import format_server_url, server_url_from_env_data
from .transport import Fetcher, HttpFetcher

__all__ = [
    "Fetcher",
    "HttpFetcher",
    "SshPublicKey",
    "extract_keys",
    "parse_authorized_key",
    "format_server_url",
    "server_url_from_env_data",
    "render_manifest",
    "get_status",
    "NodeStatus",
    "NodejoinError",
    "NetworkError",
    "StatusError",
    "NoKeyFoundError",
    "InvalidKeyError",
    "VariableNotFoundError",
    "InvalidServerURLError",
]
