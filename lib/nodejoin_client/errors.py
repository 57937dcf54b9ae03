from __future__ import annotations


class NodejoinError(Exception):
    """Base library error."""


class NetworkError(NodejoinError):
    """Transport/network layer error."""


class StatusError(NodejoinError):
    def __init__(self, status_code: int, url: str, body: str = ""):
        super().__init__(f"got {status_code} status code from {url}, body: {body}")
        self.status_code = status_code
        self.url = url
        self.body = body


class NoKeyFoundError(NodejoinError):
    """Fetched content held no usable SSH public key."""


class InvalidKeyError(NodejoinError, ValueError):
    """A single authorized_keys line could not be parsed."""


class VariableNotFoundError(NodejoinError, LookupError):
    def __init__(self, name: str):
        super().__init__(f"{name} not found in env data")
        self.name = name


class InvalidServerURLError(NodejoinError, ValueError):
    """Server URL value has no usable host."""
