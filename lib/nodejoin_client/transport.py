from __future__ import annotations

import time
from typing import Protocol, runtime_checkable

import httpx

from .errors import NetworkError, StatusError

USER_AGENT = "nodejoin-client/0.1.0"


@runtime_checkable
class Fetcher(Protocol):
    def get(self, url: str, timeout: float) -> bytes:
        ...


class HttpFetcher:
    """Default fetcher: one GET per call, no retry.

    ``timeout`` is a deadline for the whole request, body included: each
    connect/read step is limited by it, and the body is abandoned once the
    deadline passes between chunks.

    Holds no per-request state, so a single instance can be shared. A custom
    ``transport`` (e.g. ``httpx.MockTransport``) replaces the network layer.
    """

    def __init__(self, *, user_agent: str = USER_AGENT, transport: httpx.BaseTransport | None = None):
        self._headers = {"User-Agent": user_agent}
        self._transport = transport

    def get(self, url: str, timeout: float) -> bytes:
        deadline = time.monotonic() + timeout
        try:
            with httpx.Client(
                timeout=timeout,
                headers=self._headers,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                with client.stream("GET", url) as r:
                    chunks: list[bytes] = []
                    for chunk in r.iter_bytes():
                        chunks.append(chunk)
                        _check_deadline(deadline, url, timeout)
                    _check_deadline(deadline, url, timeout)
                    status_code = r.status_code
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise NetworkError(str(e)) from e

        body = b"".join(chunks)
        if status_code < 200 or status_code >= 400:
            raise StatusError(status_code, url, body.decode("utf-8", errors="replace"))
        return body


def _check_deadline(deadline: float, url: str, timeout: float) -> None:
    if time.monotonic() > deadline:
        raise NetworkError(f"GET {url} timed out after {timeout}s")
