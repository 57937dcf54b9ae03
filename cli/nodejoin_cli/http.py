from __future__ import annotations

from importlib import metadata

from nodejoin_client import Fetcher, HttpFetcher


def cli_version() -> str:
    try:
        return metadata.version("nodejoin")
    except metadata.PackageNotFoundError:
        return "0.0.0"


def make_fetcher() -> Fetcher:
    return HttpFetcher(user_agent=f"nodejoin-cli/{cli_version()}")
