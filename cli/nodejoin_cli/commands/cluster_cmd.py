from __future__ import annotations

import sys
from pathlib import Path

import typer
from nodejoin_client import NodejoinError
from nodejoin_client.server_url import format_server_url, server_url_from_env_data

from .. import console
from ..config import load_config

app = typer.Typer(help="Cluster API server URL helpers.")


@app.command("url")
def server_url(
        value: str = typer.Argument(..., help="Host, IP or full URL of the cluster API server."),
):
    console.out(format_server_url(value.strip()) + "\n")


def _read_env_data(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


@app.command("from-env")
def server_url_from_env(
        file: str | None = typer.Option(None, "--file", help="Env file with K3S_URL ('-' for stdin)."),
):
    path = file or load_config().env_file
    try:
        data = _read_env_data(path)
    except OSError as e:
        console.err(f"Failed to read {path}: {e}")
        raise typer.Exit(code=2)

    try:
        url = server_url_from_env_data(data)
    except NodejoinError as e:
        console.err(str(e))
        raise typer.Exit(code=2)
    console.out(url + "\n")
