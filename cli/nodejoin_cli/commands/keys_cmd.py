from __future__ import annotations

import logging

import typer
from nodejoin_client import NodejoinError
from nodejoin_client.keys import extract_keys, render_authorized_keys

from .. import console
from ..config import load_config, normalize_keys_url, resolve_fetch_timeout, resolve_ssh_keys_url
from ..http import make_fetcher

log = logging.getLogger(__name__)

app = typer.Typer(help="SSH authorized keys.")


@app.command("fetch")
def fetch_keys(
        url: str | None = typer.Option(None, "--url", help="URL serving authorized_keys content."),
        timeout: float | None = typer.Option(None, "--timeout", min=0.1, help="Request timeout in seconds."),
        json_out: bool = typer.Option(False, "--json", help="Print keys as JSON."),
):
    cfg = load_config()
    keys_url = normalize_keys_url(url) if url else resolve_ssh_keys_url(cfg)
    if not keys_url:
        console.err("No SSH keys URL configured. Use --url or `nodejoin settings set --ssh-keys-url`.")
        raise typer.Exit(code=2)
    timeout_s = timeout if timeout is not None else resolve_fetch_timeout(cfg)

    log.debug("fetching ssh keys from %s (timeout %ss)", keys_url, timeout_s)
    try:
        keys = extract_keys(make_fetcher(), keys_url, timeout=timeout_s)
    except NodejoinError as e:
        console.err(f"Failed to fetch SSH keys: {e}")
        raise typer.Exit(code=2)
    log.debug("accepted %d ssh key(s)", len(keys))

    if json_out:
        console.print_json(
            [
                {
                    "type": key.key_type,
                    "comment": key.comment,
                    "fingerprint": key.fingerprint,
                    "line": key.line,
                }
                for key in keys
            ]
        )
        return
    console.out(render_authorized_keys(keys))
