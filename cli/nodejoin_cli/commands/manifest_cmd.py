from __future__ import annotations

import typer
from nodejoin_client.manifest import get_status, render_manifest

from .. import console
from ..config import load_config

app = typer.Typer(help="Node manifest and status.")


def _parse_pairs(pairs: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got: {pair}")
        mapping[key] = value
    return mapping


@app.command("render")
def render(
        pairs: list[str] = typer.Argument(..., help="KEY=VALUE pairs, rendered in the given order."),
):
    try:
        mapping = _parse_pairs(pairs)
    except ValueError as e:
        console.err(str(e))
        raise typer.Exit(code=2)
    console.out(render_manifest(mapping))


def status(
        json_out: bool = typer.Option(False, "--json", help="Print status as JSON."),
):
    """Report whether this node looks ready."""
    cfg = load_config()
    value = get_status(cfg.status_paths)
    if json_out:
        console.print_json({"status": value.value})
        return
    console.out(value.value + "\n")
