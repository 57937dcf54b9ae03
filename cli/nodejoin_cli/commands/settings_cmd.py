from __future__ import annotations

import os

import typer

from .. import console
from ..config import config_path, default_config, load_config, normalize_keys_url, save_config

app = typer.Typer(help="Manage local CLI settings (~/.config/nodejoin/config.toml).")


@app.command("init")
def init_settings(
        force: bool = typer.Option(False, "--force", help="Overwrite existing config."),
        ssh_keys_url: str = typer.Option(
            "",
            "--ssh-keys-url",
            help="URL serving authorized_keys content.",
        ),
):
    path = config_path()
    if os.path.exists(path) and not force:
        console.info(f"Config already exists: {path}")
        console.info("Use --force to overwrite.")
        return

    cfg = default_config()
    cfg.ssh_keys_url = normalize_keys_url(ssh_keys_url)
    saved = save_config(cfg)
    console.ok(f"Config written: {saved}")


@app.command("show")
def show_settings():
    cfg = load_config()
    console.out(
        f"ssh_keys_url={cfg.ssh_keys_url or '(empty)'} fetch_timeout_s={cfg.fetch_timeout_s} "
        f"env_file={cfg.env_file}\n"
    )


@app.command("get")
def get_setting(
        key: str = typer.Argument(..., help="Setting key (ssh_keys_url, fetch_timeout_s, env_file)."),
):
    cfg = load_config()
    k = key.strip().lower()
    if k == "ssh_keys_url":
        console.out(cfg.ssh_keys_url + "\n")
        return
    if k == "fetch_timeout_s":
        console.out(f"{cfg.fetch_timeout_s}\n")
        return
    if k == "env_file":
        console.out(cfg.env_file + "\n")
        return
    console.err(f"Unknown setting: {key}")
    raise typer.Exit(code=2)


@app.command("set")
def set_setting(
        ssh_keys_url: str | None = typer.Option(None, "--ssh-keys-url", help="Set SSH keys URL."),
        fetch_timeout: float | None = typer.Option(None, "--fetch-timeout", min=0.1, help="Set fetch timeout (s)."),
        env_file: str | None = typer.Option(None, "--env-file", help="Set env file holding K3S_URL."),
):
    cfg = load_config()
    if ssh_keys_url is not None:
        cfg.ssh_keys_url = normalize_keys_url(ssh_keys_url)
    if fetch_timeout is not None:
        cfg.fetch_timeout_s = fetch_timeout
    if env_file is not None:
        cfg.env_file = env_file.strip() or cfg.env_file
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
