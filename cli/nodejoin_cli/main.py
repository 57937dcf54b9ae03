from __future__ import annotations

import typer

from .commands import cluster_cmd, keys_cmd, manifest_cmd, settings_cmd
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="nodejoin",
        help="Bootstrap configuration for nodes joining a cluster.",
        no_args_is_help=True,
    )

    app.add_typer(keys_cmd.app, name="keys")
    app.add_typer(cluster_cmd.app, name="cluster")
    app.add_typer(manifest_cmd.app, name="manifest")
    app.add_typer(settings_cmd.app, name="settings")
    app.command("status")(manifest_cmd.status)

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()
