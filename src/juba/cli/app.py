from __future__ import annotations

from typing import Annotated

import typer

from juba.utils.logging import level_for_verbosity, setup_logging

from . import config as config_cmd
from .adapters import register as register_adapters
from .estimate import register as register_estimate
from .info import register as register_info
from .scan import register as register_scan

app = typer.Typer(help="juba - Bluetooth proximity scanner", no_args_is_help=True)

app.add_typer(config_cmd.app, name="config")

register_adapters(app)
register_scan(app)
register_estimate(app)
register_info(app)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            count=True,
            help="Debug logging; repeat to include bleak's own debug output",
        ),
    ] = 0,
) -> None:
    """juba CLI."""
    setup_logging(level_for_verbosity(verbose), backend_debug=verbose > 1)

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"juba version {get_version('juba')}")
        raise typer.Exit()
