from __future__ import annotations

from typing import Annotated

import typer

from juba.config import (
    DistanceConfig,
    ScanningConfig,
    Settings,
    render_settings_toml,
    write_settings,
)

from .common import load_settings_or_exit, resolve_config_path_or_exit

app = typer.Typer(no_args_is_help=True, help="Show or create the config file.")


@app.command("show")
def show_config() -> None:
    settings = load_settings_or_exit()
    path, exists = resolve_config_path_or_exit(allow_missing=True)

    source = str(path) if exists else "defaults"
    typer.echo(f"Config source: {source}")
    typer.echo(render_settings_toml(settings))


@app.command("init")
def init_config(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing config"),
    ] = False,
    adapter: Annotated[
        str | None,
        typer.Option("--adapter", "-a", help="Default adapter name or address"),
    ] = None,
    reference_power: Annotated[
        int | None,
        typer.Option(
            "--reference-power",
            "-r",
            max=-1,
            help="Calibrated RSSI at one meter, in dBm",
        ),
    ] = None,
) -> None:
    """Write a config file, seeded with calibration for this machine."""
    path, exists = resolve_config_path_or_exit(allow_missing=True)

    if exists and not force:
        typer.echo(f"Config already exists at {path}")
        return

    settings = Settings()
    if reference_power is not None:
        settings = settings.model_copy(
            update={"distance": DistanceConfig(reference_power=reference_power)}
        )
    if adapter:
        settings = settings.model_copy(
            update={"scanning": ScanningConfig(adapter=adapter)}
        )

    write_settings(settings, path)
    typer.echo(f"Wrote config to {path}")
