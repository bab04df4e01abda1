from __future__ import annotations

import typer
from rich.console import Console

from .common import load_settings_or_exit, resolve_config_path_or_exit


def register(app: typer.Typer) -> None:
    @app.command()
    def info() -> None:
        """Show the effective configuration."""
        settings = load_settings_or_exit()
        config_path, config_exists = resolve_config_path_or_exit(allow_missing=True)

        console = Console()

        console.print("[bold]juba info[/bold]\n")
        console.print(f"Config file: {config_path if config_exists else 'defaults'}")

        console.print("\n[bold]Distance[/bold]")
        console.print(f"Reference power: {settings.distance.reference_power} dBm")
        console.print(f"Default distance: {settings.distance.default_distance} m")

        console.print("\n[bold]Layout[/bold]")
        geometry = settings.layout
        console.print(f"Canvas: {geometry.canvas_width:g}x{geometry.canvas_height:g}")
        console.print(f"Radius: {geometry.radius:g}")

        console.print("\n[bold]Scanning[/bold]")
        console.print(f"Adapter: {settings.scanning.adapter or 'first available'}")
        console.print(f"Scan timeout: {settings.scanning.scan_timeout}s")
        console.print(f"Rescan delay: {settings.scanning.rescan_delay}s")
