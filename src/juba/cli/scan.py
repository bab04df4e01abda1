from __future__ import annotations

import asyncio
import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.live import Live

from juba.core import ProximityController
from juba.discovery import MOCK_ADAPTER, find_adapter, list_adapters
from juba.models import Adapter, ProximitySnapshot
from juba.render import ConsoleRenderer, LiveRenderer, build_table
from juba.session import build_controller, run_session
from juba.utils.redaction import Redactor

from .common import load_settings_or_exit

logger = logging.getLogger(__name__)


def _run(
    controller: ProximityController, adapter: Adapter, duration: float | None
) -> ProximitySnapshot:
    return asyncio.run(run_session(controller, adapter, duration))


def register(app: typer.Typer) -> None:
    @app.command()
    def scan(
        adapter: Annotated[
            str | None,
            typer.Option(
                "--adapter", "-a", help="Adapter name or address (config default)"
            ),
        ] = None,
        mock: Annotated[
            bool,
            typer.Option("--mock", help="Replay scripted devices, no radio needed"),
        ] = False,
        duration: Annotated[
            float | None,
            typer.Option(
                "--duration", "-d", min=0, help="Stop after this many seconds"
            ),
        ] = None,
        hide: Annotated[
            list[str] | None,
            typer.Option("--hide", help="Hide this address once discovered"),
        ] = None,
        star: Annotated[
            list[str] | None,
            typer.Option("--star", help="Star this address once discovered"),
        ] = None,
        focus: Annotated[
            str | None,
            typer.Option("--focus", help="Show only this address once discovered"),
        ] = None,
        redact: Annotated[
            bool,
            typer.Option("--redact", help="Redact device addresses in output"),
        ] = False,
        live: Annotated[
            bool,
            typer.Option(
                "--live/--no-live", help="Redraw in place instead of printing updates"
            ),
        ] = True,
    ) -> None:
        """Scan for nearby devices and show their estimated positions."""
        settings = load_settings_or_exit()
        console = Console()

        available = [MOCK_ADAPTER] if mock else list_adapters()
        if not available:
            typer.echo("No Bluetooth adapters found on this system.", err=True)
            raise typer.Exit(1)

        key = adapter or settings.scanning.adapter
        chosen = available[0] if mock else find_adapter(available, key)
        if chosen is None:
            typer.echo(f"Unknown adapter: {key}", err=True)
            raise typer.Exit(1)

        logger.info(
            "Scan settings: timeout=%.1fs, rescan_delay=%.1fs",
            settings.scanning.scan_timeout,
            settings.scanning.rescan_delay,
        )
        redactor = Redactor(enabled=redact)
        try:
            if live:
                with Live(console=console, auto_refresh=False) as view:
                    controller = build_controller(
                        settings,
                        LiveRenderer(view, redactor),
                        mock=mock,
                        hide=hide or (),
                        star=star or (),
                        focus=focus,
                    )
                    snapshot = _run(controller, chosen, duration)
            else:
                controller = build_controller(
                    settings,
                    ConsoleRenderer(console, redactor),
                    mock=mock,
                    hide=hide or (),
                    star=star or (),
                    focus=focus,
                )
                snapshot = _run(controller, chosen, duration)
        except KeyboardInterrupt:
            console.print("\nScan stopped.")
            return

        if controller.last_error:
            typer.echo(f"Scan failed: {controller.last_error}", err=True)
            raise typer.Exit(1)

        if not live:
            console.print("\n[bold]Final view[/bold]")
            console.print(build_table(snapshot, redactor))
        console.print(f"\n[green]Found {len(snapshot.devices)} device(s)[/green]")
