from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from juba.discovery import list_adapters


def register(app: typer.Typer) -> None:
    @app.command()
    def adapters() -> None:
        """List local Bluetooth adapters."""
        console = Console()
        found = list_adapters()

        if not found:
            console.print("No Bluetooth adapters found.")
            return

        table = Table()
        table.add_column("Name", style="cyan")
        table.add_column("Address", style="green")
        for adapter in found:
            table.add_row(adapter.name, adapter.address)
        console.print(table)
