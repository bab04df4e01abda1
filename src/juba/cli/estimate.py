from __future__ import annotations

from typing import Annotated

import typer

from juba.core import resolve_distance

from .common import load_settings_or_exit


def register(app: typer.Typer) -> None:
    @app.command()
    def estimate(
        rssi: Annotated[int, typer.Argument(help="Signal strength in dBm")],
        reference_power: Annotated[
            int | None,
            typer.Option(
                "--reference-power",
                "-r",
                max=-1,
                help="Expected RSSI at one meter (config default if omitted)",
            ),
        ] = None,
    ) -> None:
        """Estimate the distance for a signal strength reading."""
        settings = load_settings_or_exit()
        reference = reference_power or settings.distance.reference_power
        distance = resolve_distance(
            rssi,
            reference_power=reference,
            default=settings.distance.default_distance,
        )
        typer.echo(f"Approx. Distance: {distance:.2f} meters")
