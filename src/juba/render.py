"""Terminal rendering of proximity snapshots."""

from __future__ import annotations

from rich.console import Console
from rich.live import Live
from rich.table import Table

from juba.models import DevicePlacement, ProximitySnapshot
from juba.utils.redaction import Redactor

STAR = "★"


def _stacking_key(device: DevicePlacement) -> float:
    return device.placement.z_order if device.placement else 0.0


def build_table(snapshot: ProximitySnapshot, redactor: Redactor | None = None) -> Table:
    redactor = redactor or Redactor(enabled=False)
    accent = snapshot.accent_color

    if snapshot.adapter is None:
        title = "No adapter selected"
    elif snapshot.focused is not None:
        title = f"Focused on {redactor.redact_address(snapshot.focused)}"
    else:
        title = f"Adapter {redactor.redact_address(snapshot.adapter)}"

    table = Table(title=title, title_style=f"bold {accent}")
    table.add_column("", width=1)
    table.add_column("Address", style="cyan")
    table.add_column("Name", style=accent)
    table.add_column("Distance", justify="right")
    table.add_column("RSSI", justify="right")
    table.add_column("X", justify="right")
    table.add_column("Y", justify="right")
    table.add_column("Z", justify="right")

    # nearest first, same order the canvas stacks them
    for device in sorted(snapshot.visible, key=_stacking_key, reverse=True):
        placement = device.placement
        table.add_row(
            f"[yellow]{STAR}[/yellow]" if device.starred else "",
            redactor.redact_address(device.address),
            redactor.redact_name(device.display_name, device.address),
            device.distance_text,
            f"{device.signal_strength} dBm" if device.signal_strength else "?",
            f"{placement.x:.1f}" if placement else "",
            f"{placement.y:.1f}" if placement else "",
            f"{placement.z_order:.3f}" if placement else "",
        )

    hidden = len(snapshot.devices) - len(snapshot.visible)
    caption = [f"{len(snapshot.devices)} device(s)"]
    if hidden:
        caption.append(f"{hidden} not shown")
    if snapshot.last_error:
        caption.append(f"[red]{snapshot.last_error}[/red]")
    table.caption = ", ".join(caption)
    return table


class ConsoleRenderer:
    """Prints a fresh table after every recompute."""

    def __init__(self, console: Console, redactor: Redactor | None = None) -> None:
        self._console = console
        self._redactor = redactor
        self.latest: ProximitySnapshot | None = None

    def render(self, snapshot: ProximitySnapshot) -> None:
        self.latest = snapshot
        self._console.print(build_table(snapshot, self._redactor))


class LiveRenderer:
    """Redraws a single table in place."""

    def __init__(self, live: Live, redactor: Redactor | None = None) -> None:
        self._live = live
        self._redactor = redactor
        self.latest: ProximitySnapshot | None = None

    def render(self, snapshot: ProximitySnapshot) -> None:
        self.latest = snapshot
        self._live.update(build_table(snapshot, self._redactor), refresh=True)
