from __future__ import annotations

import pytest

from juba.config import ScanningConfig, Settings, ThemeConfig
from juba.core import ControllerState, ProximityController
from juba.core.events import (
    DeviceDiscovered,
    Hide,
    ScanFailed,
    ScanFinished,
    ToggleStar,
)
from juba.models import Adapter
from juba.theme import FALLBACK_ACCENT, FixedAccent

from .fakes import DiscoveryRecorder, FakeScheduler, RecordingRenderer

HCI0 = Adapter(name="hci0", address="00:1A:7D:DA:71:13")
HCI1 = Adapter(name="hci1", address="00:1A:7D:DA:71:14")


@pytest.fixture
def discovery() -> DiscoveryRecorder:
    return DiscoveryRecorder()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def controller(discovery, scheduler, renderer) -> ProximityController:
    return ProximityController(discovery, scheduler, renderer)


def test_starts_unselected(controller):
    assert controller.state is ControllerState.UNSELECTED
    assert controller.adapter is None


def test_discovery_before_selecting_is_dropped(controller, renderer):
    controller.on_discovered("AA:11", "Phone", -59)
    assert len(controller.registry) == 0
    assert renderer.snapshots == []


def test_select_adapter_starts_discovery(controller, discovery):
    controller.select_adapter(HCI0)

    assert controller.state is ControllerState.SCANNING
    assert controller.adapter == HCI0
    assert discovery.current.adapter == HCI0
    assert discovery.current.starts == 1


def test_discovered_device_is_laid_out(controller, discovery, renderer):
    controller.select_adapter(HCI0)
    discovery.current.sink(
        DeviceDiscovered(address="AA:11", display_name="Phone", signal_strength=-59)
    )

    assert controller.registry.visible_addresses() == ["AA:11"]
    device = renderer.latest.get("AA:11")
    assert device is not None
    assert device.visible
    assert device.display_name == "Phone"
    assert device.distance_text == "1.01 meters"
    assert device.placement.x == pytest.approx(624.7, abs=0.1)
    assert device.placement.y == pytest.approx(300.0)
    assert renderer.latest.adapter == HCI0.address


def test_duplicate_discovery_does_not_recompute(controller, renderer):
    controller.select_adapter(HCI0)
    controller.on_discovered("AA:11", "Phone", -59)
    count = len(renderer.snapshots)

    controller.on_discovered("AA:11", "Phone", -30)

    assert len(renderer.snapshots) == count
    assert controller.snapshot.get("AA:11").signal_strength == -59


def test_unnamed_device_displays_its_address(controller):
    controller.select_adapter(HCI0)
    controller.on_discovered("AA:11", "", -59)
    assert controller.snapshot.get("AA:11").display_name == "AA:11"


def test_commands_always_recompute(controller, renderer):
    controller.select_adapter(HCI0)
    controller.on_discovered("AA:11", "Phone", -59)
    controller.on_discovered("AA:22", "Watch", -70)
    count = len(renderer.snapshots)

    controller.toggle_star("AA:11")
    controller.hide("AA:22")
    controller.toggle_focus("AA:11")
    controller.toggle_star("ZZ:99")

    assert len(renderer.snapshots) == count + 4


def test_star_twice_keeps_positions(controller):
    controller.select_adapter(HCI0)
    controller.on_discovered("AA:11", "Phone", -59)
    controller.on_discovered("AA:22", "Watch", -70)
    before = controller.snapshot

    controller.toggle_star("AA:11")
    assert controller.snapshot.get("AA:11").starred is True
    controller.toggle_star("AA:11")

    after = controller.snapshot
    assert after.get("AA:11").starred is False
    assert after == before


def test_hide_removes_device_from_layout(controller):
    controller.select_adapter(HCI0)
    controller.on_discovered("AA:11", "Phone", -59)
    controller.on_discovered("AA:22", "Watch", -70)

    controller.hide("AA:11")

    hidden = controller.snapshot.get("AA:11")
    assert hidden.visible is False
    assert hidden.placement is None
    watch = controller.snapshot.get("AA:22")
    # the only visible device gets angle 0
    assert watch.placement.y == pytest.approx(300.0)


def test_focus_centers_the_device_and_toggles_back(controller):
    controller.select_adapter(HCI0)
    for i in range(3):
        controller.on_discovered(f"AA:0{i}", f"Device {i}", -60 - i)
    overview = controller.snapshot

    controller.toggle_focus("AA:01")
    focused = controller.snapshot
    assert focused.focused == "AA:01"
    assert [d.address for d in focused.visible] == ["AA:01"]
    assert focused.get("AA:01").placement.x == 400.0
    assert focused.get("AA:01").placement.y == 300.0

    controller.toggle_focus("AA:01")
    assert controller.snapshot == overview


def test_reset_focus(controller):
    controller.select_adapter(HCI0)
    controller.on_discovered("AA:11", "Phone", -59)
    controller.toggle_focus("AA:11")

    controller.reset_focus()

    assert controller.snapshot.focused is None


def test_scan_round_schedules_rescan_without_clearing(
    controller, discovery, scheduler
):
    controller.select_adapter(HCI0)
    controller.on_discovered("AA:11", "Phone", -59)

    controller.on_scan_round_complete()

    assert [timer.delay for timer in scheduler.pending] == [12.0]
    assert discovery.current.starts == 1

    scheduler.fire()

    assert discovery.current.starts == 2
    assert controller.registry.visible_addresses() == ["AA:11"]


def test_rescan_delay_comes_from_settings(discovery, scheduler, renderer):
    settings = Settings(scanning=ScanningConfig(rescan_delay=3.0))
    controller = ProximityController(discovery, scheduler, renderer, settings)
    controller.select_adapter(HCI0)

    controller.handle(ScanFinished())

    assert scheduler.pending[0].delay == 3.0


def test_reselecting_cancels_session_and_timer_before_clearing(
    controller, discovery, scheduler
):
    controller.select_adapter(HCI0)
    first = discovery.current
    controller.on_discovered("AA:11", "Phone", -59)
    controller.toggle_star("AA:11")
    controller.on_scan_round_complete()
    timer = scheduler.pending[0]

    controller.select_adapter(HCI1)

    assert first.stops == 1
    assert timer.cancelled
    assert len(controller.registry) == 0
    assert discovery.current is not first
    assert discovery.current.starts == 1
    assert controller.adapter == HCI1


def test_deselect_stops_and_clears(controller, discovery, scheduler, renderer):
    controller.select_adapter(HCI0)
    controller.on_discovered("AA:11", "Phone", -59)
    controller.on_scan_round_complete()

    controller.deselect_adapter()

    assert controller.state is ControllerState.UNSELECTED
    assert discovery.current.stops == 1
    assert scheduler.pending == []
    assert len(controller.registry) == 0
    assert renderer.latest.devices == ()
    assert renderer.latest.adapter is None


def test_late_events_after_deselect_are_ignored(controller, discovery, scheduler):
    controller.select_adapter(HCI0)
    session = discovery.current
    controller.deselect_adapter()

    session.sink(
        DeviceDiscovered(address="AA:11", display_name="Ghost", signal_strength=-50)
    )
    session.sink(ScanFinished())

    assert len(controller.registry) == 0
    assert scheduler.pending == []


def test_scan_failure_stops_the_session(controller, discovery, scheduler):
    controller.select_adapter(HCI0)
    controller.on_discovered("AA:11", "Phone", -59)

    discovery.current.sink(ScanFailed(message="adapter lost"))

    assert controller.state is ControllerState.UNSELECTED
    assert discovery.current.stops == 1
    assert controller.last_error == "adapter lost"
    assert controller.snapshot.last_error == "adapter lost"
    assert len(controller.registry) == 0


def test_selecting_again_clears_last_error(controller, discovery):
    controller.select_adapter(HCI0)
    discovery.current.sink(ScanFailed(message="adapter lost"))

    controller.select_adapter(HCI0)

    assert controller.last_error is None


def test_close_stops_collaborators_but_keeps_snapshot(
    controller, discovery, scheduler
):
    controller.select_adapter(HCI0)
    controller.on_discovered("AA:11", "Phone", -59)
    controller.on_scan_round_complete()

    controller.close()

    assert discovery.current.stops == 1
    assert scheduler.pending == []
    assert controller.snapshot.get("AA:11") is not None


def test_discovery_that_cannot_start_leaves_controller_unselected(
    scheduler, renderer
):
    class DeadRadio:
        def __init__(self, adapter, sink) -> None:
            self.sink = sink

        def start(self) -> None:
            # queued behind the select, must be dropped with it
            self.sink(ToggleStar(address="AA:11"))
            raise RuntimeError("no running event loop")

        def stop(self) -> None:
            pass

    controller = ProximityController(DeadRadio, scheduler, renderer)

    with pytest.raises(RuntimeError, match="no running event loop"):
        controller.select_adapter(HCI0)

    assert controller.state is ControllerState.UNSELECTED
    assert controller.adapter is None
    assert renderer.snapshots == []

    controller.reset_focus()

    assert len(renderer.snapshots) == 1


def test_events_raised_while_rendering_are_queued(discovery, scheduler):
    order: list[str] = []

    class ReentrantRenderer:
        controller: ProximityController | None = None

        def render(self, snapshot):
            order.append(f"render:{len(snapshot.visible)}")
            device = snapshot.get("AA:11")
            if device is not None and not device.starred:
                self.controller.handle(ToggleStar(address="AA:11"))
                self.controller.handle(Hide(address="AA:11"))
                order.append("queued")

    renderer = ReentrantRenderer()
    controller = ProximityController(discovery, scheduler, renderer)
    renderer.controller = controller

    controller.select_adapter(HCI0)
    controller.on_discovered("AA:11", "Phone", -59)

    assert order == ["render:0", "render:1", "queued", "render:1", "render:0"]
    record = controller.registry.get("AA:11")
    assert record.starred and record.hidden


def test_accent_color_fallback_and_theme(discovery, scheduler, renderer):
    plain = ProximityController(discovery, scheduler, renderer)
    assert plain.snapshot.accent_color == FALLBACK_ACCENT

    themed = ProximityController(
        discovery,
        scheduler,
        renderer,
        Settings(theme=ThemeConfig(accent_color="#112233")),
        theme=FixedAccent("#aabbcc"),
    )
    assert themed.snapshot.accent_color == "#AABBCC"
