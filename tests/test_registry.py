from __future__ import annotations

import pytest
from pydantic import ValidationError

from juba.config import DistanceConfig
from juba.core import DeviceRegistry, DiscoveryOutcome, estimate


@pytest.fixture
def registry() -> DeviceRegistry:
    reg = DeviceRegistry()
    for address, name, rssi in [
        ("AA:01", "Phone", -59),
        ("AA:02", "Watch", -70),
        ("AA:03", "TV", -85),
    ]:
        reg.discover(address, name, rssi)
    return reg


def test_first_discovery_wins():
    reg = DeviceRegistry()
    assert reg.discover("AA:11", "Phone", -59) is DiscoveryOutcome.CREATED
    assert reg.discover("AA:11", "Renamed", -90) is DiscoveryOutcome.IGNORED

    record = reg.get("AA:11")
    assert record is not None
    assert record.display_name == "Phone"
    assert record.signal_strength == -59
    assert record.estimated_distance == pytest.approx(estimate(-59))
    assert len(reg) == 1


def test_unknown_reading_gets_default_distance():
    reg = DeviceRegistry(DistanceConfig(default_distance=3.0))
    reg.discover("AA:11", "Thing", 0)
    record = reg.get("AA:11")
    assert record is not None
    assert record.estimated_distance == 3.0


def test_reference_power_comes_from_config():
    reg = DeviceRegistry(DistanceConfig(reference_power=-70))
    reg.discover("AA:11", "Thing", -70)
    record = reg.get("AA:11")
    assert record is not None
    assert record.estimated_distance == pytest.approx(1.01076, abs=1e-5)


def test_record_identity_is_immutable(registry):
    record = registry.get("AA:01")
    with pytest.raises(ValidationError):
        record.address = "BB:BB"
    with pytest.raises(ValidationError):
        record.estimated_distance = 5.0


def test_visible_addresses_follow_discovery_order(registry):
    assert registry.visible_addresses() == ["AA:01", "AA:02", "AA:03"]


def test_hidden_device_never_reappears(registry):
    registry.set_hidden("AA:02")
    assert registry.visible_addresses() == ["AA:01", "AA:03"]

    registry.discover("AA:02", "Watch", -40)
    registry.toggle_starred("AA:02")
    registry.toggle_focus("AA:01")
    registry.toggle_focus("AA:01")
    assert "AA:02" not in registry.visible_addresses()


def test_focus_is_exclusive_and_toggles(registry):
    registry.set_hidden("AA:03")
    registry.toggle_starred("AA:02")

    assert registry.toggle_focus("AA:02") == "AA:02"
    assert registry.visible_addresses() == ["AA:02"]

    assert registry.toggle_focus("AA:02") is None
    assert registry.visible_addresses() == ["AA:01", "AA:02"]


def test_focus_moves_between_devices(registry):
    registry.toggle_focus("AA:01")
    assert registry.toggle_focus("AA:03") == "AA:03"
    assert registry.visible_addresses() == ["AA:03"]


def test_focus_can_show_a_hidden_device(registry):
    registry.set_hidden("AA:01")
    registry.toggle_focus("AA:01")
    assert registry.visible_addresses() == ["AA:01"]


def test_hiding_the_focused_device_clears_focus(registry):
    registry.toggle_focus("AA:02")
    registry.set_hidden("AA:02")
    assert registry.focus_address is None
    assert registry.visible_addresses() == ["AA:01", "AA:03"]


def test_star_toggles_without_touching_visibility(registry):
    before = registry.visible_addresses()
    assert registry.toggle_starred("AA:01") is True
    assert registry.toggle_starred("AA:01") is False
    assert registry.get("AA:01").starred is False
    assert registry.visible_addresses() == before


def test_unknown_addresses_are_ignored(registry):
    registry.set_hidden("ZZ:99")
    assert registry.toggle_starred("ZZ:99") is None
    assert registry.toggle_focus("ZZ:99") is None
    assert registry.focus_address is None
    assert registry.visible_addresses() == ["AA:01", "AA:02", "AA:03"]


def test_clear_resets_everything(registry):
    registry.set_hidden("AA:01")
    registry.toggle_starred("AA:02")
    registry.toggle_focus("AA:03")

    registry.clear()

    assert len(registry) == 0
    assert registry.focus_address is None
    assert registry.visible_addresses() == []

    registry.discover("AA:01", "Phone again", -40)
    record = registry.get("AA:01")
    assert record.display_name == "Phone again"
    assert record.hidden is False
    assert record.starred is False
