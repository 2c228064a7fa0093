"""Tests for the hub that owns one bus and one store."""

from __future__ import annotations

import unittest

from statebus.bus import EventBus
from statebus.config import DEFAULT_CONFIG
from statebus.hub import Hub
from statebus.store import Store


class HubTests(unittest.TestCase):
    """Validate construction, bridging and teardown."""

    def test_default_hub_creates_independent_bus_and_store(self) -> None:
        hub = Hub()
        self.assertIsInstance(hub.bus, EventBus)
        self.assertIsInstance(hub.store, Store)
        self.assertFalse(hub.bridged)

    def test_accepts_existing_components(self) -> None:
        bus = EventBus()
        store = Store({"a": 1})
        hub = Hub(bus=bus, store=store)
        self.assertIs(hub.bus, bus)
        self.assertIs(hub.store, store)

    def test_from_config_defaults(self) -> None:
        hub = Hub.from_config(DEFAULT_CONFIG)
        self.assertEqual(hub.store.get_state(), {})
        self.assertFalse(hub.bridged)
        self.assertTrue(hub.bus.log_failures)

    def test_from_config_applies_sections(self) -> None:
        config = {
            "bus": {"log_failures": False},
            "store": {"initial_state": {"theme": "dark"}, "log_failures": False},
            "bridge": {"enabled": True, "event_name": "prefs.changed"},
        }
        hub = Hub.from_config(config)
        seen: list[object] = []
        hub.bus.subscribe("prefs.changed", seen.append)

        hub.store.set_state({"font": 12})

        self.assertEqual(seen, [{"theme": "dark", "font": 12}])
        self.assertFalse(hub.bus.log_failures)
        self.assertFalse(hub.store.log_failures)

    def test_connect_bridge_replaces_previous_bridge(self) -> None:
        hub = Hub()
        seen: list[str] = []
        hub.bus.subscribe("one", lambda _s: seen.append("one"))
        hub.bus.subscribe("two", lambda _s: seen.append("two"))

        hub.connect_bridge("one")
        hub.connect_bridge("two")
        hub.store.set_state({"a": 1})

        self.assertEqual(seen, ["two"])
        hub.disconnect_bridge()
        self.assertFalse(hub.bridged)

    def test_close_tears_down_every_subscription(self) -> None:
        seen: list[object] = []
        with Hub() as hub:
            hub.bus.subscribe("ready", seen.append)
            hub.store.subscribe(seen.append)
            hub.connect_bridge()
            with self.assertLogs("statebus.hub", level="INFO") as logs:
                hub.close()
            self.assertTrue(any("hub.closed" in line for line in logs.output))

        self.assertTrue(hub.closed)
        self.assertFalse(hub.bridged)
        hub.bus.publish("ready", 1)
        hub.store.set_state({"a": 1})
        self.assertEqual(seen, [])

    def test_close_is_idempotent(self) -> None:
        hub = Hub()
        hub.close()
        with self.assertNoLogs("statebus.hub", level="INFO"):
            hub.close()


if __name__ == "__main__":
    unittest.main()
