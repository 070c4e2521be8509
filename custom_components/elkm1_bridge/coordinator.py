"""Data update coordinator for the Elk M1 bridge integration."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
import logging
from typing import Any

from elkm1_bridge_lib import Accessory, AccessoryHandle, SessionState

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator

from .const import DOMAIN
from .hub import ElkM1BridgeHub

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BridgeSnapshot:
    """Point-in-time view of the session and its live accessories."""

    state: SessionState
    retry_delay: float
    accessories: Mapping[str, Accessory] = field(default_factory=dict)

    def get(self, uuid: str) -> Accessory | None:
        return self.accessories.get(uuid)


class ElkM1BridgeCoordinator(DataUpdateCoordinator[BridgeSnapshot]):
    """Push accessory and session changes to entities."""

    def __init__(
        self,
        hass: HomeAssistant,
        hub: ElkM1BridgeHub,
        entry: ConfigEntry,
    ) -> None:
        """Initialize the coordinator."""
        super().__init__(hass, _LOGGER, name=DOMAIN, config_entry=entry)
        self._hub = hub
        self._unsubscribe: list[Callable[[], Any]] = []
        self._watched: dict[str, Callable[[], Any]] = {}
        self._pending = False

    async def async_start(self) -> None:
        """Subscribe to bridge events and seed snapshot data."""
        self._stop_watching()
        bridge = self._hub.bridge
        self._unsubscribe = [
            bridge.registry.subscribe(self._handle_announce),
            bridge.session.subscribe(self._handle_event),
        ]
        for accessory in bridge.accessories().values():
            self._watch(accessory)
        self._set_snapshot(self.snapshot())

    async def async_stop(self) -> None:
        """Stop coordinating updates."""
        self._stop_watching()

    def snapshot(self) -> BridgeSnapshot:
        """Build a snapshot from the bridge's current state."""
        bridge = self._hub.bridge
        return BridgeSnapshot(
            state=bridge.state,
            retry_delay=bridge.session.retry_delay,
            accessories=bridge.accessories(),
        )

    async def _async_update_data(self) -> BridgeSnapshot:
        await self._hub.bridge.async_refresh()
        return self.snapshot()

    def _handle_announce(self, handle: AccessoryHandle) -> None:
        """Follow the instance newly bound to a registry record."""
        accessory = handle.accessory
        if accessory is not None:
            self._watch(accessory)
        self._handle_event()

    def _watch(self, accessory: Accessory) -> None:
        previous = self._watched.pop(accessory.uuid, None)
        if previous is not None:
            previous()
        self._watched[accessory.uuid] = accessory.add_listener(self._handle_event)

    def _handle_event(self, *_: Any) -> None:
        """Handle bridge events on the Home Assistant event loop."""
        if self._pending:
            return
        self._pending = True
        self.hass.loop.call_soon_threadsafe(self._process_event)

    @callback
    def _process_event(self) -> None:
        """Publish one snapshot for every burst of bridge events."""
        self._pending = False
        self._set_snapshot(self.snapshot())

    def _set_snapshot(self, snapshot: BridgeSnapshot) -> None:
        self.async_set_updated_data(snapshot)

    def _stop_watching(self) -> None:
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []
        for unsubscribe in self._watched.values():
            unsubscribe()
        self._watched.clear()
