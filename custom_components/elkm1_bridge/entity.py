"""Shared entity helpers for the Elk M1 bridge integration."""

from __future__ import annotations

from typing import Generic, TypeVar

from elkm1_bridge_lib import Accessory, SessionState
from elkm1_bridge_lib.const import MANUFACTURER

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import CONF_HOST
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN, PANEL_MODEL
from .coordinator import ElkM1BridgeCoordinator
from .hub import ElkM1BridgeHub

_AccessoryT = TypeVar("_AccessoryT", bound=Accessory)


def panel_identifier(entry: ConfigEntry) -> str:
    """Return the device identifier of the panel itself."""
    return entry.unique_id or entry.entry_id


def device_info_for_entry(entry: ConfigEntry) -> DeviceInfo:
    """Build device info for the panel tied to a config entry."""
    return DeviceInfo(
        identifiers={(DOMAIN, panel_identifier(entry))},
        name=entry.title or entry.data.get(CONF_HOST),
        manufacturer=MANUFACTURER,
        model=PANEL_MODEL,
    )


def device_info_for_accessory(entry: ConfigEntry, accessory: Accessory) -> DeviceInfo:
    """Build device info for one bridged accessory."""
    return DeviceInfo(
        identifiers={(DOMAIN, accessory.uuid)},
        name=accessory.name,
        manufacturer=MANUFACTURER,
        model=accessory.model,
        serial_number=accessory.serial_number,
        via_device=(DOMAIN, panel_identifier(entry)),
    )


def build_unique_id(base: str, domain: str, numeric_id: int | str) -> str:
    """Build a stable unique ID in <base>:<domain>:<id> format."""
    return f"{base}:{domain}:{numeric_id}"


class ElkM1AccessoryEntity(CoordinatorEntity[ElkM1BridgeCoordinator], Generic[_AccessoryT]):
    """Entity bound to an accessory UUID rather than to one instance.

    Rediscovery replaces accessory instances; looking the accessory up in the
    current snapshot keeps the entity on whichever instance is live.
    """

    _attr_has_entity_name = True

    def __init__(
        self,
        coordinator: ElkM1BridgeCoordinator,
        hub: ElkM1BridgeHub,
        entry: ConfigEntry,
        accessory: _AccessoryT,
        *,
        suffix: str | None = None,
    ) -> None:
        """Initialize the entity."""
        super().__init__(coordinator)
        self._hub = hub
        self._uuid = accessory.uuid
        self._attr_unique_id = (
            accessory.uuid if suffix is None else f"{accessory.uuid}:{suffix}"
        )
        self._attr_device_info = device_info_for_accessory(entry, accessory)

    @property
    def accessory(self) -> _AccessoryT | None:
        """Return the live accessory instance, if any."""
        snapshot = self.coordinator.data
        if snapshot is None:
            return None
        return snapshot.get(self._uuid)  # type: ignore[return-value]

    @property
    def available(self) -> bool:
        """Return if the entity is available."""
        snapshot = self.coordinator.data
        return (
            snapshot is not None
            and snapshot.state is SessionState.CONNECTED
            and snapshot.get(self._uuid) is not None
        )
