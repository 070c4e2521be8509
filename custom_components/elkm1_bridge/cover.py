"""Cover platform for Elk M1 garage doors."""

from __future__ import annotations

import logging
from typing import Any

from elkm1_bridge_lib import DoorState, GarageDoor

from homeassistant.components.cover import (
    CoverDeviceClass,
    CoverEntity,
    CoverEntityFeature,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddConfigEntryEntitiesCallback

from .const import DATA_COORDINATOR, DATA_HUB, DOMAIN
from .coordinator import ElkM1BridgeCoordinator
from .entity import ElkM1AccessoryEntity
from .hub import ElkM1BridgeHub

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddConfigEntryEntitiesCallback,
) -> None:
    """Set up Elk M1 garage doors from a config entry."""
    data = hass.data[DOMAIN][entry.entry_id]
    hub: ElkM1BridgeHub = data[DATA_HUB]
    coordinator: ElkM1BridgeCoordinator = data[DATA_COORDINATOR]
    known_ids: set[str] = set()

    def _async_add_doors() -> None:
        snapshot = coordinator.data
        if snapshot is None:
            return
        entities: list[ElkM1GarageDoorCover] = []
        for accessory in snapshot.accessories.values():
            if not isinstance(accessory, GarageDoor) or accessory.uuid in known_ids:
                continue
            known_ids.add(accessory.uuid)
            entities.append(ElkM1GarageDoorCover(coordinator, hub, entry, accessory))
        if entities:
            _LOGGER.debug("Adding %s garage door entities", len(entities))
            async_add_entities(entities)

    _async_add_doors()
    entry.async_on_unload(coordinator.async_add_listener(_async_add_doors))


class ElkM1GarageDoorCover(ElkM1AccessoryEntity[GarageDoor], CoverEntity):
    """Garage door driven by two pulsed outputs and confirmed by a zone."""

    _attr_name = None
    _attr_device_class = CoverDeviceClass.GARAGE
    _attr_supported_features = CoverEntityFeature.OPEN | CoverEntityFeature.CLOSE

    @property
    def is_closed(self) -> bool | None:
        """Return if the door is closed."""
        door = self.accessory
        return None if door is None else door.current_state is DoorState.CLOSED

    @property
    def is_opening(self) -> bool | None:
        """Return if the door is opening."""
        door = self.accessory
        return None if door is None else door.current_state is DoorState.OPENING

    @property
    def is_closing(self) -> bool | None:
        """Return if the door is closing."""
        door = self.accessory
        return None if door is None else door.current_state is DoorState.CLOSING

    async def async_open_cover(self, **kwargs: Any) -> None:
        """Open the door."""
        await self._async_set_target(DoorState.OPEN)

    async def async_close_cover(self, **kwargs: Any) -> None:
        """Close the door."""
        await self._async_set_target(DoorState.CLOSED)

    async def _async_set_target(self, target: DoorState) -> None:
        door = self.accessory
        if door is None:
            return
        await self._hub.async_command(
            f"move {door.name} to {target.value}",
            lambda: door.async_set_target_state(target),
        )
