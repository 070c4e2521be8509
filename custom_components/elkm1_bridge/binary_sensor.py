"""Binary sensors for Elk M1 zones and garage door obstruction beams."""

from __future__ import annotations

import logging

from elkm1_bridge_lib import BinaryInput, GarageDoor, TamperPolicy, ZoneKind

from homeassistant.components.binary_sensor import (
    BinarySensorDeviceClass,
    BinarySensorEntity,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EntityCategory
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddConfigEntryEntitiesCallback

from .const import DATA_COORDINATOR, DATA_HUB, DOMAIN
from .coordinator import ElkM1BridgeCoordinator
from .entity import ElkM1AccessoryEntity
from .hub import ElkM1BridgeHub

_LOGGER = logging.getLogger(__name__)

_DEVICE_CLASS_BY_KIND = {
    ZoneKind.CONTACT: BinarySensorDeviceClass.OPENING,
    ZoneKind.MOTION: BinarySensorDeviceClass.MOTION,
    ZoneKind.SMOKE: BinarySensorDeviceClass.SMOKE,
    ZoneKind.CO: BinarySensorDeviceClass.CO,
    ZoneKind.CO2: BinarySensorDeviceClass.GAS,
    ZoneKind.LEAK: BinarySensorDeviceClass.MOISTURE,
}


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddConfigEntryEntitiesCallback,
) -> None:
    """Set up Elk M1 zone binary sensors from a config entry."""
    data = hass.data[DOMAIN][entry.entry_id]
    hub: ElkM1BridgeHub = data[DATA_HUB]
    coordinator: ElkM1BridgeCoordinator = data[DATA_COORDINATOR]
    known_ids: set[str] = set()

    def _async_add_zones() -> None:
        snapshot = coordinator.data
        if snapshot is None:
            return
        entities: list[BinarySensorEntity] = []
        for accessory in snapshot.accessories.values():
            if accessory.uuid in known_ids:
                continue
            if isinstance(accessory, BinaryInput):
                known_ids.add(accessory.uuid)
                entities.append(ElkM1ZoneBinarySensor(coordinator, hub, entry, accessory))
                if accessory.tamper_policy is not TamperPolicy.NONE:
                    entities.append(
                        ElkM1ZoneTamperSensor(coordinator, hub, entry, accessory)
                    )
            elif isinstance(accessory, GarageDoor) and accessory.obstruction_zone:
                known_ids.add(accessory.uuid)
                entities.append(
                    ElkM1GarageObstructionSensor(coordinator, hub, entry, accessory)
                )
        if entities:
            _LOGGER.debug("Adding %s zone entities", len(entities))
            async_add_entities(entities)

    _async_add_zones()
    entry.async_on_unload(coordinator.async_add_listener(_async_add_zones))


class ElkM1ZoneBinarySensor(ElkM1AccessoryEntity[BinaryInput], BinarySensorEntity):
    """Representation of an Elk M1 zone."""

    _attr_name = None

    def __init__(
        self,
        coordinator: ElkM1BridgeCoordinator,
        hub: ElkM1BridgeHub,
        entry: ConfigEntry,
        accessory: BinaryInput,
    ) -> None:
        """Initialize the zone entity."""
        super().__init__(coordinator, hub, entry, accessory)
        self._attr_device_class = _DEVICE_CLASS_BY_KIND.get(accessory.capability.kind)

    @property
    def is_on(self) -> bool | None:
        """Return true when the zone is violated."""
        zone = self.accessory
        return None if zone is None else zone.active


class ElkM1ZoneTamperSensor(ElkM1AccessoryEntity[BinaryInput], BinarySensorEntity):
    """Tamper state of a zone wired with an end-of-line resistor."""

    _attr_device_class = BinarySensorDeviceClass.TAMPER
    _attr_entity_category = EntityCategory.DIAGNOSTIC
    _attr_translation_key = "tamper"

    def __init__(
        self,
        coordinator: ElkM1BridgeCoordinator,
        hub: ElkM1BridgeHub,
        entry: ConfigEntry,
        accessory: BinaryInput,
    ) -> None:
        """Initialize the tamper entity."""
        super().__init__(coordinator, hub, entry, accessory, suffix="tamper")

    @property
    def is_on(self) -> bool | None:
        """Return true when the zone wiring reports tampering."""
        zone = self.accessory
        return None if zone is None else zone.tampered


class ElkM1GarageObstructionSensor(
    ElkM1AccessoryEntity[GarageDoor], BinarySensorEntity
):
    """Obstruction beam of a garage door."""

    _attr_device_class = BinarySensorDeviceClass.PROBLEM
    _attr_translation_key = "obstruction"

    def __init__(
        self,
        coordinator: ElkM1BridgeCoordinator,
        hub: ElkM1BridgeHub,
        entry: ConfigEntry,
        accessory: GarageDoor,
    ) -> None:
        """Initialize the obstruction entity."""
        super().__init__(coordinator, hub, entry, accessory, suffix="obstruction")

    @property
    def is_on(self) -> bool | None:
        """Return true when the obstruction zone is violated."""
        door = self.accessory
        return None if door is None else door.obstructed
