"""Sensors for the Elk M1 bridge integration."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Callable

from elkm1_bridge_lib import SessionState, TemperatureSensor

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorEntityDescription,
    SensorStateClass,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EntityCategory, UnitOfTemperature, UnitOfTime
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddConfigEntryEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DATA_COORDINATOR, DATA_HUB, DOMAIN
from .coordinator import BridgeSnapshot, ElkM1BridgeCoordinator
from .entity import (
    ElkM1AccessoryEntity,
    build_unique_id,
    device_info_for_entry,
    panel_identifier,
)
from .hub import ElkM1BridgeHub

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class ElkM1SessionSensorDescription(SensorEntityDescription):
    """Describe a panel session sensor."""

    key: str
    numeric_id: int
    value_fn: Callable[[BridgeSnapshot], Any]


SESSION_SENSORS: tuple[ElkM1SessionSensorDescription, ...] = (
    ElkM1SessionSensorDescription(
        key="session_state",
        numeric_id=1,
        translation_key="session_state",
        device_class=SensorDeviceClass.ENUM,
        options=[state.value for state in SessionState],
        value_fn=lambda snapshot: snapshot.state.value,
    ),
    ElkM1SessionSensorDescription(
        key="retry_delay",
        numeric_id=2,
        translation_key="retry_delay",
        device_class=SensorDeviceClass.DURATION,
        native_unit_of_measurement=UnitOfTime.SECONDS,
        value_fn=lambda snapshot: snapshot.retry_delay,
    ),
)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddConfigEntryEntitiesCallback,
) -> None:
    """Set up Elk M1 sensors from a config entry."""
    data = hass.data[DOMAIN][entry.entry_id]
    hub: ElkM1BridgeHub = data[DATA_HUB]
    coordinator: ElkM1BridgeCoordinator = data[DATA_COORDINATOR]
    known_ids: set[str] = set()

    async_add_entities(
        ElkM1SessionSensor(coordinator, entry, description)
        for description in SESSION_SENSORS
    )

    def _async_add_temperatures() -> None:
        snapshot = coordinator.data
        if snapshot is None:
            return
        entities: list[ElkM1TemperatureSensor] = []
        for accessory in snapshot.accessories.values():
            if not isinstance(accessory, TemperatureSensor) or accessory.uuid in known_ids:
                continue
            known_ids.add(accessory.uuid)
            entities.append(ElkM1TemperatureSensor(coordinator, hub, entry, accessory))
        if entities:
            _LOGGER.debug("Adding %s temperature entities", len(entities))
            async_add_entities(entities)

    _async_add_temperatures()
    entry.async_on_unload(coordinator.async_add_listener(_async_add_temperatures))


class ElkM1TemperatureSensor(ElkM1AccessoryEntity[TemperatureSensor], SensorEntity):
    """Temperature sensor wired to an Elk M1 zone."""

    _attr_name = None
    _attr_device_class = SensorDeviceClass.TEMPERATURE
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_native_unit_of_measurement = UnitOfTemperature.CELSIUS

    @property
    def native_value(self) -> float | None:
        """Return the temperature in degrees Celsius."""
        thermometer = self.accessory
        return None if thermometer is None else thermometer.celsius


class ElkM1SessionSensor(CoordinatorEntity[ElkM1BridgeCoordinator], SensorEntity):
    """Diagnostic view of the panel session."""

    _attr_entity_category = EntityCategory.DIAGNOSTIC
    _attr_has_entity_name = True

    def __init__(
        self,
        coordinator: ElkM1BridgeCoordinator,
        entry: ConfigEntry,
        description: ElkM1SessionSensorDescription,
    ) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator)
        self.entity_description = description
        self._attr_unique_id = build_unique_id(
            panel_identifier(entry), "session", description.numeric_id
        )
        self._attr_device_info = device_info_for_entry(entry)

    @property
    def native_value(self) -> Any:
        """Return the current value."""
        snapshot = self.coordinator.data
        if snapshot is None:
            return None
        return self.entity_description.value_fn(snapshot)
