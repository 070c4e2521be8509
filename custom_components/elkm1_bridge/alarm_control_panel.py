"""Alarm control panel platform for Elk M1 areas."""

from __future__ import annotations

import logging
from typing import Any

from elkm1_bridge_lib import SecurityArea, SecurityState

from homeassistant.components.alarm_control_panel import (
    AlarmControlPanelEntity,
    AlarmControlPanelEntityFeature,
    AlarmControlPanelState,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddConfigEntryEntitiesCallback

from .const import DATA_COORDINATOR, DATA_HUB, DOMAIN
from .coordinator import ElkM1BridgeCoordinator
from .entity import ElkM1AccessoryEntity
from .hub import ElkM1BridgeHub

_LOGGER = logging.getLogger(__name__)

_HA_STATE = {
    SecurityState.DISARMED: AlarmControlPanelState.DISARMED,
    SecurityState.AWAY_ARM: AlarmControlPanelState.ARMED_AWAY,
    SecurityState.STAY_ARM: AlarmControlPanelState.ARMED_HOME,
    SecurityState.NIGHT_ARM: AlarmControlPanelState.ARMED_NIGHT,
    SecurityState.ALARM_TRIGGERED: AlarmControlPanelState.TRIGGERED,
}


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddConfigEntryEntitiesCallback,
) -> None:
    """Set up Elk M1 area alarm control panels from a config entry."""
    data = hass.data[DOMAIN][entry.entry_id]
    hub: ElkM1BridgeHub = data[DATA_HUB]
    coordinator: ElkM1BridgeCoordinator = data[DATA_COORDINATOR]
    known_ids: set[str] = set()

    def _async_add_areas() -> None:
        snapshot = coordinator.data
        if snapshot is None:
            return
        entities: list[ElkM1AreaAlarmControlPanel] = []
        for accessory in snapshot.accessories.values():
            if not isinstance(accessory, SecurityArea) or accessory.uuid in known_ids:
                continue
            known_ids.add(accessory.uuid)
            entities.append(ElkM1AreaAlarmControlPanel(coordinator, hub, entry, accessory))
        if entities:
            _LOGGER.debug("Adding %s area entities", len(entities))
            async_add_entities(entities)

    _async_add_areas()
    entry.async_on_unload(coordinator.async_add_listener(_async_add_areas))


class ElkM1AreaAlarmControlPanel(
    ElkM1AccessoryEntity[SecurityArea], AlarmControlPanelEntity
):
    """Representation of an Elk M1 area.

    The keypad code comes from configuration, so Home Assistant never asks
    for one.
    """

    _attr_name = None
    _attr_code_arm_required = False
    _attr_supported_features = (
        AlarmControlPanelEntityFeature.ARM_AWAY
        | AlarmControlPanelEntityFeature.ARM_HOME
        | AlarmControlPanelEntityFeature.ARM_NIGHT
    )

    @property
    def alarm_state(self) -> AlarmControlPanelState | None:
        """Return the current state."""
        area = self.accessory
        if area is None:
            return None
        current = area.current_state
        target = area.target_state
        if current is not target and current is not SecurityState.ALARM_TRIGGERED:
            if target is SecurityState.DISARMED:
                return AlarmControlPanelState.DISARMING
            if current is SecurityState.DISARMED:
                return AlarmControlPanelState.ARMING
        return _HA_STATE[current]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return additional state attributes."""
        area = self.accessory
        if area is None:
            return {}
        return {"area": area.area, "target_state": area.target_state.value}

    async def async_alarm_arm_away(self, code: str | None = None) -> None:
        """Arm the area in away mode."""
        await self._async_set_target(SecurityState.AWAY_ARM)

    async def async_alarm_arm_home(self, code: str | None = None) -> None:
        """Arm the area in stay mode."""
        await self._async_set_target(SecurityState.STAY_ARM)

    async def async_alarm_arm_night(self, code: str | None = None) -> None:
        """Arm the area in night mode."""
        await self._async_set_target(SecurityState.NIGHT_ARM)

    async def async_alarm_disarm(self, code: str | None = None) -> None:
        """Disarm the area."""
        await self._async_set_target(SecurityState.DISARMED)

    async def _async_set_target(self, target: SecurityState) -> None:
        area = self.accessory
        if area is None:
            return
        await self._hub.async_command(
            f"set area {area.area} to {target.value}",
            lambda: area.async_set_target_state(target),
        )
