"""Switches for Elk M1 outputs and tasks."""

from __future__ import annotations

import logging
from typing import Any

from elkm1_bridge_lib import Output, Task

from homeassistant.components.switch import SwitchEntity
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
    """Set up Elk M1 switches from a config entry."""
    data = hass.data[DOMAIN][entry.entry_id]
    hub: ElkM1BridgeHub = data[DATA_HUB]
    coordinator: ElkM1BridgeCoordinator = data[DATA_COORDINATOR]
    known_ids: set[str] = set()

    def _async_add_switches() -> None:
        snapshot = coordinator.data
        if snapshot is None:
            return
        entities: list[SwitchEntity] = []
        for accessory in snapshot.accessories.values():
            if accessory.uuid in known_ids:
                continue
            if isinstance(accessory, Output):
                entities.append(ElkM1OutputSwitch(coordinator, hub, entry, accessory))
            elif isinstance(accessory, Task):
                entities.append(ElkM1TaskSwitch(coordinator, hub, entry, accessory))
            else:
                continue
            known_ids.add(accessory.uuid)
        if entities:
            _LOGGER.debug("Adding %s output and task entities", len(entities))
            async_add_entities(entities)

    _async_add_switches()
    entry.async_on_unload(coordinator.async_add_listener(_async_add_switches))


class ElkM1OutputSwitch(ElkM1AccessoryEntity[Output], SwitchEntity):
    """Representation of an Elk M1 output."""

    _attr_name = None

    @property
    def is_on(self) -> bool | None:
        """Return if the output is on."""
        output = self.accessory
        return None if output is None else output.is_on

    async def async_turn_on(self, **kwargs: Any) -> None:
        """Turn the output on (latched)."""
        await self._async_set_on(True)

    async def async_turn_off(self, **kwargs: Any) -> None:
        """Turn the output off."""
        await self._async_set_on(False)

    async def _async_set_on(self, value: bool) -> None:
        output = self.accessory
        if output is None:
            return
        await self._hub.async_command(
            f"switch output {output.output} {'on' if value else 'off'}",
            lambda: output.async_set_on(value),
        )


class ElkM1TaskSwitch(ElkM1AccessoryEntity[Task], SwitchEntity):
    """Momentary switch that activates an Elk M1 task.

    The switch shows on for a moment after activation and then reverts;
    turning it off does nothing.
    """

    _attr_name = None

    @property
    def is_on(self) -> bool | None:
        """Return if the task was just activated."""
        task = self.accessory
        return None if task is None else task.is_on

    async def async_turn_on(self, **kwargs: Any) -> None:
        """Activate the task."""
        task = self.accessory
        if task is None:
            return
        await self._hub.async_command(
            f"activate task {task.task}", lambda: task.async_set_on(True)
        )

    async def async_turn_off(self, **kwargs: Any) -> None:
        """Tasks cannot be deactivated."""
