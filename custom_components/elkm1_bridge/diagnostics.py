"""Diagnostics support for the Elk M1 bridge."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields, is_dataclass
import enum
from typing import Any

from homeassistant.components.diagnostics import async_redact_data
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import CONF_PASSWORD, CONF_USERNAME
from homeassistant.core import HomeAssistant

from .const import CONF_KEYPAD_CODE, DATA_COORDINATOR, DATA_HUB, DOMAIN
from .coordinator import ElkM1BridgeCoordinator
from .hub import ElkM1BridgeHub

TO_REDACT = {CONF_PASSWORD, CONF_USERNAME, CONF_KEYPAD_CODE}


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    data = hass.data.get(DOMAIN, {}).get(entry.entry_id)
    hub: ElkM1BridgeHub | None = data.get(DATA_HUB) if data else None
    coordinator: ElkM1BridgeCoordinator | None = (
        data.get(DATA_COORDINATOR) if data else None
    )
    snapshot = coordinator.data if coordinator is not None else None
    records = hub.bridge.registry.as_storage() if hub is not None else []

    return {
        "entry_id": entry.entry_id,
        "entry_data": async_redact_data(dict(entry.data), TO_REDACT),
        "session_state": _to_jsonable(snapshot.state) if snapshot else None,
        "retry_delay": snapshot.retry_delay if snapshot else None,
        "records": async_redact_data(records, TO_REDACT),
        "accessories": [
            {
                "identity": accessory.identity,
                "name": accessory.name,
                "model": accessory.model,
                "characteristics": _to_jsonable(accessory.characteristics),
            }
            for accessory in (snapshot.accessories.values() if snapshot else ())
        ],
    }


def _to_jsonable(value: Any) -> Any:
    """Normalize state values to JSON-safe types."""
    if value is None:
        return None
    if is_dataclass(value):
        return {
            field.name: _to_jsonable(getattr(value, field.name))
            for field in fields(value)
        }
    if isinstance(value, Mapping):
        return {_to_jsonable(key): _to_jsonable(val) for key, val in value.items()}
    if isinstance(value, list | tuple):
        return [_to_jsonable(item) for item in value]
    if isinstance(value, set | frozenset):
        return sorted([_to_jsonable(item) for item in value], key=str)
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (str, int, float, bool)):
        return value
    return str(value)
