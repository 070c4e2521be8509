"""Hub wrapper for the Elk M1 bridge lifecycle."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
import logging
from typing import Any

from elkm1_bridge_lib import (
    AccessoryHandle,
    BridgeConfig,
    ElkM1AuthError,
    ElkM1Error,
    PanelBridge,
    PanelLink,
    SessionState,
)
from elkm1_bridge_lib.elkm1_link import ElkM1Link

from homeassistant.core import HomeAssistant
from homeassistant.exceptions import (
    ConfigEntryAuthFailed,
    ConfigEntryNotReady,
    HomeAssistantError,
)
from homeassistant.helpers.storage import Store

from .const import STORAGE_KEY, STORAGE_SAVE_DELAY, STORAGE_VERSION

_LOGGER = logging.getLogger(__name__)


class ElkM1BridgeHub:
    """Own one PanelBridge and persist its accessory records."""

    def __init__(
        self,
        hass: HomeAssistant,
        entry_id: str,
        config: BridgeConfig,
        *,
        link: PanelLink | None = None,
    ) -> None:
        """Initialize the hub wrapper."""
        self._hass = hass
        self._config = config
        self._link = link if link is not None else ElkM1Link(config)
        self._store: Store[dict[str, Any]] = Store(
            hass, STORAGE_VERSION, f"{STORAGE_KEY}.{entry_id}"
        )
        self._bridge = PanelBridge(self._link, config)
        self._unsubscribe: list[Callable[[], Any]] = []
        self._unavailable_logged = False

    @property
    def bridge(self) -> PanelBridge:
        """Return the underlying bridge."""
        return self._bridge

    @property
    def config(self) -> BridgeConfig:
        """Return the validated bridge configuration."""
        return self._config

    @property
    def is_ready(self) -> bool:
        """Return if the panel session is connected."""
        return self._bridge.state is SessionState.CONNECTED

    async def async_connect(self) -> None:
        """Restore cached accessories, connect and run discovery."""
        stored = await self._store.async_load()
        if stored:
            self._bridge.registry.restore(stored.get("accessories", []))
        self._unsubscribe = [
            self._bridge.registry.subscribe(self._handle_announce),
            self._bridge.session.subscribe(self._handle_session_state),
        ]
        await self._bridge.async_start()
        if self.is_ready:
            return
        error = self._bridge.session.last_error
        await self.async_disconnect()
        if isinstance(error, ElkM1AuthError):
            raise ConfigEntryAuthFailed(str(error)) from error
        raise ConfigEntryNotReady(
            f"Could not connect to the panel at {self._config.url}: {error}"
        ) from error

    async def async_disconnect(self) -> None:
        """Stop the bridge and flush accessory records to storage."""
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []
        await self._bridge.async_stop()
        await self._store.async_save(self._data_to_save())

    async def async_command(
        self, description: str, command: Callable[[], Awaitable[Any]]
    ) -> None:
        """Run an accessory command, surfacing panel failures to the caller."""
        if not self.is_ready:
            raise HomeAssistantError(f"Cannot {description}: panel is not connected.")
        try:
            await command()
        except ElkM1Error as err:
            _LOGGER.warning("Failed to %s: %s", description, err)
            raise HomeAssistantError(f"Failed to {description}: {err}") from err

    def _handle_announce(self, handle: AccessoryHandle) -> None:
        """Persist the registry whenever an accessory is (re)bound."""
        if handle.is_new:
            _LOGGER.debug("New accessory %s recorded", handle.record.identity)
        self._store.async_delay_save(self._data_to_save, STORAGE_SAVE_DELAY)

    def _handle_session_state(self, state: SessionState) -> None:
        """Log connection loss and recovery once per transition."""
        if state is SessionState.CONNECTED:
            if self._unavailable_logged:
                _LOGGER.info("Panel connection restored")
                self._unavailable_logged = False
            return
        if state is SessionState.RETRYING:
            self._log_unavailable()

    def _log_unavailable(self) -> None:
        """Log the panel as unavailable once."""
        if self._unavailable_logged:
            return
        _LOGGER.info("Panel connection lost")
        self._unavailable_logged = True

    def _data_to_save(self) -> dict[str, Any]:
        return {"accessories": self._bridge.registry.as_storage()}
