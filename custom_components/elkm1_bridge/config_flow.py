"""Config flow for the Elk M1 bridge integration."""

from __future__ import annotations

import logging
from typing import Any

from elkm1_bridge_lib import (
    BridgeConfig,
    ElkM1AuthError,
    ElkM1ConfigError,
    ElkM1ConnectionError,
    ElkM1DisconnectedError,
    ElkM1Error,
    ElkM1TimeoutError,
    parse_config,
)
from elkm1_bridge_lib.elkm1_link import ElkM1Link
import voluptuous as vol

from homeassistant.config_entries import ConfigFlow, ConfigFlowResult
from homeassistant.const import CONF_HOST, CONF_PASSWORD, CONF_PORT, CONF_USERNAME
from homeassistant.helpers import config_validation as cv
from homeassistant.helpers.selector import selector

from .const import (
    CONF_AREA,
    CONF_KEYPAD_CODE,
    CONF_SECURE,
    DEFAULT_AREA,
    DEFAULT_PORT,
    DOMAIN,
)

_LOGGER = logging.getLogger(__name__)

STEP_USER_DATA_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_HOST): cv.string,
        vol.Optional(CONF_PORT, default=DEFAULT_PORT): cv.port,
        vol.Optional(CONF_SECURE, default=False): cv.boolean,
        vol.Optional(CONF_USERNAME, default=""): cv.string,
        vol.Optional(CONF_PASSWORD, default=""): selector({"text": {"type": "password"}}),
        vol.Optional(CONF_AREA, default=DEFAULT_AREA): cv.positive_int,
        vol.Required(CONF_KEYPAD_CODE): selector({"text": {"type": "password"}}),
    }
)


class ElkM1BridgeConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle a config flow for the Elk M1 bridge."""

    VERSION = 1
    MINOR_VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Handle the initial step."""
        errors: dict[str, str] = {}
        if user_input is not None:
            host = user_input[CONF_HOST]
            port = user_input[CONF_PORT]
            self._async_abort_entries_match({CONF_HOST: host, CONF_PORT: port})
            if not str(user_input[CONF_KEYPAD_CODE]).isdigit():
                errors[CONF_KEYPAD_CODE] = "invalid_code"
            else:
                try:
                    config = parse_config(user_input)
                except ElkM1ConfigError:
                    errors["base"] = "invalid_host"
                else:
                    errors.update(await _async_try_connect(config))
            if not errors:
                return self.async_create_entry(title=host, data=user_input)

        return self.async_show_form(
            step_id="user",
            data_schema=STEP_USER_DATA_SCHEMA,
            errors=errors,
        )

    async def async_step_import(
        self, import_data: dict[str, Any]
    ) -> ConfigFlowResult:
        """Create an entry from YAML, carrying zones, outputs and doors as well."""
        try:
            config = parse_config(import_data)
        except ElkM1ConfigError as err:
            _LOGGER.error("Invalid %s YAML configuration: %s", DOMAIN, err)
            return self.async_abort(reason="invalid_config")
        self._async_abort_entries_match({CONF_HOST: config.host})
        return self.async_create_entry(title=config.host, data=dict(import_data))


async def _async_try_connect(config: BridgeConfig) -> dict[str, str]:
    """Log in once to check the address and credentials."""
    link = ElkM1Link(config)
    try:
        await link.connect()
    except ElkM1AuthError:
        return {"base": "invalid_auth"}
    except (
        ElkM1ConnectionError,
        ElkM1TimeoutError,
        ElkM1DisconnectedError,
        OSError,
    ):
        return {"base": "cannot_connect"}
    except ElkM1Error:
        _LOGGER.exception("Unexpected error connecting to %s", config.url)
        return {"base": "unknown"}
    finally:
        await link.disconnect()
    return {}
