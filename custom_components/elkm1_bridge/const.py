"""Constants for elkm1_bridge."""

DOMAIN = "elkm1_bridge"
PANEL_MODEL = "M1"

DATA_HUB = "hub"
DATA_COORDINATOR = "coordinator"

CONF_SECURE = "secure"
CONF_AREA = "area"
CONF_KEYPAD_CODE = "keypad_code"

DEFAULT_PORT = 2101
DEFAULT_AREA = 1

STORAGE_KEY = f"{DOMAIN}.accessories"
STORAGE_VERSION = 1
STORAGE_SAVE_DELAY = 10
