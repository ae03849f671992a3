import json
import logging
import os

log = logging.getLogger(__name__)

# --- Defaults (BCM numbering) ---
DIO_PIN = 17
CLK_PIN = 27
STB_PIN = 22
PIN_MODE = "BCM"
INTENSITY = 7
EDGE_DELAY = 0.0
POLL_INTERVAL = 0.1

CONFIG_FILE = "tm1638board.json"

DEFAULTS = {
    "dio": DIO_PIN,
    "clk": CLK_PIN,
    "stb": STB_PIN,
    "pin_mode": PIN_MODE,
    "intensity": INTENSITY,
    "edge_delay": EDGE_DELAY,
    "poll_interval": POLL_INTERVAL,
}


def load_config(path=CONFIG_FILE):
    """Read board settings from a JSON file, filling gaps with DEFAULTS.

    A missing file gives the defaults. A file that is not a JSON object or
    that names unknown settings raises ValueError.
    """
    config = dict(DEFAULTS)
    if not os.path.exists(path):
        log.debug("%s not found, using defaults", path)
        return config
    with open(path, 'r') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path}: invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")
    unknown = sorted(set(data) - set(DEFAULTS))
    if unknown:
        raise ValueError(f"{path}: unknown settings {', '.join(unknown)}")
    config.update(data)
    return config
