# passmeter/config.py
"""
Simple settings persistence for PassMeter.
Settings saved as JSON in %APPDATA%/PassMeter/config.json (Windows) or ~/.passmeter/config.json (fallback).
PASSMETER_HOME overrides the directory.
"""

import os
import json
import logging
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "clipboard_clear_seconds": 20,
    "default_length": 26,
    "mask_char": "•",
    "log_level": "WARNING",
}

LOG_FORMAT = "%(levelname)s: %(message)s"


def _appdata_dir() -> str:
    override = os.getenv("PASSMETER_HOME")
    appdata = os.getenv("APPDATA")
    if override:
        d = override
    elif appdata:
        d = os.path.join(appdata, "PassMeter")
    else:
        d = os.path.join(os.path.expanduser("~"), ".passmeter")
    os.makedirs(d, exist_ok=True)
    return d


def config_path() -> str:
    return os.path.join(_appdata_dir(), "config.json")


def load_config() -> Dict[str, Any]:
    p = config_path()
    if not os.path.exists(p):
        return DEFAULTS.copy()
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("ignoring unreadable config %s: %s", p, e)
        return DEFAULTS.copy()
    # merge defaults
    out = DEFAULTS.copy()
    if isinstance(data, dict):
        out.update(data)
    return out


def save_config(cfg: Dict[str, Any]) -> None:
    p = config_path()
    with open(p, "w", encoding="utf-8") as f:
        json.dump(cfg, f, ensure_ascii=False, indent=2)


def configure_logging(level: Optional[str] = None) -> None:
    level = (level or DEFAULTS["log_level"]).upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format=LOG_FORMAT)
