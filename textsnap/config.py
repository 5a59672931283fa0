import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import pytesseract

logger = logging.getLogger(__name__)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
CONFIG_DIR = os.path.join(PROJECT_ROOT, "config")
DEPENDENCIES_PATH = os.path.join(CONFIG_DIR, "dependencies.json")
SETTINGS_PATH = os.path.join(CONFIG_DIR, "settings.json")


def _resolve_path(base: str, relative: str) -> str:
    return os.path.abspath(os.path.join(base, relative))


def configure_dependencies(path: str = DEPENDENCIES_PATH) -> Optional[str]:
    """Point pytesseract at the Tesseract binary named in config/dependencies.json.

    Returns the configured executable path, or None when the system default is kept.
    """
    if not os.path.exists(path):
        logger.debug("dependencies.json not found at %s; using tesseract from PATH", path)
        return None

    try:
        with open(path, "r", encoding="utf-8") as deps_file:
            deps = json.load(deps_file) or {}
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not load dependencies from %s: %s", path, exc)
        return None

    tess_rel = deps.get("tesseract_path")
    if not tess_rel:
        return None
    tess_abs = _resolve_path(PROJECT_ROOT, tess_rel)
    if not os.path.exists(tess_abs):
        logger.warning("Tesseract path from config does not exist: %s", tess_abs)
        return None
    pytesseract.pytesseract.tesseract_cmd = tess_abs
    return tess_abs


@dataclass(frozen=True)
class Settings:
    language: str = "en-US"
    try_hard: bool = True
    read_timeout: Optional[float] = 5.0
    cluster_threshold: float = 5
    default_pattern: str = "None"
    camera_index: int = 0
    pattern_overrides: Dict[str, str] = field(default_factory=dict)


_SETTINGS_TYPES = {
    "language": (str,),
    "try_hard": (bool,),
    "read_timeout": (int, float, type(None)),
    "cluster_threshold": (int, float),
    "default_pattern": (str, int),
    "camera_index": (int,),
    "pattern_overrides": (dict,),
}


def load_settings(path: str = SETTINGS_PATH) -> Settings:
    """Load runtime settings from JSON; a missing file yields the defaults.

    Doxygen:
    - @param path: Path to settings.json.
    - @return: Settings with unknown keys ignored.
    - @throws ValueError: If the file is not valid JSON or a value has the wrong type.
    """
    if not os.path.exists(path):
        return Settings()
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw: Any = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Settings file is not valid JSON: {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"Settings file must contain a JSON object: {path}")

    values: Dict[str, Any] = {}
    for key, types in _SETTINGS_TYPES.items():
        if key not in raw:
            continue
        value = raw[key]
        # bool is an int subclass; only try_hard may be a bool
        if isinstance(value, bool) and bool not in types:
            raise ValueError(f"Setting '{key}' has invalid value {value!r}")
        if not isinstance(value, types):
            raise ValueError(f"Setting '{key}' has invalid value {value!r}")
        values[key] = value

    timeout = values.get("read_timeout", Settings.read_timeout)
    if timeout is not None and timeout <= 0:
        values["read_timeout"] = None
    overrides = values.get("pattern_overrides", {})
    if not all(isinstance(k, str) and isinstance(v, str) for k, v in overrides.items()):
        raise ValueError("Setting 'pattern_overrides' must map pattern names to regex strings")
    if "cluster_threshold" in values and values["cluster_threshold"] < 0:
        raise ValueError("Setting 'cluster_threshold' must be non-negative")
    return Settings(**values)
