import logging
import os
from functools import lru_cache
from typing import Any, Dict

import yaml

from .paths import settings_yaml_path

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: Dict[str, Any] = {
    "default_profile": "EUR",
    "strategy": "guillotine",
    "unit_policy": "nominal",
}


@lru_cache(maxsize=None)
def load_settings() -> Dict[str, Any]:
    """Load engine settings from ``settings.yaml`` over the defaults."""
    path = settings_yaml_path()
    data: Dict[str, Any] = {}
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in settings file {path}: {e}") from e
        if not isinstance(loaded, dict):
            raise ValueError(f"Settings file {path} must contain a mapping")
        data = loaded

    settings = DEFAULT_SETTINGS.copy()
    for key in DEFAULT_SETTINGS:
        value = data.get(key)
        if value is None:
            continue
        settings[key] = str(value).strip()
    unknown = sorted(set(data) - set(DEFAULT_SETTINGS))
    if unknown:
        logger.warning("Ignoring unknown settings: %s", ", ".join(unknown))
    return settings
