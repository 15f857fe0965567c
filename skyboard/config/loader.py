"""YAML config loader with environment overrides and runtime get/set."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import SecretStr

from skyboard.config.defaults import DEFAULT_KNOWN_CITIES, DEFAULT_OTHER_CITIES
from skyboard.config.schema import AppConfig, Environment

logger = logging.getLogger(__name__)

API_KEY_ENV = "WEATHERAPI_KEY"
ENVIRONMENT_ENVS = ("SKYBOARD_ENV", "NODE_ENV")


def load_config(
    path: str | Path | None = None, env: Mapping[str, str] | None = None
) -> AppConfig:
    """Load and validate config from a YAML file, then apply environment overrides.

    A missing path (or None) yields the built-in defaults. If no cities are
    specified in the YAML, injects the default city tables.
    """
    raw: dict[str, Any] = {}
    if path is not None:
        path = Path(path)
        if path.exists():
            with open(path) as f:
                raw = yaml.safe_load(f) or {}
        else:
            logger.info("Config file %s not found, using defaults", path)

    if not raw.get("other_cities"):
        raw["other_cities"] = [c.model_dump() for c in DEFAULT_OTHER_CITIES]
    if not raw.get("known_cities"):
        raw["known_cities"] = [c.model_dump() for c in DEFAULT_KNOWN_CITIES]

    _apply_env(raw, os.environ if env is None else env)
    return AppConfig(**raw)


def _apply_env(raw: dict[str, Any], env: Mapping[str, str]) -> None:
    api_key = env.get(API_KEY_ENV)
    if api_key:
        raw.setdefault("provider", {})["api_key"] = api_key

    for name in ENVIRONMENT_ENVS:
        value = env.get(name)
        if value:
            environment = (
                Environment.PRODUCTION
                if value.lower() == Environment.PRODUCTION
                else Environment.DEVELOPMENT
            )
            raw.setdefault("server", {})["environment"] = environment.value
            break


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'server.port'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: AppConfig, dotted_key: str, value: Any) -> AppConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new AppConfig instance.
    """
    data = config.model_dump()
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        if isinstance(target, list):
            target = target[int(part)]
        elif part in target:
            target = target[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    if not isinstance(target, dict) or parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    # Attempt type coercion for common cases
    old_value = target[parts[-1]]
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return AppConfig(**data)


def save_config_value(path: str | Path, config: AppConfig, dotted_key: str) -> None:
    """Write one value of config back into the YAML file at path.

    Only the named key is written, so environment overrides stay out of the
    file. A key inside a city list rewrites that whole list.
    """
    path = Path(path)
    raw: dict[str, Any] = {}
    if path.exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    parts = dotted_key.split(".")
    section = parts[0]
    dumped = config.model_dump(mode="json")
    if len(parts) == 1 or isinstance(dumped[section], list):
        raw[section] = dumped[section]
    else:
        source = dumped[section]
        target = raw.setdefault(section, {})
        for part in parts[1:-1]:
            source = source[part]
            target = target.setdefault(part, {})
        value = get_config_value(config, dotted_key)
        if isinstance(value, SecretStr):
            target[parts[-1]] = value.get_secret_value()
        else:
            target[parts[-1]] = source[parts[-1]]

    with open(path, "w") as f:
        yaml.safe_dump(raw, f, sort_keys=False)
