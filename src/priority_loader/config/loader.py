from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional

from priority_loader.config.models import (
    AppConfig,
    ConfigLoadRequest,
)

logger = logging.getLogger(__name__)

# Leaves an environment variable may replace; pydantic coerces the raw string on validation.
_OVERRIDABLE_LEAF_TYPES = (str, int, float, bool)


def _merge_into(target: MutableMapping[str, Any], layer: Mapping[str, Any]) -> None:
    for key, value in layer.items():
        current = target.get(key)
        if isinstance(value, Mapping) and isinstance(current, MutableMapping):
            _merge_into(current, value)
        else:
            target[key] = value


def _read_yaml_layer(path: Path) -> Dict[str, Any]:
    try:
        import yaml  # type: ignore[import-not-found]
    except ModuleNotFoundError as e:  # pragma: no cover
        raise ModuleNotFoundError(
            "Missing dependency: PyYAML is required to load the YAML config file. Install 'PyYAML'."
        ) from e

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Top-level YAML must be a mapping, got: {type(data).__name__}")
    return data


def _seed_environment(dotenv_path: Optional[str]) -> None:
    if dotenv_path is None:
        return
    try:
        from dotenv import load_dotenv  # type: ignore[import-not-found]
    except ModuleNotFoundError as e:  # pragma: no cover
        raise ModuleNotFoundError(
            "Missing dependency: python-dotenv is required to load .env. Install 'python-dotenv'."
        ) from e

    path = Path(dotenv_path)
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _override_target(config: MutableMapping[str, Any], name: str, prefix: str) -> tuple[MutableMapping[str, Any], str]:
    """Resolve `PREFIX__SECTION__KEY` to the mapping holding `key`."""
    segments = [part.lower() for part in name[len(prefix) :].split("__") if part]
    if not segments:
        raise ValueError(f"Invalid environment variable override name: {name}")

    dotted = ".".join(segments)
    section: MutableMapping[str, Any] = config
    for segment in segments[:-1]:
        child = section.get(segment)
        if child is None and segment not in section:
            raise KeyError(f"Unknown configuration key path: {dotted}")
        if not isinstance(child, MutableMapping):
            raise TypeError(f"Configuration key path does not point to a mapping: {dotted}")
        section = child

    leaf = segments[-1]
    if leaf not in section:
        raise KeyError(f"Unknown configuration key path: {dotted}")
    existing = section[leaf]
    if existing is not None and not isinstance(existing, _OVERRIDABLE_LEAF_TYPES):
        raise TypeError(f"Environment variable cannot replace configuration section: {dotted}")
    return section, leaf


def _apply_env_overrides(config: MutableMapping[str, Any], env_prefix: str) -> None:
    for name in sorted(os.environ):
        if not name.startswith(env_prefix):
            continue
        section, leaf = _override_target(config, name, env_prefix)
        section[leaf] = os.environ[name]
        logger.debug("Config override applied from environment. name=%s", name)


class YamlConfigLoader:
    async def load(self, request: ConfigLoadRequest = ConfigLoadRequest()) -> AppConfig:
        # JSON mode turns enums and datetimes into strings so every leaf is overridable.
        config: Dict[str, Any] = AppConfig().model_dump(mode="json")
        _merge_into(config, _read_yaml_layer(Path(request.yaml_path)))
        _seed_environment(request.dotenv_path)
        _apply_env_overrides(config, request.env_prefix)
        return AppConfig.model_validate(config)
