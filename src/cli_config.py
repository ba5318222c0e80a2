"""Runtime settings for a build run.

Merges CLI arguments, an optional YAML config file and the environment with
precedence CLI > config file > environment > defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from build_commands import BuildFlags, split_features
from constants import Constants, DependencySources

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildSettings:
    """Everything a build run needs besides the environment snapshot."""

    cargo: str
    manifest_path: str
    lockfile_path: str
    source: str
    flags: BuildFlags


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load settings from a YAML file.

    Keys may sit at the top level or under a ``build_deps:`` section. A
    missing or malformed file is reported and treated as empty.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    import yaml

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", config_path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a mapping", config_path)
        return {}
    section = data.get(Constants.CONFIG_SECTION, data)
    return section if isinstance(section, dict) else {}


def _pick(cli_value: Any, config: Mapping[str, Any], key: str, default: Any) -> Any:
    if cli_value is not None:
        return cli_value
    value = config.get(key)
    return default if value is None else value


_TRUE_STRINGS = ("true", "yes", "on", "1")
_FALSE_STRINGS = ("false", "no", "off", "0")


def _as_bool(value: Any, key: str, default: bool = False) -> bool:
    """Coerce a CLI or config value to bool; unrecognized values fall back to ``default``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    logger.warning("Ignoring non-boolean value %r for '%s' in config", value, key)
    return default


def _pick_bool(args: Any, attr: str, config: Mapping[str, Any], key: str) -> bool:
    return _as_bool(_pick(getattr(args, attr, None), config, key, False), key)


def resolve_settings(args: Any, config: Mapping[str, Any], env: Mapping[str, str]) -> BuildSettings:
    """Build the effective settings for this run."""
    cargo = config.get("cargo") or env.get(Constants.ENV_CARGO) or Constants.CARGO_BINARY

    manifest_path = _pick(getattr(args, "MANIFEST_PATH", None), config, "manifest_path",
                          Constants.MANIFEST_FILE)
    default_lock = os.path.join(os.path.dirname(manifest_path), Constants.LOCK_FILE)
    lockfile_path = _pick(getattr(args, "LOCKFILE_PATH", None), config, "lockfile_path", default_lock)

    source = str(_pick(getattr(args, "SOURCE", None), config, "source",
                       DependencySources.MANIFEST.value)).lower()
    if source not in Constants.SUPPORTED_SOURCES:
        logger.warning("Unknown dependency source '%s' in config, using manifest", source)
        source = DependencySources.MANIFEST.value

    flags = BuildFlags(
        release=_pick_bool(args, "RELEASE", config, "release"),
        target=_pick(getattr(args, "TARGET", None), config, "target", None) or None,
        features=split_features(_pick(getattr(args, "FEATURES", None), config, "features", [])),
        all_features=_pick_bool(args, "ALL_FEATURES", config, "all_features"),
        nightly=_pick_bool(args, "NIGHTLY", config, "nightly"),
        skip_update=_pick_bool(args, "SKIP_UPDATE", config, "skip_update"),
    )
    return BuildSettings(
        cargo=str(cargo),
        manifest_path=str(manifest_path),
        lockfile_path=str(lockfile_path),
        source=source,
        flags=flags,
    )
