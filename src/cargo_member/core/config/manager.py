"""
cargo-member configuration loading (YAML + environment overrides).
"""
from __future__ import annotations

import copy
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

import jsonschema
import yaml

from cargo_member.core.exceptions import ConfigError
from cargo_member.data import read_yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "CARGO_MEMBER_"
CONFIG_FILE_ENV = "CARGO_MEMBER_CONFIG"
LOG_LEVEL_ENV = "CARGO_MEMBER_LOG"

# Variables sharing the prefix that are not section overrides.
_RESERVED_ENV = {CONFIG_FILE_ENV, LOG_LEVEL_ENV}


def deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Lists in ``override`` replace lists in ``base`` entirely.

    Example:
        >>> deep_merge({"a": 1, "b": {"c": 2}}, {"b": {"d": 3}})
        {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        if isinstance(result.get(key), dict) and isinstance(value, Mapping):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class ConfigManager:
    """Load, merge, and validate cargo-member configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: CARGO_MEMBER_<section>__<key>
    2. User config file: the YAML file named by $CARGO_MEMBER_CONFIG
    3. Bundled defaults: cargo_member.data/config/defaults.yaml
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self.environ: Mapping[str, str] = os.environ if environ is None else environ

    @property
    def user_config_path(self) -> Optional[Path]:
        raw = self.environ.get(CONFIG_FILE_ENV)
        return Path(raw).expanduser() if raw else None

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as err:
            raise ConfigError(f"failed to read {path}") from err
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as err:
            raise ConfigError(f"failed to parse the YAML file at {path}") from err
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping at the top level")
        return data

    # ========== Environment overrides ==========

    def _coerce_type(self, value: str) -> Any:
        s = value.strip()
        low = s.lower()
        if low in {"true", "false"}:
            return low == "true"
        if low in {"null", "none"}:
            return None
        if re.fullmatch(r"[-+]?\d+", s):
            return int(s)
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return s
        return s

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__")
        if any(seg == "" for seg in segs):
            raise ConfigError(f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'")
        # Normalize to lowercase so env overrides hit the canonical keys.
        return [seg.lower() for seg in segs]

    def iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(self.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key in _RESERVED_ENV:
                continue
            raw = key[len(ENV_PREFIX):]
            if not raw:
                raise ConfigError(f"Malformed {ENV_PREFIX}* key")
            yield self._parse_env_key(raw), self._coerce_type(self.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if nxt is None:
                nxt = cur[part] = {}
            elif not isinstance(nxt, dict):
                raise ConfigError(f"cannot override `{'.'.join(path)}`: `{part}` is not a section")
            cur = nxt
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, value in self.iter_env_overrides():
            logger.debug("config override %s = %r", ".".join(path), value)
            self._set_nested(cfg, path, value)
        level = self.environ.get(LOG_LEVEL_ENV)
        if level:
            self._set_nested(cfg, ["logging", "level"], level.strip())

    # ========== Loading ==========

    def validate(self, cfg: Dict[str, Any]) -> None:
        schema = read_yaml("schemas", "config.schema.yaml")
        validator = jsonschema.Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(cfg), key=lambda e: [str(p) for p in e.path])
        if errors:
            first = errors[0]
            where = ".".join(str(p) for p in first.path) or "<root>"
            raise ConfigError(
                f"invalid configuration at `{where}`: {first.message}",
                context={"errors": [e.message for e in errors]},
            )

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load the merged configuration.

        The returned dict is a fresh copy; callers may mutate it.
        """
        cfg = copy.deepcopy(read_yaml("config", "defaults.yaml"))

        user_path = self.user_config_path
        if user_path is not None:
            logger.debug("loading user config from %s", user_path)
            cfg = copy.deepcopy(deep_merge(cfg, self.load_yaml(user_path)))

        self.apply_env_overrides(cfg)

        if validate:
            self.validate(cfg)
        return cfg


__all__ = [
    "ConfigManager",
    "deep_merge",
    "ENV_PREFIX",
    "CONFIG_FILE_ENV",
    "LOG_LEVEL_ENV",
]
