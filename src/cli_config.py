"""Configuration file loading and CLI override precedence.

Precedence, highest first:
1) explicit CLI flags (--catalog, --targets, --issues, --error-on-warnings)
2) --set KEY=VALUE dot-path overrides
3) the --config file (YAML or JSON, optional ``compatgate:`` section)
4) built-in defaults
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)

# Version strings such as 2024.10 must not be decoded as numbers.
_STRING_KEYS = ("targets", "catalog", "issues")


@dataclass
class Settings:
    """Effective runtime settings after all overrides are applied."""
    catalog: Optional[str] = None
    targets: List[str] = field(default_factory=lambda: [Constants.TARGET_LATEST])
    issues: Optional[str] = None
    error_on_warnings: bool = False
    request_timeout: int = Constants.REQUEST_TIMEOUT


def load_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    """Load configuration from a YAML or JSON file.

    Returns an empty dict when no path is given or the file is missing.
    Unparsable files are logged and ignored.
    """
    if not config_path:
        return {}
    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}
    try:
        with open(config_path, "r", encoding="utf-8") as fh:
            if config_path.lower().endswith(".json"):
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        logger.error("Failed to load config: %s", e)
        return {}
    if not isinstance(data, dict):
        return {}
    section = data.get(Constants.CONFIG_SECTION, data)
    return section if isinstance(section, dict) else {}


def coerce_value(text: str) -> Any:
    """Best-effort convert string to JSON/number/bool, else raw string."""
    s = str(text).strip()
    try:
        return json.loads(s)
    except ValueError:
        sl = s.lower()
        if sl == "true":
            return True
        if sl == "false":
            return False
        return s


def _apply_dot_path(dct: Dict[str, Any], dot_path: str, value: Any) -> None:
    parts = [p for p in dot_path.split(".") if p]
    if not parts:
        return
    cur = dct
    for key in parts[:-1]:
        if key not in cur or not isinstance(cur.get(key), dict):
            cur[key] = {}
        cur = cur[key]
    cur[parts[-1]] = value


def collect_overrides(pairs: Optional[Iterable[str]]) -> Dict[str, Any]:
    """Turn KEY=VALUE strings into a nested override dict."""
    overrides: Dict[str, Any] = {}
    for item in pairs or []:
        if not isinstance(item, str) or "=" not in item:
            logger.warning("Ignoring malformed --set value: %s", item)
            continue
        key, val = item.split("=", 1)
        key = key.strip()
        prefix = Constants.CONFIG_SECTION + "."
        if key.startswith(prefix):
            key = key[len(prefix):]
        raw = val.strip()
        if key in _STRING_KEYS and not raw.startswith("["):
            value: Any = raw
        else:
            value = coerce_value(raw)
        _apply_dot_path(overrides, key, value)
    return overrides


def deep_merge(dest: Dict[str, Any], src: Dict[str, Any]) -> None:
    """Deep-merge src into dest in-place."""
    for k, v in src.items():
        if isinstance(v, dict) and isinstance(dest.get(k), dict):
            deep_merge(dest[k], v)
        else:
            dest[k] = v


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return coerce_value(value) is True
    return bool(value)


def build_settings(args) -> Settings:
    """Resolve effective settings from parsed CLI args."""
    cfg = load_config_file(getattr(args, "CONFIG", None))
    deep_merge(cfg, collect_overrides(getattr(args, "CONFIG_SET", None)))

    settings = Settings()
    if cfg.get("catalog"):
        settings.catalog = str(cfg["catalog"])
    if cfg.get("targets"):
        settings.targets = _as_list(cfg["targets"])
    if cfg.get("issues"):
        settings.issues = str(cfg["issues"])
    if "error_on_warnings" in cfg:
        settings.error_on_warnings = _as_bool(cfg["error_on_warnings"])
    if cfg.get("request_timeout") is not None:
        try:
            settings.request_timeout = int(cfg["request_timeout"])
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid request_timeout: %s", cfg["request_timeout"])

    if getattr(args, "CATALOG", None):
        settings.catalog = args.CATALOG
    if getattr(args, "TARGETS", None):
        settings.targets = list(args.TARGETS)
    if getattr(args, "ISSUES", None):
        settings.issues = args.ISSUES
    if getattr(args, "ERROR_ON_WARNINGS", False):
        settings.error_on_warnings = True
    return settings


def apply_runtime_overrides(settings: Settings) -> None:
    """Push tunables that library code reads from Constants."""
    Constants.REQUEST_TIMEOUT = settings.request_timeout
