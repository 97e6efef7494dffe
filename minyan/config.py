# minyan/config.py
"""
Load YAML config and env overrides.

Config precedence (low → high):
  1) Defaults in code
  2) YAML file: ~/.minyan.yml or ~/.minyan.yaml
  3) Environment variables: MINYAN_TZ, MINYAN_EVENTS, MINYAN_YOMTOV, MINYAN_LOG_LEVEL

Example ~/.minyan.yml:
  timezone: America/New_York
  events_file: /home/me/minyan-events.yml
  yomtov_file: /home/me/yomtov.yml
  calendar_id: main
  yomtov:
    window_days: 10
    wide_window_days: 30
"""
from __future__ import annotations
import os
from pathlib import Path
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

import yaml

from .log import get_logger

log = get_logger(__name__)

DEFAULTS: Dict[str, Any] = {
    "timezone": "America/New_York",
    "events_file": None,
    "yomtov_file": None,
    "calendar_id": None,
    "log_level": "WARNING",
    "upcoming_hours": 25,
    "elapsed_grace_minutes": 5,   # events this far in the past still count as upcoming
    "yomtov": {"window_days": 10, "wide_window_days": 30},
}

ENV_OVERRIDES = {
    "MINYAN_TZ": "timezone",
    "MINYAN_EVENTS": "events_file",
    "MINYAN_YOMTOV": "yomtov_file",
    "MINYAN_LOG_LEVEL": "log_level",
}

def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        log.warning("ignoring unreadable config %s: %s", path, e)
        return {}
    if data is not None and not isinstance(data, dict):
        log.warning("ignoring config %s: top level is not a mapping", path)
        return {}
    return data or {}

def load(home: Optional[Path] = None) -> Dict[str, Any]:
    cfg = DEFAULTS.copy()
    cfg["yomtov"] = dict(DEFAULTS["yomtov"])
    home = home or Path.home()
    for fname in (".minyan.yml", ".minyan.yaml"):
        data = _read_yaml(home / fname)
        if data:
            # deep merge for 'yomtov' subdict
            cfg.update({k: v for k, v in data.items() if k != "yomtov"})
            if "yomtov" in data:
                cfg["yomtov"] = {**cfg["yomtov"], **(data["yomtov"] or {})}
            break

    # env overrides
    for env, key in ENV_OVERRIDES.items():
        if os.getenv(env):
            cfg[key] = os.getenv(env).strip()

    return cfg

def zone(cfg: Dict[str, Any]) -> ZoneInfo:
    return ZoneInfo(cfg.get("timezone") or DEFAULTS["timezone"])
