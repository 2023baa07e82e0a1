# src/circq/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml  # PyYAML

from circq.core.circular_queue import DEFAULT_CAPACITY


@dataclass(frozen=True)
class SimConfig:
    capacity: int = DEFAULT_CAPACITY
    name: str = "main"
    id_start: int = 1
    log_level: Optional[str] = None  # None -> LOG_LEVEL env
    log_json: Optional[bool] = None  # None -> LOG_JSON env

    def validate(self) -> "SimConfig":
        for field_name in ("capacity", "id_start"):
            v = getattr(self, field_name)
            if not isinstance(v, int) or isinstance(v, bool) or v < 1:
                raise ValueError(f"{field_name} must be a positive int, got {v!r}")
        return self


def _read_yaml(path: str | Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ValueError(f"cannot read config {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"config {path} must be a mapping, got {type(data).__name__}")
    return data


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    sec = data.get(key) or {}
    if not isinstance(sec, dict):
        raise ValueError(f"config section '{key}' must be a mapping")
    return sec


def _as_int(v: Any, what: str) -> int:
    """Accept a real int or a decimal string; floats and bools are errors, not truncated."""
    if isinstance(v, bool) or not isinstance(v, (int, str)):
        raise ValueError(f"{what} must be an int, got {v!r}")
    if isinstance(v, int):
        return v
    try:
        return int(v.strip())
    except ValueError as e:
        raise ValueError(f"{what} must be an int, got {v!r}") from e


def _as_bool(v: Any, what: str) -> bool:
    if not isinstance(v, bool):
        raise ValueError(f"{what} must be true or false, got {v!r}")
    return v


def load_config(path: str | Path | None = None, **overrides: Any) -> SimConfig:
    """
    Build a SimConfig. Precedence (low -> high):
    defaults, YAML file, CIRCQ_CAPACITY env, explicit non-None overrides.

    YAML layout:
        queue: {capacity: 5, name: main, id_start: 1}
        log:   {level: INFO, json: false}
    """
    cfg = SimConfig()

    if path is not None:
        data = _read_yaml(path)
        q = _section(data, "queue")
        lg = _section(data, "log")
        upd: Dict[str, Any] = {}
        if "capacity" in q:
            upd["capacity"] = _as_int(q["capacity"], "queue.capacity")
        if "id_start" in q:
            upd["id_start"] = _as_int(q["id_start"], "queue.id_start")
        if "name" in q:
            upd["name"] = str(q["name"])
        if "level" in lg:
            upd["log_level"] = str(lg["level"])
        if "json" in lg:
            upd["log_json"] = _as_bool(lg["json"], "log.json")
        cfg = replace(cfg, **upd)

    env_cap = os.getenv("CIRCQ_CAPACITY")
    if env_cap:
        cfg = replace(cfg, capacity=_as_int(env_cap, "CIRCQ_CAPACITY"))

    explicit = {k: v for k, v in overrides.items() if v is not None}
    if explicit:
        cfg = replace(cfg, **explicit)

    return cfg.validate()
