from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional, Tuple

LabelKey = Tuple[Tuple[str, str], ...]  # sorted tuple of (k,v)
MetricKey = Tuple[str, str, LabelKey]   # (kind, name, labels)

COUNTER = "counter"
GAUGE = "gauge"


def _labels_key(labels: Dict[str, Any] | None) -> LabelKey:
    if not labels:
        return tuple()
    return tuple(sorted((str(k), str(v)) for k, v in labels.items()))


class _Registry:
    """Counters and gauges of the queue, keyed by (kind, name, labels)."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._values: Dict[MetricKey, float] = {}

    def add(self, kind: str, name: str, labels: Dict[str, Any] | None, n: float) -> None:
        key = (kind, name, _labels_key(labels))
        with self._lock:
            self._values[key] = self._values.get(key, 0.0) + n

    def put(self, kind: str, name: str, labels: Dict[str, Any] | None, v: float) -> None:
        with self._lock:
            self._values[(kind, name, _labels_key(labels))] = float(v)

    def get(self, kind: str, name: str, labels: Dict[str, Any] | None) -> float:
        with self._lock:
            return self._values.get((kind, name, _labels_key(labels)), 0.0)

    def items(self) -> List[Tuple[MetricKey, float]]:
        with self._lock:
            return sorted(self._values.items())

    def clear(self) -> None:
        with self._lock:
            self._values.clear()


_REG = _Registry()


def inc_counter(name: str, n: float = 1.0, **labels: Any) -> None:
    _REG.add(COUNTER, name, labels, n)


def set_gauge(name: str, v: float, **labels: Any) -> None:
    _REG.put(GAUGE, name, labels, v)


def counter_value(name: str, **labels: Any) -> float:
    return _REG.get(COUNTER, name, labels)


def gauge_value(name: str, **labels: Any) -> float:
    return _REG.get(GAUGE, name, labels)


def reset() -> None:
    """Drop every registered metric (tests)."""
    _REG.clear()


def snapshot_all() -> dict:
    out = {"counters": [], "gauges": []}
    for (kind, name, labels), v in _REG.items():
        out[kind + "s"].append({"name": name, "labels": dict(labels), "value": v})
    return out


def force_emit(logger: Optional[logging.Logger] = None, json_mode: bool = False) -> None:
    """Log every metric once at INFO, e.g. when the simulator exits."""
    log = logger or logging.getLogger("metrics")
    if not log.isEnabledFor(logging.INFO):
        return
    for (kind, name, labels), v in _REG.items():
        if json_mode:
            log.info({"type": kind, "name": name, "labels": dict(labels), "value": v})
        else:
            tag = "ctr" if kind == COUNTER else "gauge"
            log.info(f"[{tag}] {name} {dict(labels)} value={v:.0f}")
