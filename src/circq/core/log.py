from __future__ import annotations

import json
import logging
import os
import sys
from typing import Optional, TextIO

from dotenv import load_dotenv

_configured = False

# queue fields passed via `extra=` by the core; copied into JSON records
QUEUE_FIELDS = ("queue", "item_id", "head", "tail", "count")


class JsonHandler(logging.StreamHandler):
    """One JSON object per record, with queue cursor fields when present."""
    def __init__(self, stream: Optional[TextIO] = None):
        super().__init__(stream=stream or sys.stdout)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            obj = {
                "ts": record.created,
                "lvl": record.levelname,
                "name": record.name,
                "msg": record.getMessage(),
            }
            for k in QUEUE_FIELDS:
                if hasattr(record, k):
                    obj[k] = getattr(record, k)
            self.stream.write(json.dumps(obj, ensure_ascii=False) + "\n")
            self.flush()
        except Exception:  # pragma: no cover
            self.handleError(record)


def _resolve_level(level: str) -> int:
    py_level = getattr(logging, level.upper(), None)
    return py_level if isinstance(py_level, int) else logging.INFO


def setup(level: Optional[str] = None, json_mode: Optional[bool] = None, *,
          stream: Optional[TextIO] = None, default_level: str = "INFO",
          force: bool = False) -> None:
    """Configure root logger.
    - level: explicit level, else LOG_LEVEL env (.env honoured), else default_level
    - stream: where records go (stdout by default; the menu driver passes stderr
      so log lines never mix with the transcript)
    - If already configured, do nothing unless force=True
    """
    global _configured
    if _configured and not force:
        return

    load_dotenv()

    py_level = _resolve_level(level or os.getenv("LOG_LEVEL") or default_level)
    json_flag = json_mode if json_mode is not None else (os.getenv("LOG_JSON", "0") == "1")
    out = stream or sys.stdout

    root = logging.getLogger()
    # Reset handlers to avoid duplicate logs (pytest re-runs etc.)
    root.handlers.clear()
    root.setLevel(py_level)

    if json_flag:
        root.addHandler(JsonHandler(out))
    else:
        handler = logging.StreamHandler(stream=out)
        handler.setFormatter(logging.Formatter(fmt="[%(asctime)s] %(levelname)s %(name)s | %(message)s"))
        root.addHandler(handler)

    _configured = True


def get(name: str) -> logging.Logger:
    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Adjust root level at runtime; unknown names fall back to INFO."""
    logging.getLogger().setLevel(_resolve_level(level))
