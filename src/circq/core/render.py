# src/circq/core/render.py
from __future__ import annotations

from circq.core.contracts import QueueState

RULE = "-" * 40


def render(state: QueueState) -> str:
    """Text view of a queue: header, ids oldest -> newest, cursor indices."""
    lines = [f"--- QUEUE STATE (count: {state.count}) ---"]
    if state.is_empty:
        lines.append("| Queue EMPTY |")
        lines.append(RULE)
        return "\n".join(lines)

    cells = "".join(f" [ID: {i:02d}] " for i in state.ids)
    lines.append(f"|{cells}|")
    lines.append(f"Indices: head={state.head}, tail={state.tail}")
    lines.append(RULE)
    return "\n".join(lines)
