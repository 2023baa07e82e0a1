from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Tuple

__all__ = [
    "ItemId",
    "Item",
    "QueueState",
]


# --------- Primitive / aliases ---------
ItemId = int


@dataclass(frozen=True, slots=True)
class Item:
    """Opaque queue token identified only by its id."""
    id: ItemId


@dataclass(frozen=True, slots=True)
class QueueState:
    """Point-in-time view of a queue: cursors plus ids oldest -> newest."""
    capacity: int
    head: int
    tail: int
    count: int
    ids: Tuple[ItemId, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    @property
    def is_full(self) -> bool:
        return self.count == self.capacity

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["ids"] = list(self.ids)
        return d
