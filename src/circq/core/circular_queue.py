# src/circq/core/circular_queue.py
from __future__ import annotations

from typing import List, Optional

from circq.core import log
from circq.core.contracts import Item, ItemId, QueueState
from circq.core.errors import QueueEmpty, QueueFull
from circq.core.ids import IdGenerator, default_generator
from circq.core.metrics import inc_counter, set_gauge

DEFAULT_CAPACITY = 5


class CircularQueue:
    """
    Fixed-capacity FIFO over a preallocated list of slots.

    head : index of the oldest occupied slot (only meaningful when count > 0)
    tail : index where the next item is written
    count: occupied slots; the only source of truth for full/empty

    tail == (head + count) % capacity holds after every operation.
    A new queue always starts full: `capacity` items drawn from the generator.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, generator: Optional[IdGenerator] = None,
                 *, name: str = "main"):
        if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity <= 0:
            raise ValueError("capacity must be an int > 0")
        self.cap = capacity
        self.name = name
        self._gen = generator or default_generator()
        self._slots: List[Optional[Item]] = [None] * capacity
        self._head = 0
        self._tail = 0
        self._count = 0
        self.l = log.get(f"circq.queue.{name}")

        for _ in range(capacity):
            self._put(self._gen.generate_item())
        self._publish_depth()
        self.l.info(f"queue initialized cap={self.cap} ids={self.snapshot()}", extra=self._fields())

    @classmethod
    def initialize(cls, capacity: int = DEFAULT_CAPACITY, generator: Optional[IdGenerator] = None,
                   *, name: str = "main") -> "CircularQueue":
        """Create a queue pre-filled with `capacity` freshly generated items."""
        return cls(capacity, generator, name=name)

    # -------------------- Properties --------------------
    @property
    def capacity(self) -> int:
        return self.cap

    @property
    def head(self) -> int:
        return self._head

    @property
    def tail(self) -> int:
        return self._tail

    @property
    def count(self) -> int:
        return self._count

    @property
    def slots(self) -> List[Optional[Item]]:
        """Copy of raw storage, including stale slots left behind by dequeue."""
        return list(self._slots)

    def __len__(self) -> int:
        return self._count

    def __repr__(self) -> str:
        return (f"CircularQueue(cap={self.cap}, head={self._head}, "
                f"tail={self._tail}, count={self._count})")

    # -------------------- Predicates --------------------
    def is_full(self) -> bool:
        return self._count == self.cap

    def is_empty(self) -> bool:
        return self._count == 0

    # -------------------- Mutation --------------------
    def _put(self, item: Item) -> None:
        self._slots[self._tail] = item
        self._tail = (self._tail + 1) % self.cap
        self._count += 1

    def _publish_depth(self) -> None:
        set_gauge("queue_depth", self._count, queue=self.name)

    def _fields(self, **more) -> dict:
        return {"queue": self.name, "head": self._head, "tail": self._tail, "count": self._count, **more}

    def enqueue(self) -> ItemId:
        """Generate a new item at the tail and return its id. Raises QueueFull."""
        if self.is_full():
            inc_counter("queue_rejected_total", reason="full", queue=self.name)
            raise QueueFull(self.cap)
        item = self._gen.generate_item()
        slot = self._tail
        self._put(item)
        inc_counter("queue_enqueue_total", queue=self.name)
        self._publish_depth()
        self.l.debug(f"enqueue id={item.id} slot={slot} tail={self._tail} count={self._count}",
                     extra=self._fields(item_id=item.id))
        return item.id

    def dequeue(self) -> ItemId:
        """Remove the item at the head and return its id. Raises QueueEmpty."""
        if self.is_empty():
            inc_counter("queue_rejected_total", reason="empty", queue=self.name)
            raise QueueEmpty(self.cap)
        slot = self._head
        item = self._slots[slot]
        # slot keeps its old item until a later enqueue overwrites it
        self._head = (self._head + 1) % self.cap
        self._count -= 1
        inc_counter("queue_dequeue_total", queue=self.name)
        self._publish_depth()
        self.l.debug(f"dequeue id={item.id} slot={slot} head={self._head} count={self._count}",
                     extra=self._fields(item_id=item.id))
        return item.id

    # -------------------- Inspection --------------------
    def snapshot(self) -> List[ItemId]:
        """Ids from oldest to newest; [] when empty."""
        out: List[ItemId] = []
        i = self._head
        for _ in range(self._count):
            out.append(self._slots[i].id)
            i = (i + 1) % self.cap
        return out

    def state(self) -> QueueState:
        return QueueState(
            capacity=self.cap,
            head=self._head,
            tail=self._tail,
            count=self._count,
            ids=tuple(self.snapshot()),
        )
