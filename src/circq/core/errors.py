from __future__ import annotations


class QueueError(Exception):
    """Base class for rejected queue operations. Queue state is never changed."""

    def __init__(self, capacity: int, message: str):
        super().__init__(message)
        self.capacity = capacity


class QueueFull(QueueError):
    def __init__(self, capacity: int):
        super().__init__(capacity, f"queue is full (capacity={capacity}); no item can be inserted")


class QueueEmpty(QueueError):
    def __init__(self, capacity: int):
        super().__init__(capacity, f"queue is empty (capacity={capacity}); no item to remove")
