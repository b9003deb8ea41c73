"""Bounded trailing text buffer for failure reporting."""

from collections import deque


class TrailingBuffer:
    """Sliding window over the most recent ``capacity`` characters written.

    Oldest characters are discarded first once the window is full, so the
    buffer always holds the tail of everything written since the last clear.
    """

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._chars: deque[str] = deque(maxlen=capacity)

    def write(self, text: str) -> None:
        # Only the last `capacity` characters of an oversized chunk can survive.
        if len(text) > self.capacity:
            text = text[-self.capacity :]
        self._chars.extend(text)

    def clear(self) -> None:
        self._chars.clear()

    def getvalue(self) -> str:
        return "".join(self._chars)

    def __len__(self) -> int:
        return len(self._chars)
