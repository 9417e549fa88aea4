from __future__ import annotations
import itertools
import threading


class AtomicInteger:
    """
    An integer cell with compare-and-set semantics.

    Each instance owns its own lock, so counters on unrelated objects never
    contend with each other.
    """

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = threading.Lock()

    def get(self) -> int:
        with self._lock:
            return self._value

    def compare_and_set(self, expected: int, new: int) -> bool:
        with self._lock:
            if self._value != expected:
                return False
            self._value = new
            return True

    def __repr__(self) -> str:
        return f"AtomicInteger({self.get()})"


class IdSequence:
    """Thread-safe monotonic identifier generator."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            return next(self._counter)


# catalog item ids are shared by every registry in the process
ITEM_ID_BASE = 1_000_000_000_000
ITEM_IDS = IdSequence(ITEM_ID_BASE + 1)
