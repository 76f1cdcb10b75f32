from __future__ import annotations


class ScopedCounter:
    """Integer counter whose value is only reachable through its methods."""

    __slots__ = ("_count", "_initial")

    def __init__(self, initial_value: int = 0):
        self._initial = initial_value
        self._count = initial_value

    def increment(self, step: int = 1) -> int:
        self._count += step
        return self._count

    def decrement(self, step: int = 1) -> int:
        self._count -= step
        return self._count

    def reset(self) -> int:
        # back to the construction value, not necessarily zero
        self._count = self._initial
        return self._count

    def get_value(self) -> int:
        return self._count

    def __repr__(self) -> str:
        return f"ScopedCounter(value={self._count})"


def create_scoped_counter(initial_value: int = 0) -> ScopedCounter:
    return ScopedCounter(initial_value)
