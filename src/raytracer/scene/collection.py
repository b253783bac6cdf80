"""Growable, insertion-ordered collections with an explicit capacity.

Scene objects and lights are stored in collections that grow geometrically:
the first insert reserves ``initial_capacity`` slots and every later growth
doubles the capacity. The capacity can be bounded by ``max_capacity``, which
the scene uses to match the size of the preallocated device-side storage.

A growth step that cannot be satisfied raises CapacityError and leaves the
collection untouched, so a scene builder can abort instead of continuing
with partial data.
"""

import logging
from collections.abc import Iterator
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CapacityError(RuntimeError):
    """Raised when a collection cannot grow to hold another item."""


class GrowableCollection(Generic[T]):
    """An ordered sequence with geometric growth and safe lookups.

    Attributes:
        initial_capacity: Capacity reserved by the first insert.
        max_capacity: Upper bound on the capacity, or None for unbounded.
    """

    initial_capacity = 8

    def __init__(self, max_capacity: int | None = None) -> None:
        if max_capacity is not None and max_capacity <= 0:
            raise ValueError(f"max_capacity must be positive, got {max_capacity}")
        self.max_capacity = max_capacity
        self._slots: list[T | None] = []
        self._count = 0

    @property
    def count(self) -> int:
        """Number of stored items."""
        return self._count

    @property
    def capacity(self) -> int:
        """Number of reserved slots (always >= count)."""
        return len(self._slots)

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[T]:
        for index in range(self._count):
            yield self._slots[index]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(count={self._count}, capacity={self.capacity})"

    def _next_capacity(self) -> int:
        current = self.capacity
        wanted = self.initial_capacity if current == 0 else current * 2
        if self.max_capacity is not None:
            wanted = min(wanted, self.max_capacity)
        return wanted

    def _grow(self) -> None:
        new_capacity = self._next_capacity()
        if new_capacity <= self.capacity:
            raise CapacityError(
                f"{type(self).__name__} is full ({self._count} of max {self.max_capacity})"
            )
        try:
            self._slots.extend([None] * (new_capacity - self.capacity))
        except MemoryError as exc:
            raise CapacityError(
                f"Unable to grow {type(self).__name__} to {new_capacity} slots"
            ) from exc
        logger.debug("%s grew to capacity %d", type(self).__name__, new_capacity)

    def _validate(self, item: T) -> None:
        """Hook for subclasses to reject items before they are stored."""

    def add(self, item: T) -> int:
        """Append an item.

        Args:
            item: The item to store.

        Returns:
            The index of the stored item.

        Raises:
            CapacityError: If the collection cannot grow.
        """
        self._validate(item)
        if self._count == self.capacity:
            self._grow()
        index = self._count
        self._slots[index] = item
        self._count += 1
        return index

    def get(self, index: int) -> T | None:
        """Return the item at index, or None if the index is out of range."""
        if 0 <= index < self._count:
            return self._slots[index]
        return None

    def free(self) -> None:
        """Release storage and reset count and capacity to zero.

        Safe to call any number of times.
        """
        self._slots = []
        self._count = 0
