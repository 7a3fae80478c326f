"""Ordered accumulator for the numeric readings of a single sensor."""

from __future__ import annotations

import copy as _copy
import logging
from typing import Generic, Iterator, List, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", int, float)


def _truncating_div(total: int, count: int) -> int:
    quotient = abs(total) // count
    return quotient if total >= 0 else -quotient


class ReadingSequence(Generic[T]):
    """Insertion-ordered sequence of readings of one numeric type.

    The element type decides the arithmetic used by :meth:`mean`: float
    sequences divide exactly, integer sequences truncate toward zero.
    """

    def __init__(self, element_type: Type[T]) -> None:
        self.element_type = element_type
        self._items: List[T] = []

    def append(self, value: T) -> None:
        self._items.append(value)

    def mean(self) -> T:
        """Return the average of the stored readings, or zero when empty."""
        if not self._items:
            logger.warning(
                "Mean requested on an empty sequence; returning zero.",
                extra={"reason": "empty_sequence"},
            )
            return self.element_type()

        count = len(self._items)
        if issubclass(self.element_type, int):
            return _truncating_div(sum(self._items), count)  # type: ignore[return-value]
        return self.element_type(sum(self._items) / count)

    def remove_min(self) -> Optional[T]:
        """Remove and return the smallest reading; ties go to the earliest one."""
        if not self._items:
            logger.warning(
                "Cannot remove a minimum from an empty sequence.",
                extra={"reason": "empty_sequence"},
            )
            return None

        min_index = 0
        for index in range(1, len(self._items)):
            if self._items[index] < self._items[min_index]:
                min_index = index
        return self._items.pop(min_index)

    def size(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def clear(self) -> int:
        """Release every stored reading and report how many were dropped."""
        released = len(self._items)
        self._items.clear()
        return released

    def copy(self) -> "ReadingSequence[T]":
        duplicate: ReadingSequence[T] = ReadingSequence(self.element_type)
        duplicate._items = list(self._items)
        return duplicate

    def assign(self, other: "ReadingSequence[T]") -> None:
        """Replace this sequence's contents with an independent copy of ``other``."""
        if other is self:
            return
        self.clear()
        self.element_type = other.element_type
        self._items = list(other._items)

    def render(self) -> str:
        if not self._items:
            return "(empty)"
        return " -> ".join(str(item) for item in self._items)

    def __copy__(self) -> "ReadingSequence[T]":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "ReadingSequence[T]":
        duplicate: ReadingSequence[T] = ReadingSequence(self.element_type)
        duplicate._items = _copy.deepcopy(self._items, memo)
        return duplicate

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"ReadingSequence({self.element_type.__name__}, [{', '.join(map(str, self._items))}])"
