"""A growable array whose storage is accounted for on a simulated heap."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, Generic, TypeVar

from .manager import WORD_SIZE, Heap, default_heap

T = TypeVar("T")

_INITIAL_CAPACITY = 4
_DOUBLING_LIMIT = 16


class Vec(Generic[T]):
    """A vector of items, each taking ``item_size`` bytes of heap storage.

    The backing block is allocated from a :class:`~heapsim.manager.Heap` and
    reallocated (new block first, then the old one freed) whenever it fills.
    """

    def __init__(
        self,
        item_size: int = WORD_SIZE,
        alignment: int = WORD_SIZE,
        heap: Heap | None = None,
    ) -> None:
        if item_size < 0:
            raise ValueError(f"item size must not be negative, got {item_size}")
        self._item_size = item_size
        self._alignment = alignment
        self._heap = default_heap() if heap is None else heap
        self._address: int | None = None
        self._slots: list[Any] = []
        self._len = 0

    @classmethod
    def with_capacity(
        cls,
        capacity: int,
        item_size: int = WORD_SIZE,
        alignment: int = WORD_SIZE,
        heap: Heap | None = None,
    ) -> Vec[T]:
        """Create an empty vector with room for ``capacity`` items."""
        if capacity < 0:
            raise ValueError(f"capacity must not be negative, got {capacity}")
        vec: Vec[T] = cls(item_size, alignment, heap)
        vec._allocate(capacity)
        return vec

    @classmethod
    def from_iterable(
        cls,
        items: Iterable[T],
        item_size: int = WORD_SIZE,
        alignment: int = WORD_SIZE,
        heap: Heap | None = None,
    ) -> Vec[T]:
        """Create a vector holding ``items`` with exactly enough capacity."""
        values = list(items)
        vec: Vec[T] = cls.with_capacity(len(values), item_size, alignment, heap)
        vec.extend(values)
        return vec

    @property
    def address(self) -> int | None:
        """Heap address of the backing block, or ``None`` if none is held."""
        return self._address

    def __len__(self) -> int:
        return self._len

    def capacity(self) -> int:
        """Number of items the current block can hold."""
        return len(self._slots)

    def is_empty(self) -> bool:
        return self._len == 0

    def as_list(self) -> list[T]:
        """Return a copy of the items as a list."""
        return self._slots[: self._len]

    def push(self, value: T) -> None:
        """Append one item, growing the storage if it is full."""
        if self._len == self.capacity():
            self._grow()
        self._slots[self._len] = value
        self._len += 1

    def insert(self, index: int, value: T) -> None:
        """Insert ``value`` before position ``index`` (``0 <= index <= len``)."""
        if not 0 <= index <= self._len:
            raise IndexError(f"insertion index {index} out of range for length {self._len}")
        if self._len == self.capacity():
            self._grow()
        self._slots[index + 1 : self._len + 1] = self._slots[index : self._len]
        self._slots[index] = value
        self._len += 1

    def insert_slice(self, index: int, items: Iterable[T]) -> None:
        """Insert all ``items`` before position ``index``."""
        if not 0 <= index <= self._len:
            raise IndexError(f"insertion index {index} out of range for length {self._len}")
        values = list(items)
        total = self._len + len(values)
        if total > self.capacity():
            self._grow(total)
        self._slots[index + len(values) : total] = self._slots[index : self._len]
        self._slots[index : index + len(values)] = values
        self._len = total

    def append(self, other: Vec[T]) -> None:
        """Move every item of ``other`` to the end of this vector and release ``other``."""
        if other is self:
            raise ValueError("cannot append a vector to itself")
        self.extend(other.as_list())
        other.release()

    def extend(self, items: Iterable[T]) -> None:
        """Append all ``items``."""
        values = list(items)
        total = self._len + len(values)
        if total > self.capacity():
            self._grow(total)
        self._slots[self._len : total] = values
        self._len = total

    def clear(self) -> None:
        """Remove every item, keeping the capacity."""
        self._slots[: self._len] = [None] * self._len
        self._len = 0

    def pop(self) -> T | None:
        """Remove and return the last item, or ``None`` if empty."""
        if self._len == 0:
            return None
        self._len -= 1
        value = self._slots[self._len]
        self._slots[self._len] = None
        return value

    def remove(self, index: int) -> T:
        """Remove and return the item at ``index``, shifting later items down."""
        position = self._position(index)
        value = self._slots[position]
        self._slots[position : self._len - 1] = self._slots[position + 1 : self._len]
        self._slots[self._len - 1] = None
        self._len -= 1
        return value

    def truncate(self, length: int) -> None:
        """Shorten the vector to ``length`` items."""
        if not 0 <= length <= self._len:
            raise ValueError(f"cannot truncate length {self._len} to {length}")
        self._slots[length : self._len] = [None] * (self._len - length)
        self._len = length

    def drain(self, start: int | None = None, stop: int | None = None) -> list[T]:
        """Remove the items in ``[start, stop)`` and return them as a list."""
        start = 0 if start is None else start
        stop = self._len if stop is None else stop
        if not 0 <= start <= stop <= self._len:
            raise IndexError(f"drain range {start}..{stop} out of range for length {self._len}")
        drained = self._slots[start:stop]
        tail = self._slots[stop : self._len]
        new_len = self._len - len(drained)
        self._slots[start:new_len] = tail
        self._slots[new_len : self._len] = [None] * len(drained)
        self._len = new_len
        return drained

    def __getitem__(self, index: int) -> T:
        return self._slots[self._position(index)]

    def __setitem__(self, index: int, value: T) -> None:
        self._slots[self._position(index)] = value

    def __iter__(self) -> Iterator[T]:
        yield from self._slots[: self._len]

    def release(self) -> None:
        """Free the backing block and empty the vector."""
        if self._address is not None:
            self._heap.free(self._address)
        self._address = None
        self._slots = []
        self._len = 0

    def __enter__(self) -> Vec[T]:
        return self

    def __exit__(self, *args: object) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"Vec({self.as_list()!r})"

    def _position(self, index: int) -> int:
        position = index + self._len if index < 0 else index
        if not 0 <= position < self._len:
            raise IndexError(f"index {index} out of range for length {self._len}")
        return position

    def _grow(self, at_least: int | None = None) -> None:
        capacity = self.capacity()
        if capacity == 0:
            new_capacity = _INITIAL_CAPACITY
        elif capacity <= _DOUBLING_LIMIT:
            new_capacity = capacity * 2
        else:
            new_capacity = capacity + capacity // 2
        if at_least is not None and at_least > new_capacity:
            new_capacity = at_least
        self._allocate(new_capacity)

    def _allocate(self, capacity: int) -> None:
        address = self._heap.alloc(capacity * self._item_size, self._alignment)
        if self._address is not None:
            self._heap.free(self._address)
        self._address = address
        live = self._slots[: self._len]
        self._slots = live + [None] * (capacity - len(live))