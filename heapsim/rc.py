"""Reference-counted shared values stored on a simulated heap."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .manager import WORD_SIZE, Heap, default_heap

T = TypeVar("T")


@dataclass
class _RcBox:
    heap: Heap
    address: int | None
    value: Any
    strong: int = 1
    weak: int = 0

    def free(self) -> None:
        if self.address is not None:
            self.heap.free(self.address)
            self.address = None


class Rc(Generic[T]):
    """A strong reference to a shared value with strong and weak counts.

    The counts and the value share one heap block, freed once both counts
    reach zero.
    """

    def __init__(self, value: T, size: int = WORD_SIZE, heap: Heap | None = None) -> None:
        heap = default_heap() if heap is None else heap
        address = heap.alloc(2 * WORD_SIZE + size, WORD_SIZE)
        self._inner = _RcBox(heap, address, value)
        self._live = True

    @classmethod
    def _share(cls, inner: _RcBox) -> Rc[T]:
        rc = cls.__new__(cls)
        rc._inner = inner
        rc._live = True
        return rc

    @property
    def address(self) -> int | None:
        """Heap address of the shared block, or ``None`` once freed."""
        return self._inner.address

    @property
    def value(self) -> T:
        """The shared value."""
        self._check_live()
        return self._inner.value

    def strong_count(self) -> int:
        self._check_live()
        return self._inner.strong

    def weak_count(self) -> int:
        self._check_live()
        return self._inner.weak

    def clone(self) -> Rc[T]:
        """Return another strong reference to the same value."""
        self._check_live()
        self._inner.strong += 1
        return Rc._share(self._inner)

    def downgrade(self) -> Weak[T]:
        """Return a weak reference to the same value."""
        self._check_live()
        self._inner.weak += 1
        return Weak._share(self._inner)

    def drop(self) -> None:
        """Give up this strong reference."""
        self._check_live()
        self._live = False
        inner = self._inner
        inner.strong -= 1
        if inner.strong == 0:
            inner.value = None
            if inner.weak == 0:
                inner.free()

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        if not self._live:
            return "Rc(<dropped>)"
        return f"Rc({self._inner.value!r})"

    def _check_live(self) -> None:
        if not self._live:
            raise ValueError("reference has been dropped")


class Weak(Generic[T]):
    """A weak reference that does not keep the shared value alive."""

    _inner: _RcBox
    _live: bool

    @classmethod
    def _share(cls, inner: _RcBox) -> Weak[T]:
        weak = cls.__new__(cls)
        weak._inner = inner
        weak._live = True
        return weak

    def upgrade(self) -> Rc[T] | None:
        """Return a strong reference, or ``None`` if the value is gone."""
        self._check_live()
        if self._inner.strong == 0:
            return None
        self._inner.strong += 1
        return Rc._share(self._inner)

    def clone(self) -> Weak[T]:
        """Return another weak reference to the same value."""
        self._check_live()
        self._inner.weak += 1
        return Weak._share(self._inner)

    def drop(self) -> None:
        """Give up this weak reference."""
        self._check_live()
        self._live = False
        inner = self._inner
        inner.weak -= 1
        if inner.strong == 0 and inner.weak == 0:
            inner.free()

    def __repr__(self) -> str:
        return "Weak(<dropped>)" if not self._live else "Weak(...)"

    def _check_live(self) -> None:
        if not self._live:
            raise ValueError("weak reference has been dropped")