"""A cell with run-time checked borrowing, stored on a simulated heap."""

from __future__ import annotations

from typing import Generic, TypeVar

from .manager import WORD_SIZE, Heap, default_heap

T = TypeVar("T")

_MUTABLY_BORROWED = -1


class BorrowError(RuntimeError):
    """Raised when a shared borrow is requested while mutably borrowed."""


class BorrowMutError(RuntimeError):
    """Raised when a mutable borrow is requested while any borrow is active."""


class RefCell(Generic[T]):
    """Holds a value that is lent out as many readers or one writer."""

    def __init__(self, value: T, size: int = WORD_SIZE, heap: Heap | None = None) -> None:
        self._heap = default_heap() if heap is None else heap
        self._address: int | None = self._heap.alloc(WORD_SIZE + size, WORD_SIZE)
        self._state = 0
        self._value = value

    @property
    def address(self) -> int | None:
        """Heap address of the cell, or ``None`` once released."""
        return self._address

    def borrow(self) -> Ref[T]:
        """Lend the value for reading."""
        self._check_live()
        if self._state == _MUTABLY_BORROWED:
            raise BorrowError("already mutably borrowed")
        self._state += 1
        return Ref._attach(self)

    def borrow_mut(self) -> RefMut[T]:
        """Lend the value for writing."""
        self._check_live()
        if self._state != 0:
            raise BorrowMutError("already borrowed")
        self._state = _MUTABLY_BORROWED
        return RefMut._attach(self)

    def release(self) -> None:
        """Free the cell's block; releasing twice does nothing."""
        if self._address is None:
            return
        if self._state != 0:
            raise ValueError("cannot release a borrowed cell")
        self._heap.free(self._address)
        self._address = None

    def __repr__(self) -> str:
        if self._address is None:
            return "RefCell(<released>)"
        return f"RefCell({self._value!r})"

    def _check_live(self) -> None:
        if self._address is None:
            raise ValueError("cell has been released")


class _Borrow(Generic[T]):
    _cell: RefCell[T]
    _live: bool

    @classmethod
    def _attach(cls, cell: RefCell[T]):
        borrow = cls.__new__(cls)
        borrow._cell = cell
        borrow._live = True
        return borrow

    def _check_live(self) -> None:
        if not self._live:
            raise ValueError("borrow has been released")


class Ref(_Borrow[T]):
    """A shared borrow of a :class:`RefCell`."""

    @property
    def value(self) -> T:
        """The borrowed value."""
        self._check_live()
        return self._cell._value

    def release(self) -> None:
        """End the borrow; releasing twice does nothing."""
        if self._live:
            self._live = False
            self._cell._state -= 1

    def __enter__(self) -> Ref[T]:
        return self

    def __exit__(self, *args: object) -> None:
        self.release()

    def __str__(self) -> str:
        return str(self.value)


class RefMut(_Borrow[T]):
    """An exclusive borrow of a :class:`RefCell`."""

    @property
    def value(self) -> T:
        """The borrowed value."""
        self._check_live()
        return self._cell._value

    def set(self, value: T) -> None:
        """Replace the value in the cell."""
        self._check_live()
        self._cell._value = value

    def release(self) -> None:
        """End the borrow; releasing twice does nothing."""
        if self._live:
            self._live = False
            self._cell._state = 0

    def __enter__(self) -> RefMut[T]:
        return self

    def __exit__(self, *args: object) -> None:
        self.release()

    def __str__(self) -> str:
        return str(self.value)