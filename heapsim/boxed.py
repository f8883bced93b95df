"""A single value that owns a block on a simulated heap."""

from __future__ import annotations

from typing import Generic, TypeVar

from .manager import WORD_SIZE, Heap, default_heap

T = TypeVar("T")


class Box(Generic[T]):
    """Holds one value whose storage of ``size`` bytes lives on a heap."""

    def __init__(
        self,
        value: T,
        size: int = WORD_SIZE,
        alignment: int = WORD_SIZE,
        heap: Heap | None = None,
    ) -> None:
        self._heap = default_heap() if heap is None else heap
        self._address: int | None = self._heap.alloc(size, alignment)
        self._value: T | None = value

    @property
    def address(self) -> int | None:
        """Heap address of the value, or ``None`` once released."""
        return self._address

    @property
    def value(self) -> T:
        """The boxed value."""
        self._check_live()
        return self._value  # type: ignore[return-value]

    def set(self, value: T) -> None:
        """Replace the boxed value."""
        self._check_live()
        self._value = value

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        if self._address is None:
            return "Box(<released>)"
        return f"Box({self._value!r})"

    def release(self) -> None:
        """Drop the value and free its block; releasing twice does nothing."""
        if self._address is None:
            return
        self._value = None
        self._heap.free(self._address)
        self._address = None

    def __enter__(self) -> Box[T]:
        return self

    def __exit__(self, *args: object) -> None:
        self.release()

    def _check_live(self) -> None:
        if self._address is None:
            raise ValueError("box has been released")