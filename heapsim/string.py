"""A UTF-8 string whose bytes are stored in a heap-backed vector."""

from __future__ import annotations

from .manager import Heap
from .vec import Vec

_ENCODING = "utf-8"


def _is_continuation(byte: int) -> bool:
    return byte & 0xC0 == 0x80


def _encode_char(char: str) -> bytes:
    if not isinstance(char, str) or len(char) != 1:
        raise ValueError(f"expected a single character, got {char!r}")
    return char.encode(_ENCODING)


class HeapString:
    """A growable UTF-8 string; lengths and indices count bytes."""

    def __init__(self, text: str | None = None, heap: Heap | None = None) -> None:
        if text is None:
            self._vec: Vec[int] = Vec(1, 1, heap)
        else:
            self._vec = Vec.from_iterable(text.encode(_ENCODING), 1, 1, heap)

    @classmethod
    def with_capacity(cls, capacity: int, heap: Heap | None = None) -> HeapString:
        """Create an empty string with room for ``capacity`` bytes."""
        string = cls(heap=heap)
        string._vec = Vec.with_capacity(capacity, 1, 1, heap)
        return string

    def as_str(self) -> str:
        """Return the contents as a Python string."""
        return bytes(self._vec.as_list()).decode(_ENCODING)

    def __len__(self) -> int:
        return len(self._vec)

    def capacity(self) -> int:
        """Number of bytes the current storage can hold."""
        return self._vec.capacity()

    def is_char_boundary(self, index: int) -> bool:
        """Whether byte ``index`` starts a character or is the end of the string."""
        length = len(self._vec)
        if index == 0:
            return True
        if index < 0 or index >= length:
            return index == length
        return not _is_continuation(self._vec[index])

    def push(self, char: str) -> None:
        """Append one character."""
        self._vec.extend(_encode_char(char))

    def push_str(self, text: str) -> None:
        """Append ``text``."""
        self._vec.extend(text.encode(_ENCODING))

    def insert(self, index: int, char: str) -> None:
        """Insert one character at byte ``index``."""
        self._require_boundary(index)
        self._vec.insert_slice(index, _encode_char(char))

    def insert_str(self, index: int, text: str) -> None:
        """Insert ``text`` at byte ``index``."""
        self._require_boundary(index)
        self._vec.insert_slice(index, text.encode(_ENCODING))

    def pop(self) -> str | None:
        """Remove and return the last character, or ``None`` if empty."""
        if self._vec.is_empty():
            return None
        char = self.as_str()[-1]
        self._vec.drain(len(self._vec) - len(char.encode(_ENCODING)))
        return char

    def remove(self, index: int) -> str:
        """Remove and return the character starting at byte ``index``."""
        self._require_boundary(index)
        if index == len(self._vec):
            raise IndexError(f"no character at byte index {index}")
        char = bytes(self._vec.as_list()[index:]).decode(_ENCODING)[0]
        self._vec.drain(index, index + len(char.encode(_ENCODING)))
        return char

    def truncate(self, length: int) -> None:
        """Shorten the string to ``length`` bytes."""
        self._require_boundary(length)
        self._vec.truncate(length)

    def __add__(self, other: str) -> HeapString:
        """Append ``other`` in place and return this string."""
        if not isinstance(other, str):
            return NotImplemented
        self.push_str(other)
        return self

    def __iadd__(self, other: str) -> HeapString:
        if not isinstance(other, str):
            return NotImplemented
        self.push_str(other)
        return self

    def __str__(self) -> str:
        return self.as_str()

    def __repr__(self) -> str:
        return f"HeapString({self.as_str()!r})"

    def release(self) -> None:
        """Free the storage and empty the string."""
        self._vec.release()

    def _require_boundary(self, index: int) -> None:
        if not self.is_char_boundary(index):
            raise IndexError(f"byte index {index} is not a char boundary")