"""A simulated first-fit heap allocator over a fixed-size byte array.

Free blocks form a singly linked list threaded through the heap itself:

* free block: ``[size][next free block address]`` followed by unused bytes;
  the last block's "next" word holds :data:`END`.
* allocated block: optional front padding, then ``[size][block start]``,
  then the user data, then end padding of at most :data:`HEADER_SIZE` bytes.

Addresses are byte offsets into the heap. Freed blocks are pushed onto the
front of the free list and are never merged with their neighbours.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator

WORD_SIZE = 8
HEADER_SIZE = WORD_SIZE * 2
HEAP_SIZE = 8192
END = (1 << (WORD_SIZE * 8)) - 1

_MAX_WORD = END


class OutOfMemoryError(MemoryError):
    """Raised when no free block is large enough for a request."""


class Heap:
    """A fixed-size heap with a first-fit free list."""

    def __init__(self, size: int = HEAP_SIZE) -> None:
        if size <= HEADER_SIZE:
            raise ValueError(f"heap size must exceed {HEADER_SIZE} bytes, got {size}")
        self._memory = bytearray(size)
        self.write_word(0, size)
        self.write_word(WORD_SIZE, END)
        self._first_free = 0

    def __len__(self) -> int:
        return len(self._memory)

    def read_word(self, address: int) -> int:
        """Return the machine word stored at ``address``."""
        self._check_address(address)
        return int.from_bytes(self._memory[address : address + WORD_SIZE], sys.byteorder)

    def write_word(self, address: int, value: int) -> None:
        """Store ``value`` as a machine word at ``address``."""
        self._check_address(address)
        if not 0 <= value <= _MAX_WORD:
            raise ValueError(f"value {value} does not fit in a {WORD_SIZE}-byte word")
        self._memory[address : address + WORD_SIZE] = value.to_bytes(WORD_SIZE, sys.byteorder)

    def _check_address(self, address: int) -> None:
        if address < 0 or address + WORD_SIZE > len(self._memory):
            raise IndexError(f"address {address} is outside the heap")

    def _link(self, slot: int | None) -> int:
        return self._first_free if slot is None else self.read_word(slot)

    def _set_link(self, slot: int | None, target: int) -> None:
        if slot is None:
            self._first_free = target
        else:
            self.write_word(slot, target)

    def alloc(self, size: int, alignment: int = WORD_SIZE) -> int:
        """Allocate ``size`` bytes aligned to ``alignment`` and return their address."""
        if size < 0:
            raise ValueError(f"allocation size must not be negative, got {size}")
        if alignment > 0 and alignment & (alignment - 1):
            raise ValueError(f"alignment must be a power of two, got {alignment}")
        alignment = max(alignment, WORD_SIZE)
        end_pad = -size % WORD_SIZE

        slot: int | None = None
        while True:
            block = self._link(slot)
            if block == END:
                raise OutOfMemoryError("unable to allocate, not enough free space")

            block_size = self.read_word(block)
            front_pad = -(block + HEADER_SIZE) % alignment
            needed = front_pad + HEADER_SIZE + size + end_pad

            if needed > block_size:
                slot = block + WORD_SIZE
                continue

            header = block + front_pad
            if block_size - needed <= HEADER_SIZE:
                # The remainder is too small to hold a free block: take it all.
                next_free = self.read_word(block + WORD_SIZE)
                self.write_word(header, block_size)
                self.write_word(header + WORD_SIZE, block)
                self._set_link(slot, next_free)
            else:
                new_free = block + needed
                self.write_word(new_free, block_size - needed)
                self.write_word(new_free + WORD_SIZE, self.read_word(block + WORD_SIZE))
                self.write_word(header, needed)
                self.write_word(header + WORD_SIZE, block)
                self._set_link(slot, new_free)
            return header + HEADER_SIZE

    def free(self, address: int) -> None:
        """Return the block whose data starts at ``address`` to the free list."""
        block_size = self.read_word(address - HEADER_SIZE)
        block = self.read_word(address - WORD_SIZE)
        self.write_word(block, block_size)
        self.write_word(block + WORD_SIZE, self._first_free)
        self._first_free = block

    def free_blocks(self) -> Iterator[tuple[int, int]]:
        """Yield ``(address, size)`` for each free block in list order."""
        current = self._first_free
        while current != END:
            yield current, self.read_word(current)
            current = self.read_word(current + WORD_SIZE)

    def free_space(self) -> int:
        """Total number of bytes held by free blocks."""
        return sum(size for _, size in self.free_blocks())

    def debug_free(self) -> None:
        """Print every free block and the total free space."""
        print("\ndebugging free sequences")
        print(f"HEADER_SIZE = {HEADER_SIZE}")
        total = 0
        for number, (_, size) in enumerate(self.free_blocks(), start=1):
            print(f"{number}. free sequence len = {size} bytes")
            total += size
        print("end\n")
        print(f"free space: {total}")


_default: Heap | None = None


def default_heap() -> Heap:
    """Return the process-wide heap, creating it on first use."""
    global _default
    if _default is None:
        _default = Heap()
    return _default


def alloc(size: int, alignment: int = WORD_SIZE) -> int:
    """Allocate from the default heap."""
    return default_heap().alloc(size, alignment)


def free(address: int) -> None:
    """Free a block of the default heap."""
    default_heap().free(address)


def debug_free() -> None:
    """Print the free list of the default heap."""
    default_heap().debug_free()