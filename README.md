# heapsim

`heapsim` simulates a small byte-addressed heap that a first-fit allocator manages, and builds
familiar container types on top of it. You can watch how allocations split free blocks, how
alignment padding is placed, and how freed blocks go back onto the free list.

## Installation

```
pip install .
```

For the test suite:

```
pip install .[test]
pytest
```

## The heap

```python
from heapsim.manager import Heap, OutOfMemoryError

heap = Heap(8192)
a = heap.alloc(24, 8)          # address of the user data
heap.write_word(a, 42)
assert heap.read_word(a) == 42

print(heap.free_space())       # total bytes in free blocks
for address, size in heap.free_blocks():   # free-list order
    print(address, size)
heap.debug_free()              # prints the free list

heap.free(a)
```

Addresses are byte offsets into the heap and words are 8 bytes. Each free block holds a
two-word header: its size and the address of the next free block. An allocated block records
its full size and its starting address just in front of the user data, so `free` only needs
the address that `alloc` returned. Alignments below 8 are raised to 8; an alignment that is
not a power of two, or a negative size, raises `ValueError`. When no free block is large
enough, `alloc` raises `OutOfMemoryError` (a subclass of `MemoryError`).

`read_word` and `write_word` raise `IndexError` for addresses outside the heap, and
`write_word` raises `ValueError` for values that do not fit in a word. A heap must be larger
than 16 bytes.

There is also a shared module-level heap of 8192 bytes, reached through `default_heap()`,
`alloc(size, alignment)`, `free(address)` and `debug_free()`.

## Containers

All containers take an optional `heap`; without one they use the shared heap.

```python
from heapsim.manager import Heap
from heapsim.vec import Vec
from heapsim.string import HeapString
from heapsim.boxed import Box

heap = Heap(8192)

with Vec(8, 8, heap) as v:     # item size, alignment, heap
    v.push(1)
    v.extend([2, 3, 4, 5])
    print(v.as_list(), len(v), v.capacity())
    print(v.drain(1, 3))       # the removed items, as a list

s = HeapString("hello", heap)
s += " world"
s.insert(0, "¡")
print(str(s), s.pop())
s.release()

with Box(3.5, 8, 8, heap) as b:
    b.set(4.5)
    print(b.value)
```

`Vec` grows from a capacity of 4, doubling up to 16 and then growing by half; on each
reallocation it takes a new block from the heap and then frees the old one. Its `release`
(also called on leaving a `with` block) frees the block and empties the vector. `HeapString`
stores UTF-8 bytes in a `Vec`; its lengths and indices count bytes, and it raises
`IndexError` for indices that fall inside a character.

## Shared ownership and borrowing

```python
from heapsim.rc import Rc
from heapsim.refcell import RefCell, BorrowError, BorrowMutError

shared = Rc("data", 8, heap)
other = shared.clone()
weak = shared.downgrade()
print(shared.strong_count(), shared.weak_count())
shared.drop()
other.drop()
assert weak.upgrade() is None
weak.drop()                    # the block is freed once both counts reach zero

cell = RefCell([1, 2], 16, heap)
with cell.borrow_mut() as guard:
    guard.set([3, 4])
with cell.borrow() as view:
    print(view.value)
cell.release()
```

`borrow` raises `BorrowError` while a mutable borrow is live, and `borrow_mut` raises
`BorrowMutError` while any borrow is live. Using a reference, borrow or container after it
has been dropped or released raises `ValueError`.

## What it does not do

The heap only accounts for storage: containers reserve and free blocks of the right size,
but the values themselves are kept as Python objects, not encoded into the heap's bytes.
Freed blocks are pushed onto the front of the free list and are never merged with their
neighbours, so the heap fragments over time. There is no command-line program.