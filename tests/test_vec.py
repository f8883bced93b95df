import pytest

from heapsim.manager import Heap, OutOfMemoryError
from heapsim.vec import Vec


@pytest.fixture
def heap():
    return Heap()


def test_new_vec_is_empty_and_holds_no_block(heap):
    vec = Vec(heap=heap)
    assert len(vec) == 0
    assert vec.is_empty()
    assert vec.capacity() == 0
    assert vec.address is None
    assert vec.pop() is None


def test_first_push_allocates_initial_capacity(heap):
    vec = Vec(heap=heap)
    vec.push(7)
    assert vec.capacity() == 4
    assert vec.as_list() == [7]
    assert heap.free_space() < len(heap)


def test_small_capacity_doubles(heap):
    vec = Vec(heap=heap)
    for value in range(5):
        vec.push(value)
    assert vec.capacity() == 8
    assert vec.as_list() == [0, 1, 2, 3, 4]


def test_large_capacity_grows_by_half(heap):
    vec = Vec.with_capacity(20, heap=heap)
    vec.extend(range(21))
    assert vec.capacity() == 30
    assert vec.as_list() == list(range(21))


def test_extend_beyond_growth_uses_requested_size(heap):
    vec = Vec.with_capacity(2, heap=heap)
    vec.extend(range(10))
    assert vec.capacity() == 10
    assert list(vec) == list(range(10))


def test_from_iterable_has_exact_capacity(heap):
    vec = Vec.from_iterable("abc", item_size=1, heap=heap)
    assert vec.as_list() == ["a", "b", "c"]
    assert vec.capacity() == len("abc")


def test_insert_and_remove(heap):
    vec = Vec.from_iterable([1, 2, 4], heap=heap)
    vec.insert(2, 3)
    vec.insert(0, 0)
    vec.insert(len(vec), 5)
    assert vec.as_list() == [0, 1, 2, 3, 4, 5]
    assert vec.remove(0) == 0
    assert vec.remove(-1) == 5
    assert vec.as_list() == [1, 2, 3, 4]


def test_insert_out_of_range(heap):
    vec = Vec.from_iterable([1], heap=heap)
    with pytest.raises(IndexError):
        vec.insert(3, 9)


def test_remove_out_of_range(heap):
    vec = Vec(heap=heap)
    with pytest.raises(IndexError):
        vec.remove(0)


def test_insert_slice(heap):
    vec = Vec.from_iterable([1, 5], heap=heap)
    vec.insert_slice(1, [2, 3, 4])
    assert vec.as_list() == [1, 2, 3, 4, 5]
    with pytest.raises(IndexError):
        vec.insert_slice(9, [0])


def test_append_moves_items_and_releases_other(heap):
    first = Vec.from_iterable([1, 2], heap=heap)
    second = Vec.from_iterable([3, 4, 5], heap=heap)
    first.append(second)
    assert first.as_list() == [1, 2, 3, 4, 5]
    assert len(second) == 0
    assert second.address is None


def test_append_to_itself_rejected(heap):
    vec = Vec.from_iterable([1], heap=heap)
    with pytest.raises(ValueError):
        vec.append(vec)


def test_pop_returns_last(heap):
    vec = Vec.from_iterable([1, 2, 3], heap=heap)
    assert vec.pop() == 3
    assert vec.as_list() == [1, 2]


def test_clear_keeps_capacity(heap):
    vec = Vec.from_iterable(range(6), heap=heap)
    capacity = vec.capacity()
    vec.clear()
    assert vec.is_empty()
    assert vec.capacity() == capacity


def test_truncate(heap):
    vec = Vec.from_iterable(range(6), heap=heap)
    vec.truncate(2)
    assert vec.as_list() == [0, 1]
    with pytest.raises(ValueError):
        vec.truncate(3)


@pytest.mark.parametrize(
    "start, stop, drained, rest",
    [
        (None, None, [0, 1, 2, 3, 4], []),
        (1, 3, [1, 2], [0, 3, 4]),
        (3, None, [3, 4], [0, 1, 2]),
        (None, 2, [0, 1], [2, 3, 4]),
        (2, 2, [], [0, 1, 2, 3, 4]),
    ],
)
def test_drain(heap, start, stop, drained, rest):
    vec = Vec.from_iterable(range(5), heap=heap)
    assert vec.drain(start, stop) == drained
    assert vec.as_list() == rest


def test_drain_bad_range(heap):
    vec = Vec.from_iterable(range(3), heap=heap)
    with pytest.raises(IndexError):
        vec.drain(2, 1)
    with pytest.raises(IndexError):
        vec.drain(0, 4)


def test_indexing(heap):
    vec = Vec.from_iterable([10, 20, 30], heap=heap)
    vec[1] = 25
    assert vec[1] == 25
    assert vec[-1] == 30
    with pytest.raises(IndexError):
        vec[3]
    with pytest.raises(IndexError):
        vec[3] = 1


def test_release_returns_all_space(heap):
    initial = heap.free_space()
    vec = Vec(heap=heap)
    for value in range(40):
        vec.push(value)
    assert heap.free_space() < initial
    vec.release()
    assert heap.free_space() == initial
    assert len(vec) == 0


def test_context_manager_releases(heap):
    initial = heap.free_space()
    with Vec.from_iterable(range(8), heap=heap) as vec:
        assert vec.as_list() == list(range(8))
    assert heap.free_space() == initial
    assert vec.address is None


def test_alignment_respected(heap):
    heap.alloc(3)
    vec = Vec.with_capacity(2, alignment=32, heap=heap)
    assert vec.address % 32 == 0


def test_out_of_memory():
    small = Heap(64)
    with pytest.raises(OutOfMemoryError):
        Vec.with_capacity(100, heap=small)


def test_negative_capacity_rejected(heap):
    with pytest.raises(ValueError):
        Vec.with_capacity(-1, heap=heap)