import pytest

from heapsim.manager import Heap
from heapsim.refcell import BorrowError, BorrowMutError, RefCell


@pytest.fixture
def heap():
    return Heap(1024)


def test_many_shared_borrows(heap):
    cell = RefCell("v", heap=heap)
    first = cell.borrow()
    second = cell.borrow()
    assert first.value == "v"
    assert second.value == "v"


def test_borrow_mut_while_borrowed_raises(heap):
    cell = RefCell(1, heap=heap)
    ref = cell.borrow()
    with pytest.raises(BorrowMutError):
        cell.borrow_mut()
    ref.release()
    with cell.borrow_mut() as writer:
        assert writer.value == 1


def test_borrow_while_mutably_borrowed_raises(heap):
    cell = RefCell(1, heap=heap)
    writer = cell.borrow_mut()
    with pytest.raises(BorrowError):
        cell.borrow()
    with pytest.raises(BorrowMutError):
        cell.borrow_mut()
    writer.release()
    assert cell.borrow().value == 1


def test_set_is_visible_after_release(heap):
    cell = RefCell("old", heap=heap)
    with cell.borrow_mut() as writer:
        writer.set("new")
    with cell.borrow() as reader:
        assert reader.value == "new"


def test_all_shared_borrows_must_end(heap):
    cell = RefCell(0, heap=heap)
    a = cell.borrow()
    b = cell.borrow()
    a.release()
    with pytest.raises(BorrowMutError):
        cell.borrow_mut()
    b.release()
    writer = cell.borrow_mut()
    writer.set(3)
    assert writer.value == 3


def test_released_borrow_value_raises(heap):
    cell = RefCell(5, heap=heap)
    ref = cell.borrow()
    ref.release()
    with pytest.raises(ValueError):
        _ = ref.value
    with cell.borrow_mut() as writer:
        assert writer.value == 5


def test_release_frees_block(heap):
    baseline = heap.free_space()
    cell = RefCell(0, heap=heap)
    assert heap.free_space() < baseline
    cell.release()
    assert heap.free_space() == baseline
    with pytest.raises(ValueError):
        cell.borrow()


def test_release_while_borrowed_raises(heap):
    cell = RefCell(0, heap=heap)
    ref = cell.borrow()
    with pytest.raises(ValueError):
        cell.release()
    ref.release()
    cell.release()
    assert cell.address is None


def test_str(heap):
    cell = RefCell(7, heap=heap)
    with cell.borrow() as reader:
        assert str(reader) == "7"
    with cell.borrow_mut() as writer:
        assert str(writer) == "7"