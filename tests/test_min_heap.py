import pytest

from min_heap import MinHeap


@pytest.fixture
def heap():
    return MinHeap(lambda a, b: a - b)


def test_extracts_in_ascending_order(heap):
    for value in [5, 3, 8, 1, 9, 2, 7]:
        heap.insert(value)

    out = [heap.extract_min() for _ in range(7)]
    assert out == [1, 2, 3, 5, 7, 8, 9]
    assert heap.is_empty()


def test_empty_heap_returns_none(heap):
    assert heap.is_empty()
    assert heap.size() == 0
    assert heap.extract_min() is None
    assert heap.peek_min() is None


def test_peek_does_not_remove(heap):
    heap.insert(4)
    heap.insert(2)
    assert heap.peek_min() == 2
    assert heap.size() == 2
    assert len(heap) == 2


def test_custom_comparator_orders_by_key():
    heap = MinHeap(lambda a, b: a[0] - b[0])
    heap.insert((3, "c"))
    heap.insert((1, "a"))
    heap.insert((2, "b"))
    assert [heap.extract_min()[1] for _ in range(3)] == ["a", "b", "c"]


def test_ties_are_reproducible():
    def drain():
        heap = MinHeap(lambda a, b: a[0] - b[0])
        for item in [(1, "x"), (1, "y"), (2, "z"), (1, "w"), (2, "v")]:
            heap.insert(item)
        return [heap.extract_min() for _ in range(5)]

    first = drain()
    assert first == drain()
    assert [p for p, _ in first] == [1, 1, 1, 2, 2]
