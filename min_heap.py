class MinHeap:
    """Binary min-heap ordered by a caller-supplied comparator.

    ``comparator(a, b)`` returns a negative number when ``a`` sorts before
    ``b``, zero when they are equal and a positive number otherwise. Equal
    items are never swapped, so the extraction order is reproducible for a
    given insertion sequence.
    """

    def __init__(self, comparator):
        self._heap = []
        self._comparator = comparator

    def size(self):
        return len(self._heap)

    def is_empty(self):
        return not self._heap

    def __len__(self):
        return len(self._heap)

    def insert(self, item):
        self._heap.append(item)
        self._bubble_up()

    def extract_min(self):
        """Remove and return the smallest item, or None when the heap is empty."""
        if self.is_empty():
            return None
        if len(self._heap) == 1:
            return self._heap.pop()

        smallest = self._heap[0]
        # Move the last leaf to the root and sink it
        self._heap[0] = self._heap.pop()
        self._bubble_down()
        return smallest

    def peek_min(self):
        return self._heap[0] if self._heap else None

    def _less(self, i, j):
        return self._comparator(self._heap[i], self._heap[j]) < 0

    def _swap(self, i, j):
        self._heap[i], self._heap[j] = self._heap[j], self._heap[i]

    def _bubble_up(self):
        index = len(self._heap) - 1
        while index > 0:
            parent = (index - 1) // 2
            if not self._less(index, parent):
                break
            self._swap(index, parent)
            index = parent

    def _bubble_down(self):
        index = 0
        last = len(self._heap) - 1
        while True:
            left = 2 * index + 1
            right = 2 * index + 2
            smallest = index

            if left <= last and self._less(left, smallest):
                smallest = left
            if right <= last and self._less(right, smallest):
                smallest = right

            if smallest == index:
                break
            self._swap(index, smallest)
            index = smallest
