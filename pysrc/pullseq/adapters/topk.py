"""Bounded best-of-N selection.

All of these need to see the whole source before they know their
answer, so the first advance drains the source. Input is still
pulled one element at a time, and only the retained elements are
kept in memory.

Elements that compare equal under the comparator share a **key**.
The variants differ in how they treat elements sharing a key:

```python
>>> from pullseq._utils import natural_order
>>> from pullseq.sequences import from_iterable
>>> src = ["1", "1", "2", "2", "2", "3", "3", "4", "4", "4"]
>>> FilteringMaxKeysSequence(from_iterable(src), 2, natural_order).to_list()
['4', '3']
>>> FilteringMaxValuesSequence(from_iterable(src), 2, natural_order).to_list()
['4', '4', '4', '3', '3']
>>> FilteringAllMaxSequence(from_iterable(src), natural_order).to_list()
['4', '4', '4']
```

"""

from abc import abstractmethod
from collections import deque
from typing import Deque, Generic, Iterable, List, Optional, Tuple, TypeVar

from typing_extensions import override

from pullseq._utils import Comparator, check_at_least, check_callable
from pullseq.properties import Properties, min_size
from pullseq.sequences import _EMPTY, Adapter, PullSequence, check_source

X = TypeVar("X")
"""Type of source elements."""


class TopKTable(Generic[X]):
    """The largest keys seen so far, in strictly decreasing order.

    `keys` holds one representative per retained key. `ties` is
    index-aligned with it and holds every element seen for that key
    in encounter order, if ties are being kept.

    ```python
    >>> from pullseq._utils import natural_order
    >>> table = TopKTable(2, natural_order, keep_ties=True)
    >>> for x in [1, 3, 2, 3, 0]:
    ...     table.offer(x)
    >>> table.keys
    [3, 2]
    >>> table.ties
    [[3, 3], [2]]
    ```

    :arg capacity: Maximum number of distinct keys.

    :arg comparator: Defines the order and which elements share a key.

    :arg keep_ties: Whether to keep every element of a retained key,
        or only the first one.

    """

    def __init__(self, capacity: int, comparator: Comparator[X], keep_ties: bool):
        self.capacity = capacity
        self.comparator = comparator
        self.keep_ties = keep_ties
        self.keys: List[X] = []
        self.ties: List[List[X]] = []

    def offer(self, x: X) -> None:
        """Consider a new element for the table."""
        lo = 0
        hi = len(self.keys)
        while lo < hi:
            mid = (lo + hi) // 2
            c = self.comparator(x, self.keys[mid])
            if c == 0:
                if self.keep_ties:
                    self.ties[mid].append(x)
                return
            elif c > 0:
                hi = mid
            else:
                lo = mid + 1

        if lo >= self.capacity:
            return
        self.keys.insert(lo, x)
        self.ties.insert(lo, [x])
        if len(self.keys) > self.capacity:
            # Evict the smallest key and everything tied with it.
            self.keys.pop()
            self.ties.pop()

    def values(self) -> Iterable[X]:
        """Every retained element, largest key first."""
        for tied in self.ties:
            yield from tied


class _DrainingSequence(Adapter[X]):
    def __init__(self, source: PullSequence[X], comparator: Comparator[X]):
        super().__init__()
        self._source = check_source(source)
        self._comparator = check_callable(comparator, "comparator")
        self._pending: Optional[Deque[X]] = None

    @abstractmethod
    def _drain(self) -> Iterable[X]:
        ...

    @override
    def _produce(self) -> Tuple[X, ...]:
        if self._pending is None:
            self._pending = deque(self._drain())
        if len(self._pending) > 0:
            return (self._pending.popleft(),)
        return _EMPTY

    def _bound(self) -> int:
        return self._source.estimate_size()

    @override
    def estimate_size(self) -> int:
        if self._pending is not None:
            return len(self._pending)
        return self._bound()


class FilteringAllMaxSequence(_DrainingSequence[X]):
    """Every element tied with the maximum, in encounter order.

    :arg source: Source to filter.

    :arg comparator: Defines the maximum.

    """

    @override
    def _drain(self) -> Iterable[X]:
        maxes: List[X] = []
        for x in self._source:
            if len(maxes) <= 0:
                maxes.append(x)
                continue
            c = self._comparator(x, maxes[0])
            if c > 0:
                maxes = [x]
            elif c == 0:
                maxes.append(x)
        return maxes

    @override
    def properties(self) -> Properties:
        return self._source.properties().without_sized()


class _TopKSequence(_DrainingSequence[X]):
    def __init__(self, source: PullSequence[X], n: int, comparator: Comparator[X]):
        super().__init__(source, comparator)
        self._n = check_at_least(n, 2, "n")

    @override
    def properties(self) -> Properties:
        return self._source.properties().without_sorted().without_sized()


class FilteringMaxKeysSequence(_TopKSequence[X]):
    """The `n` largest distinct keys, largest first.

    Only the first element seen for each key is emitted.

    :arg source: Source to filter.

    :arg n: Number of keys to keep. Must be at least 2.

    :arg comparator: Defines the order and which elements share a key.

    """

    @override
    def _drain(self) -> Iterable[X]:
        table = TopKTable(self._n, self._comparator, keep_ties=False)
        for x in self._source:
            table.offer(x)
        return table.keys

    @override
    def _bound(self) -> int:
        return min_size(self._n, self._source.estimate_size())


class FilteringMaxValuesSequence(_TopKSequence[X]):
    """Every element whose key is among the `n` largest keys.

    Elements are grouped by key, largest key first, and in encounter
    order within a key. Since no key is split across the boundary,
    more than `n` elements can be emitted.

    :arg source: Source to filter.

    :arg n: Number of keys to keep. Must be at least 2.

    :arg comparator: Defines the order and which elements share a key.

    """

    @override
    def _drain(self) -> Iterable[X]:
        table = TopKTable(self._n, self._comparator, keep_ties=True)
        for x in self._source:
            table.offer(x)
        return table.values()

