"""Fixed-width windows over a single ordered source.

**Rolling** windows overlap: every contiguous run of `width` elements
is emitted, the start moving forward by one element each time.
**Grouping** windows don't: the source is chopped into consecutive
chunks of exactly `width` elements.

```python
>>> from pullseq.sequences import from_iterable
>>> [w.to_list() for w in WindowSequence(from_iterable([1, 2, 3, 4]), 3, True)]
[[1, 2, 3], [2, 3, 4]]
>>> [w.to_list() for w in WindowSequence(from_iterable(range(7)), 3, False)]
[[0, 1, 2], [3, 4, 5]]
```

A grouping window never emits a partial chunk. If the source length
is not a multiple of `width`, the trailing elements are dropped.

"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, TypeVar

from typing_extensions import Self, override

from pullseq._utils import check_at_least
from pullseq.properties import UNBOUNDED, Properties, saturating_add, saturating_sub
from pullseq.sequences import (
    _EMPTY,
    Adapter,
    ListSequence,
    PullSequence,
    advance,
    check_source,
)

X = TypeVar("X")
"""Type of source elements."""


class WindowSequence(Adapter[ListSequence[X]]):
    """Emit fixed-width windows of a source.

    Keeps the most recent elements in a circular buffer of `width + 1`
    slots. Each emitted window is a fresh copy, so holding on to it is
    safe.

    :arg source: Source to window. Must be `ordered`.

    :arg width: Number of elements in each window. Must be at least
        2.

    :arg rolling: If `True`, each window starts one element after the
        previous one. If `False`, windows don't overlap.

    :raises InvalidArgumentError: On a bad source or width.

    """

    def __init__(self, source: PullSequence[X], width: int, rolling: bool):
        super().__init__()
        self._source = check_source(source, ordered=True)
        self._width = check_at_least(width, 2, "width")
        self._rolling = rolling

        self._buffer: List[Optional[X]] = [None] * (width + 1)
        self._read = 0
        self._write = 0
        self._buffered = 0

    def _fill(self) -> bool:
        while self._buffered < self._width:
            got = advance(self._source)
            if len(got) <= 0:
                return False
            self._buffer[self._write] = got[0]
            self._write = (self._write + 1) % len(self._buffer)
            self._buffered += 1
        return True

    @override
    def _produce(self) -> Tuple[ListSequence[X], ...]:
        if not self._fill():
            return _EMPTY

        size = len(self._buffer)
        window = [self._buffer[(self._read + i) % size] for i in range(self._width)]

        step = 1 if self._rolling else self._width
        for i in range(step):
            # Release references to elements that left the window.
            self._buffer[(self._read + i) % size] = None
        self._read = (self._read + step) % size
        self._buffered -= step

        return (ListSequence(window),)

    @override
    def try_split(self) -> Optional[Self]:
        prefix = self._split_source(self._source)
        if prefix is None:
            return None
        return type(self)(prefix, self._width, self._rolling)

    @override
    def estimate_size(self) -> int:
        if self._exhausted:
            return 0
        est = self._source.estimate_size()
        if est >= UNBOUNDED:
            return UNBOUNDED
        total = saturating_add(est, self._buffered)
        if self._rolling:
            return saturating_sub(total, self._width - 1)
        else:
            return total // self._width

    @override
    def properties(self) -> Properties:
        return self._source.properties().without_sorted().without_distinct()

    def __repr__(self) -> str:
        kind = "rolling" if self._rolling else "grouping"
        return f"WindowSequence({self._source!r}, {self._width}, {kind})"


@dataclass(frozen=True)
class WindowSummary:
    """Statistics over the numbers in one window.

    ```python
    >>> s = WindowSummary.of([1, 2, 6])
    >>> s.count, s.sum, s.min, s.max, s.average
    (3, 9, 1, 6, 3.0)
    ```

    """

    count: int
    sum: float
    min: float
    max: float

    @property
    def average(self) -> float:
        """Arithmetic mean."""
        return self.sum / self.count

    @classmethod
    def of(cls, values: Iterable[float]) -> "WindowSummary":
        """Summarize some numbers.

        :arg values: Numbers to summarize. Must not be empty.

        :returns: A summary.

        :raises ValueError: If there are no values.

        """
        values = list(values)
        if len(values) <= 0:
            msg = "can't summarize an empty window"
            raise ValueError(msg)
        return cls(
            count=len(values),
            sum=sum(values),
            min=min(values),
            max=max(values),
        )
