"""Segment a sequence into groups delimited by predicates.

```python
>>> from pullseq.sequences import from_iterable
>>> src = from_iterable(["a", "<", "b", "c", ">", "d", "<", "e"])
>>> groups = GroupingOnGatingSequence(
...     src, lambda x: x == "<", False, lambda x: x == ">", False
... )
>>> [g.to_list() for g in groups]
[['b', 'c'], ['e']]
```

"""

from abc import abstractmethod
from enum import Enum
from typing import Callable, List, Optional, Tuple, TypeVar

from typing_extensions import Self, override

from pullseq._utils import check_callable
from pullseq.properties import Properties, saturating_add
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


class GateState(Enum):
    """Where a grouping adapter is in its current segment."""

    WAITING = "waiting"
    """Looking for the start of a segment. Elements are ignored."""

    OPEN = "open"
    """Collecting elements into the current segment."""

    READY = "ready"
    """The current segment is closed and should be emitted."""


class _GroupingSequence(Adapter[ListSequence[X]]):
    def __init__(self, source: PullSequence[X]):
        super().__init__()
        self._source = check_source(source, ordered=True)
        self._state = GateState.WAITING
        self._group: List[X] = []

    def _take(self) -> ListSequence[X]:
        # Swap rather than clear; the emitted segment keeps the list.
        group, self._group = self._group, []
        return ListSequence(group)

    @override
    def try_split(self) -> Optional[Self]:
        prefix = self._split_source(self._source)
        if prefix is None:
            return None
        return self._rebuild(prefix)

    @abstractmethod
    def _rebuild(self, source: PullSequence[X]) -> Self:
        ...

    @override
    def estimate_size(self) -> int:
        if self._exhausted:
            return 0
        pending = 1 if len(self._group) > 0 else 0
        return saturating_add(self._source.estimate_size(), pending)

    @override
    def properties(self) -> Properties:
        return (
            self._source.properties()
            .without_sorted()
            .without_sized()
            .without_distinct()
        )


class GroupingOnGatingSequence(_GroupingSequence[X]):
    """Emit the segments between an opening and a closing element.

    An element matching `open` while a segment is already open is just
    collected. An element matching `close` while waiting for a
    segment is ignored. Each element makes at most one state
    transition, so an element that opens a segment is never also
    tested against `close`.

    Empty segments are never emitted. If the source runs out while a
    segment is open, what was collected so far is emitted.

    :arg source: Source to segment. Must be `ordered`.

    :arg open: Called on each element while waiting.

    :arg open_included: Whether the opening element starts the
        segment.

    :arg close: Called on each element while collecting.

    :arg close_included: Whether the closing element ends the segment.

    """

    def __init__(
        self,
        source: PullSequence[X],
        open: Callable[[X], bool],
        open_included: bool,
        close: Callable[[X], bool],
        close_included: bool,
    ):
        super().__init__(source)
        self._open = check_callable(open, "open")
        self._open_included = open_included
        self._close = check_callable(close, "close")
        self._close_included = close_included

    @override
    def _rebuild(self, source: PullSequence[X]) -> Self:
        return type(self)(
            source, self._open, self._open_included, self._close, self._close_included
        )

    @override
    def _produce(self) -> Tuple[ListSequence[X], ...]:
        while True:
            got = advance(self._source)
            if len(got) <= 0:
                if len(self._group) > 0:
                    return (self._take(),)
                return _EMPTY

            x = got[0]
            if self._state is GateState.WAITING:
                if self._open(x):
                    self._state = GateState.OPEN
                    if self._open_included:
                        self._group.append(x)
            elif self._close(x):
                if self._close_included:
                    self._group.append(x)
                self._state = GateState.READY
            else:
                self._group.append(x)

            if self._state is GateState.READY:
                self._state = GateState.WAITING
                if len(self._group) > 0:
                    return (self._take(),)


class GroupingOnSplittingSequence(_GroupingSequence[X]):
    """Split a sequence at every element matching a predicate.

    Each splitting element closes the current segment and opens the
    next. Elements before the first splitting element are ignored.

    A segment closed by a split is emitted even if it is empty, which
    happens for two adjacent splitting elements when they are not
    included. The last segment is emitted only if it is not empty.

    :arg source: Source to segment. Must be `ordered`.

    :arg splitter: Called on each element.

    :arg included: Whether the splitting element leads the segment it
        opens.

    """

    def __init__(
        self,
        source: PullSequence[X],
        splitter: Callable[[X], bool],
        included: bool,
    ):
        super().__init__(source)
        self._splitter = check_callable(splitter, "splitter")
        self._included = included

    @override
    def _rebuild(self, source: PullSequence[X]) -> Self:
        return type(self)(source, self._splitter, self._included)

    @override
    def _produce(self) -> Tuple[ListSequence[X], ...]:
        while True:
            got = advance(self._source)
            if len(got) <= 0:
                if len(self._group) > 0:
                    return (self._take(),)
                return _EMPTY

            x = got[0]
            if not self._splitter(x):
                if self._state is GateState.OPEN:
                    self._group.append(x)
                continue

            ready = self._state is GateState.OPEN
            emit = self._take() if ready else None
            self._state = GateState.OPEN
            if self._included:
                self._group.append(x)
            if emit is not None:
                return (emit,)
