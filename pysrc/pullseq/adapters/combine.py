"""Consume several sources in lockstep, or one source repeatedly.

```python
>>> from pullseq.sequences import from_iterable
>>> a = from_iterable(["1", "2", "3", "4"])
>>> b = from_iterable(["11", "12", "13", "14"])
>>> WeavingSequence(a, b).to_list()
['1', '11', '2', '12', '3', '13', '4', '14']
```

Every input must be `ordered`; lockstep consumption means nothing
otherwise. None of the multi-source adapters can be split, since
there is no way to split all sources at the same position.

"""

from collections import deque
from typing import Any, Callable, Deque, List, Optional, Tuple, TypeVar

from typing_extensions import Self, override

from pullseq._utils import check_at_least, check_callable, f_repr
from pullseq.errors import ContractViolationError, InvalidArgumentError
from pullseq.properties import (
    UNBOUNDED,
    Properties,
    min_size,
    saturating_add,
    saturating_mul,
)
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

Y = TypeVar("Y")
"""Type of elements of a second source."""

R = TypeVar("R")
"""Type of combined elements."""


def _check_sources(sources: Tuple[PullSequence[X], ...]) -> List[PullSequence[X]]:
    if len(sources) < 2:
        msg = f"at least 2 sources are required; got {len(sources)}"
        raise InvalidArgumentError(msg)
    return [
        check_source(source, f"sources[{i}]", ordered=True)
        for i, source in enumerate(sources)
    ]


def _common_properties(sources: List[PullSequence[Any]]) -> Properties:
    props = sources[0].properties()
    for source in sources[1:]:
        props = props.intersect(source.properties())
    return props


class TraversingSequence(Adapter[ListSequence[X]]):
    """Bundle one element from each source per emission.

    Every source is pulled on each round. Stops as soon as any source
    is exhausted, except that if the very first round comes up short,
    a single empty bundle is emitted.

    ```python
    >>> from pullseq.sequences import empty, from_iterable
    >>> t = TraversingSequence(from_iterable([1, 2]), from_iterable("ab"))
    >>> [b.to_list() for b in t]
    [[1, 'a'], [2, 'b']]
    >>> [b.to_list() for b in TraversingSequence(empty(), empty())]
    [[]]
    ```

    :arg sources: At least 2 `ordered` sources.

    """

    def __init__(self, *sources: PullSequence[X]):
        super().__init__()
        self._sources = _check_sources(sources)
        self._rounds = 0
        self._done = False

    @override
    def _produce(self) -> Tuple[ListSequence[X], ...]:
        if self._done:
            return _EMPTY
        bundle: List[X] = []
        for source in self._sources:
            got = advance(source)
            if len(got) > 0:
                bundle.append(got[0])

        self._rounds += 1
        if len(bundle) == len(self._sources):
            return (ListSequence(bundle),)
        self._done = True
        if self._rounds == 1:
            return (ListSequence([]),)
        return _EMPTY

    @override
    def estimate_size(self) -> int:
        if self._done or self._exhausted:
            return 0
        est = min_size(*(source.estimate_size() for source in self._sources))
        if self._rounds == 0:
            return max(est, 1)
        return est

    @override
    def properties(self) -> Properties:
        return (
            _common_properties(self._sources)
            .without_sized()
            .without_sorted()
            .without_distinct()
        )


class WeavingSequence(Adapter[X]):
    """Interleave sources one element at a time.

    Each round pulls one element from every source, left to right,
    and emits them in that order. Stops at the first exhausted
    source; elements already pulled in that round are discarded.

    :arg sources: At least 2 `ordered` sources.

    """

    def __init__(self, *sources: PullSequence[X]):
        super().__init__()
        self._sources = _check_sources(sources)
        self._round: Deque[X] = deque()

    def _pull_round(self) -> bool:
        pulled: List[X] = []
        for source in self._sources:
            got = advance(source)
            if len(got) <= 0:
                return False
            pulled.append(got[0])
        self._round.extend(pulled)
        return True

    @override
    def _produce(self) -> Tuple[X, ...]:
        if len(self._round) <= 0 and not self._pull_round():
            return _EMPTY
        return (self._round.popleft(),)

    @override
    def estimate_size(self) -> int:
        if self._exhausted:
            return 0
        est = min_size(*(source.estimate_size() for source in self._sources))
        return saturating_add(
            saturating_mul(est, len(self._sources)), len(self._round)
        )

    @override
    def properties(self) -> Properties:
        return (
            _common_properties(self._sources)
            .without_sized()
            .without_sorted()
            .without_distinct()
        )


class ZippingSequence(Adapter[R]):
    """Combine two sources element by element.

    Stops when either source is exhausted.

    :arg first: `ordered` source of first arguments.

    :arg second: `ordered` source of second arguments.

    :arg zipper: Called with one element from each. Must not return
        `None`.

    """

    def __init__(
        self,
        first: PullSequence[X],
        second: PullSequence[Y],
        zipper: Callable[[X, Y], R],
    ):
        super().__init__()
        self._first = check_source(first, "first", ordered=True)
        self._second = check_source(second, "second", ordered=True)
        self._zipper = check_callable(zipper, "zipper")

    @override
    def _produce(self) -> Tuple[R, ...]:
        a = advance(self._first)
        if len(a) <= 0:
            return _EMPTY
        b = advance(self._second)
        if len(b) <= 0:
            return _EMPTY

        r = self._zipper(a[0], b[0])
        if r is None:
            msg = f"zipper {f_repr(self._zipper)} must not return `None`"
            raise ContractViolationError(msg)
        return (r,)

    @override
    def estimate_size(self) -> int:
        if self._exhausted:
            return 0
        return min_size(self._first.estimate_size(), self._second.estimate_size())

    @override
    def properties(self) -> Properties:
        return (
            self._first.properties()
            .intersect(self._second.properties())
            .without_sorted()
            .without_distinct()
        )


class CyclingSequence(Adapter[X]):
    """Repeat a finite source forever.

    The source is read to the end on the first advance and kept in
    memory. An empty source gives an empty cycle rather than looping
    forever.

    :arg source: `ordered`, finite source.

    """

    def __init__(self, source: PullSequence[X]):
        super().__init__()
        self._source = check_source(source, ordered=True)
        self._items: Optional[List[X]] = None
        self._pos = 0

    @override
    def _produce(self) -> Tuple[X, ...]:
        if self._items is None:
            self._items = self._source.to_list()
        if len(self._items) <= 0:
            return _EMPTY
        x = self._items[self._pos]
        self._pos = (self._pos + 1) % len(self._items)
        return (x,)

    @override
    def estimate_size(self) -> int:
        if self._exhausted:
            return 0
        return UNBOUNDED

    @override
    def properties(self) -> Properties:
        return self._source.properties().only_ordered()


class RepeatingSequence(Adapter[X]):
    """Emit each element of a source several times in a row.

    ```python
    >>> from pullseq.sequences import from_iterable
    >>> RepeatingSequence(from_iterable("ab"), 3).to_list()
    ['a', 'a', 'a', 'b', 'b', 'b']
    ```

    :arg source: `ordered` and `sized` source.

    :arg factor: How many times to emit each element. Must be at
        least 2.

    """

    def __init__(self, source: PullSequence[X], factor: int):
        super().__init__()
        self._source = check_source(source, ordered=True, sized=True)
        self._factor = check_at_least(factor, 2, "factor")
        self._current: Tuple[X, ...] = _EMPTY
        self._remaining = 0

    @override
    def _produce(self) -> Tuple[X, ...]:
        if self._remaining > 0:
            self._remaining -= 1
            return self._current
        got = advance(self._source)
        if len(got) > 0:
            self._current = got
            self._remaining = self._factor - 1
        return got

    @override
    def try_split(self) -> Optional[Self]:
        prefix = self._split_source(self._source)
        if prefix is None:
            return None
        return type(self)(prefix, self._factor)

    @override
    def estimate_size(self) -> int:
        if self._exhausted:
            return 0
        return saturating_add(
            saturating_mul(self._source.estimate_size(), self._factor),
            self._remaining,
        )

    @override
    def properties(self) -> Properties:
        return self._source.properties().without_sorted().without_distinct()
