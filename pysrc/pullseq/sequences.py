"""The pull-based sequence contract and the basic sources.

A {py:obj}`PullSequence` produces its elements one at a time, only when
asked. Each call to {py:obj}`PullSequence.try_advance` either hands
exactly one element to a callback and returns `True`, or returns
`False` without calling it. Once a sequence returns `False` it must
keep doing so.

```python
>>> seq = ListSequence([1, 2, 3])
>>> seen = []
>>> seq.try_advance(seen.append)
True
>>> seen
[1]
>>> list(seq)
[2, 3]
>>> seq.try_advance(seen.append)
False
```

Sequences can optionally be split once before consumption begins, so
that each half can be consumed independently; concatenating the
prefix returned by {py:obj}`PullSequence.try_split` with what remains
in the split sequence reproduces the unsplit one.

"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence as ABCSequence
from collections.abc import Set as ABCSet
from typing import (
    Any,
    Callable,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)

from typing_extensions import override

from pullseq.errors import ContractViolationError, InvalidArgumentError
from pullseq.properties import (
    NONE,
    ORDERED,
    ORDERED_SIZED,
    UNBOUNDED,
    Properties,
)

__all__ = [
    "Adapter",
    "IterSequence",
    "ListSequence",
    "PullSequence",
    "advance",
    "check_source",
    "empty",
    "from_iterable",
]

logger = logging.getLogger(__name__)

X = TypeVar("X")
"""Type of elements of a sequence."""

Y = TypeVar("Y")
"""Type of elements produced by an adapter."""


_EMPTY: Tuple = tuple()


class PullSequence(ABC, Generic[X]):
    """A lazily produced sequence of elements.

    Subclass this to write a new source or adapter. Most adapters
    should subclass {py:obj}`Adapter` instead, which implements the
    advance protocol once for you.

    """

    @abstractmethod
    def try_advance(self, action: Callable[[X], Any]) -> bool:
        """Produce at most one element.

        :arg action: Called with the next element, if there is one.
            Called exactly once when this returns `True`, and never
            when it returns `False`.

        :returns: If an element was produced.

        """
        ...

    def try_split(self) -> Optional["PullSequence[X]"]:
        """Partition off a prefix of this sequence.

        Only guaranteed to be attempted before the first advance.
        Afterwards implementations are free to refuse.

        :returns: A new sequence holding a prefix of the remaining
            elements, which this sequence will no longer produce, or
            `None` if this sequence can't be split right now.

        """
        return None

    @abstractmethod
    def estimate_size(self) -> int:
        """Estimate how many elements remain.

        :returns: The exact count if the `sized` property is set,
            otherwise an upper bound, or
            {py:obj}`~pullseq.properties.UNBOUNDED`.

        """
        ...

    @abstractmethod
    def properties(self) -> Properties:
        """Guarantees this sequence makes about its elements."""
        ...

    def __iter__(self) -> Iterator[X]:
        while True:
            got = advance(self)
            if len(got) <= 0:
                return
            yield got[0]

    def to_list(self) -> List[X]:
        """Drain all remaining elements into a list."""
        return list(self)


def advance(source: PullSequence[X]) -> Tuple[X, ...]:
    """Pull a single element out of a sequence.

    Checks that the sequence honors the single-step advance protocol
    while doing so.

    :arg source: Sequence to advance.

    :returns: A 1-tuple with the element, or an empty tuple if the
        sequence is exhausted.

    :raises ContractViolationError: If the source called back more
        than once, or its return value disagreed with whether it
        called back.

    """
    slot: List[X] = []

    def _accept(x: X) -> None:
        if len(slot) > 0:
            msg = (
                f"{type(source).__name__} invoked its advance callback "
                "more than once for a single call"
            )
            raise ContractViolationError(msg)
        slot.append(x)

    advanced = source.try_advance(_accept)
    if advanced != (len(slot) > 0):
        msg = (
            f"{type(source).__name__}.try_advance returned {advanced!r} "
            f"but invoked its callback {len(slot)} times"
        )
        raise ContractViolationError(msg)
    return tuple(slot)


def check_source(
    source: Any,
    name: str = "source",
    ordered: bool = False,
    sized: bool = False,
) -> PullSequence:
    """Raise if a source can't be adapted.

    :arg source: Value passed in as a source.

    :arg name: Argument name, for the error message.

    :arg ordered: Require the `ordered` property.

    :arg sized: Require the `sized` property.

    :returns: The source unchanged.

    :raises InvalidArgumentError: If the source is missing, is not a
        {py:obj}`PullSequence`, or lacks a required property.

    """
    if source is None:
        msg = f"`{name}` must not be `None`"
        raise InvalidArgumentError(msg)
    if not isinstance(source, PullSequence):
        msg = (
            f"`{name}` must be a `PullSequence`; "
            f"got a {type(source)!r} instead; "
            "use `from_iterable` to wrap a collection"
        )
        raise InvalidArgumentError(msg)
    props = source.properties()
    if ordered and not props.ordered:
        msg = f"`{name}` must be ordered; got {props!r}"
        raise InvalidArgumentError(msg)
    if sized and not props.sized:
        msg = f"`{name}` must be sized; got {props!r}"
        raise InvalidArgumentError(msg)
    return source


class Adapter(PullSequence[Y]):
    """Base class for sequences that compute elements on demand.

    Subclasses implement {py:obj}`_produce`, which returns either a
    1-tuple with the next element or an empty tuple when there are no
    more. This class turns that into the callback protocol, so the
    callback is invoked at most once per advance. It also latches
    exhaustion: once `_produce` comes up empty it is never called
    again.

    """

    def __init__(self) -> None:
        self._started = False
        self._exhausted = False

    @abstractmethod
    def _produce(self) -> Tuple[Y, ...]:
        ...

    @override
    def try_advance(self, action: Callable[[Y], Any]) -> bool:
        if self._exhausted:
            return False
        self._started = True
        out = self._produce()
        if len(out) > 0:
            action(out[0])
            return True
        self._exhausted = True
        return False

    def _split_source(self, source: PullSequence) -> Optional[PullSequence]:
        # Delegated splits are only sound while no adapter state has
        # been built up.
        if self._started:
            logger.debug(f"refusing to split started {type(self).__name__}")
            return None
        prefix = source.try_split()
        if prefix is not None:
            logger.debug(f"split {type(self).__name__} at its source")
        return prefix


class ListSequence(PullSequence[X]):
    """Sequence over an indexable collection.

    Always `sized`, and `ordered` unless `properties` says otherwise.
    Splits in half at any time.

    :arg items: Collection to read. Not copied; don't mutate it while
        this sequence is in use.

    :arg properties: Extra properties of the items, like `sorted`.
        Defaults to just `ordered` and `sized`.

    """

    def __init__(
        self,
        items: Sequence[X],
        properties: Optional[Properties] = None,
        start: int = 0,
        stop: Optional[int] = None,
    ):
        self._items = items
        self._props = (
            ORDERED_SIZED if properties is None else properties.with_sized()
        )
        self._pos = start
        self._stop = len(items) if stop is None else stop

    @override
    def try_advance(self, action: Callable[[X], Any]) -> bool:
        if self._pos < self._stop:
            x = self._items[self._pos]
            self._pos += 1
            action(x)
            return True
        return False

    @override
    def try_split(self) -> Optional["ListSequence[X]"]:
        remaining = self._stop - self._pos
        if remaining < 2:
            return None
        mid = self._pos + remaining // 2
        prefix = ListSequence(self._items, self._props, self._pos, mid)
        self._pos = mid
        return prefix

    @override
    def estimate_size(self) -> int:
        return self._stop - self._pos

    @override
    def properties(self) -> Properties:
        return self._props

    def __repr__(self) -> str:
        return f"ListSequence(<{self._stop - self._pos} remaining>)"


class IterSequence(PullSequence[X]):
    """Sequence over any iterable.

    Size is unknown, and it can't be split.

    :arg iterable: Items to read. Iterated lazily.

    :arg properties: Properties of the items. Defaults to just
        `ordered`.

    """

    def __init__(self, iterable: Iterable[X], properties: Optional[Properties] = None):
        self._it = iter(iterable)
        self._props = (
            ORDERED if properties is None else properties.without_sized()
        )
        self._done = False

    @override
    def try_advance(self, action: Callable[[X], Any]) -> bool:
        if self._done:
            return False
        try:
            x = next(self._it)
        except StopIteration:
            # Iterators aren't required to stay exhausted.
            self._done = True
            return False
        action(x)
        return True

    @override
    def estimate_size(self) -> int:
        return 0 if self._done else UNBOUNDED

    @override
    def properties(self) -> Properties:
        return self._props


def from_iterable(
    iterable: Iterable[X], *, sorted: bool = False, distinct: bool = False
) -> PullSequence[X]:
    """Wrap a native collection or iterator.

    ```python
    >>> from_iterable([3, 1, 2]).properties()
    Properties(ordered=True, sized=True, sorted=False, distinct=False)
    >>> from_iterable({1}).properties()
    Properties(ordered=False, sized=True, sorted=False, distinct=True)
    ```

    Sets become unordered, and anything that isn't a sequence or a set
    is read lazily with unknown size.

    :arg iterable: Items.

    :arg sorted: Declare the items are already sorted.

    :arg distinct: Declare the items have no duplicates.

    :returns: A sequence of those items.

    """
    if iterable is None:
        msg = "`iterable` must not be `None`"
        raise InvalidArgumentError(msg)
    props = Properties(sorted=sorted, distinct=distinct)
    if isinstance(iterable, ABCSequence):
        return ListSequence(iterable, props.with_ordered().with_sized())
    elif isinstance(iterable, ABCSet):
        return ListSequence(
            list(iterable), Properties(sized=True, distinct=True)
        )
    else:
        if not isinstance(iterable, Iterable):
            msg = f"`iterable` must be iterable; got a {type(iterable)!r} instead"
            raise InvalidArgumentError(msg)
        return IterSequence(iterable, props.with_ordered())


def empty() -> PullSequence[Any]:
    """A sequence with no elements."""
    return ListSequence(_EMPTY, NONE.with_sorted().with_distinct())
