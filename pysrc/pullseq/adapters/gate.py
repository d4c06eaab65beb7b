"""Predicate-driven truncation of a sequence.

These adapters pass elements through unchanged but cut the sequence
short at the front or the back. Once they reach their terminal state
they never change their mind.

"""

from typing import Callable, Tuple, TypeVar

from typing_extensions import override

from pullseq._utils import check_at_least, check_callable
from pullseq.properties import Properties, min_size, saturating_sub
from pullseq.sequences import _EMPTY, Adapter, PullSequence, advance, check_source

X = TypeVar("X")
"""Type of source elements."""


class GatingSequence(Adapter[X]):
    """Skip elements until a predicate first holds.

    The element that opens the gate is emitted, as is every element
    after it.

    :arg source: Source to gate.

    :arg gate: Called on each element until it returns `True`.

    """

    def __init__(self, source: PullSequence[X], gate: Callable[[X], bool]):
        super().__init__()
        self._source = check_source(source)
        self._gate = check_callable(gate, "gate")
        self._open = False

    @override
    def _produce(self) -> Tuple[X, ...]:
        while not self._open:
            got = advance(self._source)
            if len(got) <= 0:
                return _EMPTY
            if self._gate(got[0]):
                self._open = True
                return got
        return advance(self._source)

    @override
    def estimate_size(self) -> int:
        return 0 if self._exhausted else self._source.estimate_size()

    @override
    def properties(self) -> Properties:
        return self._source.properties().without_sized()


class InterruptingSequence(Adapter[X]):
    """Pass elements through until a predicate first holds.

    The element that trips the interruptor is not emitted, and the
    source is never advanced again.

    :arg source: Source to interrupt.

    :arg interruptor: Called on each element.

    """

    def __init__(self, source: PullSequence[X], interruptor: Callable[[X], bool]):
        super().__init__()
        self._source = check_source(source)
        self._interruptor = check_callable(interruptor, "interruptor")

    @override
    def _produce(self) -> Tuple[X, ...]:
        got = advance(self._source)
        if len(got) > 0 and self._interruptor(got[0]):
            return _EMPTY
        return got

    @override
    def estimate_size(self) -> int:
        return 0 if self._exhausted else self._source.estimate_size()

    @override
    def properties(self) -> Properties:
        return self._source.properties().without_sized()


class LimitingSequence(Adapter[X]):
    """Pass through at most some number of elements.

    Once the limit is reached the source is not advanced again, so
    this is safe to put after an infinite sequence.

    :arg source: Source to limit.

    :arg limit: Maximum number of elements. `0` gives an empty
        sequence.

    :raises InvalidArgumentError: If `limit` is negative.

    """

    def __init__(self, source: PullSequence[X], limit: int):
        super().__init__()
        self._source = check_source(source)
        self._limit = check_at_least(limit, 0, "limit")
        self._count = 0

    @override
    def _produce(self) -> Tuple[X, ...]:
        if self._count >= self._limit:
            return _EMPTY
        got = advance(self._source)
        if len(got) > 0:
            self._count += 1
        return got

    @override
    def estimate_size(self) -> int:
        if self._exhausted:
            return 0
        return min_size(
            saturating_sub(self._limit, self._count), self._source.estimate_size()
        )

    @override
    def properties(self) -> Properties:
        return self._source.properties()
