"""Functions that wire sources into adapters.

Each function validates its arguments eagerly and returns a new
{py:obj}`~pullseq.sequences.PullSequence`. Nothing is read from the
source until the result is advanced.

```python
>>> import pullseq.operators as op
>>> from pullseq.sequences import from_iterable
>>> src = from_iterable([1, 2, 3, 4, 5])
>>> op.window_reduce(src, 2, sum).to_list()
[3, 5, 7, 9]
```

Sequences of sequences, like the result of {py:obj}`roll`, emit
{py:obj}`~pullseq.sequences.ListSequence`s, which can be turned back
into lists with `to_list()`.

"""

import logging
from typing import Any, Callable, Optional, Tuple, TypeVar

from pullseq._utils import Comparator, check_callable, natural_order
from pullseq.adapters.accumulate import AccumulatingEntriesSequence, AccumulatingSequence
from pullseq.adapters.combine import (
    CyclingSequence,
    RepeatingSequence,
    TraversingSequence,
    WeavingSequence,
    ZippingSequence,
)
from pullseq.adapters.cross import CrossProductPolicy, CrossProductSequence
from pullseq.adapters.gate import GatingSequence, InterruptingSequence, LimitingSequence
from pullseq.adapters.grouping import (
    GroupingOnGatingSequence,
    GroupingOnSplittingSequence,
)
from pullseq.adapters.mapping import MappingSequence, ValidatingSequence
from pullseq.adapters.topk import (
    FilteringAllMaxSequence,
    FilteringMaxKeysSequence,
    FilteringMaxValuesSequence,
)
from pullseq.adapters.window import WindowSequence, WindowSummary
from pullseq.sequences import ListSequence, PullSequence, check_source

__all__ = [
    "accumulate",
    "accumulate_keyed",
    "cross_product",
    "cross_product_naturally_ordered",
    "cross_product_no_self_pairs",
    "cross_product_ordered",
    "cycle",
    "filter_all_max",
    "filter_max_keys",
    "filter_max_values",
    "gate",
    "group",
    "group_on_gate",
    "group_on_split",
    "interrupt",
    "limit_at_most",
    "repeat",
    "roll",
    "shifting_window_average",
    "shifting_window_summarize",
    "traverse",
    "validate",
    "weave",
    "window_reduce",
    "zip",
]

logger = logging.getLogger(__name__)

X = TypeVar("X")
"""Type of source elements."""

Y = TypeVar("Y")
"""Type of elements of a second source."""

R = TypeVar("R")
"""Type of derived elements."""

K = TypeVar("K")
"""Type of keys."""

V = TypeVar("V")
"""Type of values."""


def _identity(x: X) -> X:
    return x


def cycle(source: PullSequence[X]) -> PullSequence[X]:
    """Repeat a finite source forever.

    ```python
    >>> import pullseq.operators as op
    >>> from pullseq.sequences import from_iterable
    >>> op.limit_at_most(op.cycle(from_iterable("ab")), 5).to_list()
    ['a', 'b', 'a', 'b', 'a']
    ```

    The whole source is read into memory on the first advance, so it
    must be finite. An empty source gives an empty sequence.

    :arg source: `ordered` source.

    :returns: An infinite sequence.

    """
    logger.debug(f"building cycle over {source!r}")
    return CyclingSequence(source)


def group(source: PullSequence[X], width: int) -> PullSequence[ListSequence[X]]:
    """Chop a source into consecutive chunks of `width` elements.

    ```python
    >>> import pullseq.operators as op
    >>> from pullseq.sequences import from_iterable
    >>> src = from_iterable([1, 2, 3, 4, 5, 6, 7])
    >>> [chunk.to_list() for chunk in op.group(src, 3)]
    [[1, 2, 3], [4, 5, 6]]
    ```

    Only full chunks are emitted. Trailing elements that don't fill a
    chunk are dropped.

    :arg source: `ordered` source.

    :arg width: Elements per chunk. Must be at least 2.

    :returns: A sequence of chunks.

    """
    logger.debug(f"building group of width {width} over {source!r}")
    return WindowSequence(source, width, rolling=False)


def group_on_gate(
    source: PullSequence[X],
    open: Callable[[X], bool],
    close: Callable[[X], bool],
    open_included: bool = True,
    close_included: bool = True,
) -> PullSequence[ListSequence[X]]:
    """Collect the segments between opening and closing elements.

    ```python
    >>> import pullseq.operators as op
    >>> from pullseq.sequences import from_iterable
    >>> src = from_iterable("x(ab)y(c)(")
    >>> is_open = lambda c: c == "("
    >>> is_close = lambda c: c == ")"
    >>> groups = op.group_on_gate(src, is_open, is_close)
    >>> ["".join(g) for g in groups]
    ['(ab)', '(c)', '(']
    ```

    Elements outside a segment are dropped. A segment still open when
    the source runs out is emitted as is, and empty segments are never
    emitted.

    :arg source: `ordered` source.

    :arg open: Starts a segment when it returns `True`.

    :arg close: Ends the current segment when it returns `True`.

    :arg open_included: Whether the opening element is part of the
        segment. Defaults to `True`.

    :arg close_included: Whether the closing element is part of the
        segment. Defaults to `True`.

    :returns: A sequence of segments.

    """
    logger.debug(f"building gated grouping over {source!r}")
    return GroupingOnGatingSequence(source, open, open_included, close, close_included)


def group_on_split(
    source: PullSequence[X],
    splitter: Callable[[X], bool],
    included: bool = True,
) -> PullSequence[ListSequence[X]]:
    """Start a new segment at every element matching a predicate.

    ```python
    >>> import pullseq.operators as op
    >>> from pullseq.sequences import from_iterable
    >>> src = from_iterable(["1", "o", "o", "2", "3", "o", "4"])
    >>> [g.to_list() for g in op.group_on_split(src, lambda x: x == "o", False)]
    [[], ['2', '3'], ['4']]
    ```

    Elements before the first splitting element are dropped.

    :arg source: `ordered` source.

    :arg splitter: Splits the source when it returns `True`.

    :arg included: Whether the splitting element leads the next
        segment. Defaults to `True`.

    :returns: A sequence of segments.

    """
    logger.debug(f"building split grouping over {source!r}")
    return GroupingOnSplittingSequence(source, splitter, included)


def repeat(source: PullSequence[X], factor: int) -> PullSequence[X]:
    """Emit each element `factor` times in a row.

    :arg source: `ordered` and `sized` source.

    :arg factor: Must be at least 2.

    :returns: A sequence `factor` times as long.

    """
    logger.debug(f"building repeat x{factor} over {source!r}")
    return RepeatingSequence(source, factor)


def roll(source: PullSequence[X], width: int) -> PullSequence[ListSequence[X]]:
    """Emit every contiguous window of `width` elements.

    ```python
    >>> import pullseq.operators as op
    >>> from pullseq.sequences import from_iterable
    >>> [w.to_list() for w in op.roll(from_iterable([1, 2, 3, 4]), 2)]
    [[1, 2], [2, 3], [3, 4]]
    ```

    A finite source of length `L` gives `L - width + 1` windows, or
    none if it is shorter than `width`.

    :arg source: `ordered` source.

    :arg width: Elements per window. Must be at least 2.

    :returns: A sequence of windows.

    """
    logger.debug(f"building roll of width {width} over {source!r}")
    return WindowSequence(source, width, rolling=True)


def traverse(*sources: PullSequence[X]) -> PullSequence[ListSequence[X]]:
    """Bundle the next element of every source together.

    Stops when the shortest source runs out. If any source is empty
    from the start, a single empty bundle is emitted.

    :arg sources: At least 2 `ordered` sources.

    :returns: A sequence of bundles, one element per source.

    """
    logger.debug(f"building traverse over {len(sources)} sources")
    return TraversingSequence(*sources)


def weave(*sources: PullSequence[X]) -> PullSequence[X]:
    """Interleave sources one element at a time.

    Stops when the shortest source runs out; a partially pulled round
    is discarded so every source contributes equally.

    :arg sources: At least 2 `ordered` sources.

    :returns: The interleaved sequence.

    """
    logger.debug(f"building weave over {len(sources)} sources")
    return WeavingSequence(*sources)


def zip(  # noqa: A001
    first: PullSequence[X], second: PullSequence[Y], zipper: Callable[[X, Y], R]
) -> PullSequence[R]:
    """Combine two sources pairwise.

    ```python
    >>> import pullseq.operators as op
    >>> from pullseq.sequences import from_iterable
    >>> op.zip(from_iterable([1, 2, 3]), from_iterable([10, 20]), max).to_list()
    [10, 20]
    ```

    :arg first: `ordered` source.

    :arg second: `ordered` source.

    :arg zipper: Called with one element of each. Returning `None`
        raises {py:obj}`~pullseq.errors.ContractViolationError`.

    :returns: A sequence as long as the shorter source.

    """
    logger.debug(f"building zip of {first!r} and {second!r}")
    return ZippingSequence(first, second, zipper)


def validate(
    source: PullSequence[X],
    validator: Callable[[X], bool],
    if_valid: Callable[[X], R] = _identity,
    if_invalid: Callable[[X], R] = _identity,
) -> PullSequence[R]:
    """Map elements depending on whether they pass a check.

    ```python
    >>> import pullseq.operators as op
    >>> from pullseq.sequences import from_iterable
    >>> src = from_iterable(["1", "x", "3"])
    >>> op.validate(src, str.isdigit, int, lambda s: "?").to_list()
    [1, '?', 3]
    ```

    To only replace the elements that fail, pass `if_invalid` by
    name.

    ```python
    >>> src = from_iterable(["1", "x", "3"])
    >>> op.validate(src, str.isdigit, if_invalid=lambda s: "?").to_list()
    ['1', '?', '3']
    ```

    :arg source: Source to check.

    :arg validator: Called on each element.

    :arg if_valid: Called on elements that pass. Defaults to passing
        them through unchanged.

    :arg if_invalid: Called on elements that fail. Defaults to passing
        them through unchanged.

    :returns: A sequence of mapped elements.

    """
    logger.debug(f"building validate over {source!r}")
    return ValidatingSequence(source, validator, if_valid, if_invalid)


def interrupt(
    source: PullSequence[X], interruptor: Callable[[X], bool]
) -> PullSequence[X]:
    """Stop at the first element matching a predicate.

    ```python
    >>> import pullseq.operators as op
    >>> from pullseq.sequences import from_iterable
    >>> op.interrupt(from_iterable([1, 2, 9, 3]), lambda x: x > 5).to_list()
    [1, 2]
    ```

    :arg source: Source to interrupt.

    :arg interruptor: The first element it returns `True` for, and
        every element after, is dropped.

    :returns: A prefix of the source.

    """
    logger.debug(f"building interrupt over {source!r}")
    return InterruptingSequence(source, interruptor)


def gate(source: PullSequence[X], gate: Callable[[X], bool]) -> PullSequence[X]:
    """Drop elements until the first one matching a predicate.

    ```python
    >>> import pullseq.operators as op
    >>> from pullseq.sequences import from_iterable
    >>> op.gate(from_iterable([1, 2, 9, 3]), lambda x: x > 5).to_list()
    [9, 3]
    ```

    :arg source: Source to gate.

    :arg gate: The first element it returns `True` for, and every
        element after, is kept.

    :returns: A suffix of the source.

    """
    logger.debug(f"building gate over {source!r}")
    return GatingSequence(source, gate)


def limit_at_most(source: PullSequence[X], limit: int) -> PullSequence[X]:
    """Keep at most the first `limit` elements.

    :arg source: Source to limit. May be infinite.

    :arg limit: Must not be negative.

    :returns: A prefix of the source.

    """
    logger.debug(f"building limit of {limit} over {source!r}")
    return LimitingSequence(source, limit)


def accumulate(source: PullSequence[X], op: Callable[[X, X], X]) -> PullSequence[X]:
    """Emit the running reduction of a source.

    ```python
    >>> import operator
    >>> import pullseq.operators as op
    >>> from pullseq.sequences import from_iterable
    >>> op.accumulate(from_iterable([1, 2, 3, 4]), operator.mul).to_list()
    [1, 2, 6, 24]
    ```

    :arg source: `ordered` source.

    :arg op: Combines the result so far with the next element.

    :returns: A sequence of partial results.

    """
    logger.debug(f"building accumulate over {source!r}")
    return AccumulatingSequence(source, op)


def accumulate_keyed(
    source: PullSequence[Tuple[K, V]], op: Callable[[V, V], V]
) -> PullSequence[Tuple[K, V]]:
    """Running reduction over the values of `(key, value)` pairs.

    Each pair is re-emitted with its value replaced by the running
    result over all values so far.

    :arg source: `ordered` source of 2-tuples.

    :arg op: Combines the result so far with the next value.

    :returns: A sequence of `(key, partial_result)` 2-tuples.

    """
    logger.debug(f"building keyed accumulate over {source!r}")
    return AccumulatingEntriesSequence(source, op)


def cross_product(source: PullSequence[X]) -> PullSequence[Tuple[X, X]]:
    """Every ordered pair of elements, self-pairs included.

    :arg source: `ordered` source of `n` elements.

    :returns: A sequence of `n * n` 2-tuples.

    """
    logger.debug(f"building full cross product over {source!r}")
    return CrossProductSequence(source, CrossProductPolicy.full())


def cross_product_no_self_pairs(source: PullSequence[X]) -> PullSequence[Tuple[X, X]]:
    """Every ordered pair of elements at different positions.

    :arg source: `ordered` source of `n` elements.

    :returns: A sequence of `n * (n - 1)` 2-tuples.

    """
    logger.debug(f"building cross product without self pairs over {source!r}")
    return CrossProductSequence(source, CrossProductPolicy.no_self_pairs())


def cross_product_ordered(
    source: PullSequence[X], comparator: Comparator[X]
) -> PullSequence[Tuple[X, X]]:
    """Each unordered pair once, lower ranked element first.

    ```python
    >>> import pullseq.operators as op
    >>> from pullseq._utils import natural_order
    >>> from pullseq.sequences import from_iterable
    >>> op.cross_product_ordered(from_iterable([2, 1, 3]), natural_order).to_list()
    [(1, 2), (2, 3), (1, 3)]
    ```

    :arg source: `ordered` source of `n` elements.

    :arg comparator: Ranks elements. Pairs it ties are skipped.

    :returns: A sequence of at most `n * (n - 1) / 2` 2-tuples.

    """
    logger.debug(f"building ordered cross product over {source!r}")
    return CrossProductSequence(source, CrossProductPolicy.ordered(comparator))


def cross_product_naturally_ordered(
    source: PullSequence[X],
) -> PullSequence[Tuple[X, X]]:
    """{py:obj}`cross_product_ordered` using `<` and `>`."""
    return cross_product_ordered(source, natural_order)


def filter_all_max(
    source: PullSequence[X], comparator: Comparator[X] = natural_order
) -> PullSequence[X]:
    """Keep every element tied with the maximum.

    ```python
    >>> import pullseq.operators as op
    >>> from pullseq.sequences import from_iterable
    >>> words = from_iterable(["hi", "hey", "yo", "sup"])
    >>> by_len = lambda a, b: len(a) - len(b)
    >>> op.filter_all_max(words, by_len).to_list()
    ['hey', 'sup']
    ```

    Drains the source on the first advance.

    :arg source: Source to filter. Must be finite.

    :arg comparator: Defines the maximum. Defaults to comparing with
        `<` and `>`.

    :returns: The maximal elements in encounter order.

    """
    logger.debug(f"building all-max filter over {source!r}")
    return FilteringAllMaxSequence(source, comparator)


def filter_max_keys(
    source: PullSequence[X], n: int, comparator: Comparator[X] = natural_order
) -> PullSequence[X]:
    """Keep the `n` largest distinct elements, largest first.

    Elements the comparator ties count once. Drains the source on the
    first advance.

    :arg source: Source to filter. Must be finite.

    :arg n: Must be at least 2.

    :arg comparator: Defines the order. Defaults to comparing with `<`
        and `>`.

    :returns: At most `n` elements in decreasing order.

    """
    logger.debug(f"building max-{n} keys filter over {source!r}")
    return FilteringMaxKeysSequence(source, n, comparator)


def filter_max_values(
    source: PullSequence[X], n: int, comparator: Comparator[X] = natural_order
) -> PullSequence[X]:
    """Keep every element tied with one of the `n` largest.

    Output is grouped largest first, and can hold more than `n`
    elements. Drains the source on the first advance.

    :arg source: Source to filter. Must be finite.

    :arg n: Number of distinct values to keep. Must be at least 2.

    :arg comparator: Defines the order. Defaults to comparing with `<`
        and `>`.

    :returns: The kept elements in decreasing order.

    """
    logger.debug(f"building max-{n} values filter over {source!r}")
    return FilteringMaxValuesSequence(source, n, comparator)


def window_reduce(
    source: PullSequence[X],
    width: int,
    reducer: Callable[[ListSequence[X]], R],
) -> PullSequence[R]:
    """Reduce every rolling window to a single value.

    This is {py:obj}`roll` followed by a map.

    :arg source: `ordered` source.

    :arg width: Elements per window. Must be at least 2.

    :arg reducer: Called on each window. Windows are iterable, so
        `sum`, `max`, `list` and the like work directly.

    :returns: One value per window.

    """
    check_callable(reducer, "reducer")
    return MappingSequence(roll(source, width), reducer)


def _mapped(source: PullSequence[X], mapper: Optional[Callable[[X], Any]]) -> Any:
    check_source(source)
    if mapper is None:
        return source
    return MappingSequence(source, mapper)


def shifting_window_average(
    source: PullSequence[X],
    width: int,
    mapper: Optional[Callable[[X], float]] = None,
) -> PullSequence[float]:
    """Rolling mean.

    ```python
    >>> import pullseq.operators as op
    >>> from pullseq.sequences import from_iterable
    >>> op.shifting_window_average(from_iterable([1, 2, 3, 4]), 2).to_list()
    [1.5, 2.5, 3.5]
    ```

    :arg source: `ordered` source.

    :arg width: Elements per window. Must be at least 2.

    :arg mapper: Turns each element into a number. Defaults to using
        the elements as is.

    :returns: One mean per window.

    """
    return window_reduce(
        _mapped(source, mapper), width, lambda w: WindowSummary.of(w).average
    )


def shifting_window_summarize(
    source: PullSequence[X],
    width: int,
    mapper: Optional[Callable[[X], float]] = None,
) -> PullSequence[WindowSummary]:
    """Rolling count, sum, min, max and mean.

    :arg source: `ordered` source.

    :arg width: Elements per window. Must be at least 2.

    :arg mapper: Turns each element into a number. Defaults to using
        the elements as is.

    :returns: One {py:obj}`~pullseq.adapters.window.WindowSummary`
        per window.

    """
    return window_reduce(_mapped(source, mapper), width, WindowSummary.of)
