"""Running prefix-reduction.

```python
>>> from operator import add
>>> from pullseq.sequences import from_iterable
>>> AccumulatingSequence(from_iterable([1, 1, 1, 1, 1]), add).to_list()
[1, 2, 3, 4, 5]
```

"""

from typing import Callable, Tuple, TypeVar

from typing_extensions import override

from pullseq._utils import check_callable, f_repr
from pullseq.properties import Properties
from pullseq.sequences import _EMPTY, Adapter, PullSequence, advance, check_source

K = TypeVar("K")
"""Type of keys."""

V = TypeVar("V")
"""Type of values."""


class AccumulatingSequence(Adapter[V]):
    """Emit the running reduction of a source.

    The first element is emitted unchanged. Each later element is
    folded into the previous result with `op(acc, x)` and the new
    result emitted. `op` need not be associative; it is always
    applied left to right.

    :arg source: Source to reduce. Must be `ordered`.

    :arg op: Binary function combining the running result with the
        next element.

    """

    def __init__(self, source: PullSequence[V], op: Callable[[V, V], V]):
        super().__init__()
        self._source = check_source(source, ordered=True)
        self._op = check_callable(op, "op")
        # Empty until the first element arrives.
        self._acc: Tuple[V, ...] = _EMPTY

    def _fold(self, x: V) -> V:
        if len(self._acc) <= 0:
            self._acc = (x,)
        else:
            self._acc = (self._op(self._acc[0], x),)
        return self._acc[0]

    @override
    def _produce(self) -> Tuple[V, ...]:
        got = advance(self._source)
        if len(got) <= 0:
            return _EMPTY
        return (self._fold(got[0]),)

    @override
    def estimate_size(self) -> int:
        return 0 if self._exhausted else self._source.estimate_size()

    @override
    def properties(self) -> Properties:
        return self._source.properties().without_sorted().without_distinct()


class AccumulatingEntriesSequence(AccumulatingSequence[V]):
    """Running reduction over the values of `(key, value)` pairs.

    Each pair is re-emitted as a new 2-tuple with its value replaced
    by the running result. The running result spans all pairs, not
    one per key.

    ```python
    >>> from operator import add
    >>> from pullseq.sequences import from_iterable
    >>> src = from_iterable([("a", 1), ("b", 2), ("a", 3)])
    >>> AccumulatingEntriesSequence(src, add).to_list()
    [('a', 1), ('b', 3), ('a', 6)]
    ```

    :arg source: Source of 2-tuples. Must be `ordered`.

    :arg op: Binary function combining the running result with the
        next value.

    """

    @override
    def _produce(self) -> Tuple[Tuple[K, V], ...]:  # type: ignore[override]
        got = advance(self._source)
        if len(got) <= 0:
            return _EMPTY
        entry = got[0]
        if not isinstance(entry, tuple) or len(entry) != 2:
            msg = (
                f"elements accumulated with {f_repr(self._op)} "
                "must be a 2-tuple of `(key, value)`; "
                f"got a {type(entry)!r} instead"
            )
            raise TypeError(msg)
        k, v = entry
        return ((k, self._fold(v)),)
