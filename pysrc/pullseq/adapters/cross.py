"""Pairwise enumeration of a sequence against itself.

Elements are buffered as they arrive. Each new element is paired with
every element buffered before it, so pairs come out as soon as both
of their members have been seen and the source can be infinite.

```python
>>> from pullseq.sequences import from_iterable
>>> pairs = CrossProductSequence(from_iterable("ab"), CrossProductPolicy.full())
>>> pairs.to_list()
[('a', 'a'), ('b', 'a'), ('a', 'b'), ('b', 'b')]
```

Pairing is by position, so two equal elements still pair with each
other.

"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Generic, List, Optional, Tuple, TypeVar

from typing_extensions import override

from pullseq._utils import Comparator, check_callable
from pullseq.errors import InvalidArgumentError
from pullseq.properties import UNBOUNDED, Properties, saturating_add, saturating_sub
from pullseq.sequences import _EMPTY, Adapter, PullSequence, advance, check_source

X = TypeVar("X")
"""Type of source elements."""


@dataclass(frozen=True)
class CrossProductPolicy(Generic[X]):
    """Which pairs to enumerate.

    Use the constructors {py:obj}`full`, {py:obj}`no_self_pairs` and
    {py:obj}`ordered` rather than building this directly.

    """

    self_pairs: bool
    comparator: Optional[Comparator[X]] = None

    @classmethod
    def full(cls) -> "CrossProductPolicy[X]":
        """Every ordered pair, self-pairs included.

        `n` elements give `n * n` pairs.

        """
        return cls(self_pairs=True)

    @classmethod
    def no_self_pairs(cls) -> "CrossProductPolicy[X]":
        """Every ordered pair of two different positions.

        `n` elements give `n * (n - 1)` pairs.

        """
        return cls(self_pairs=False)

    @classmethod
    def ordered(cls, comparator: Comparator[X]) -> "CrossProductPolicy[X]":
        """Each unordered pair once, lower ranked element first.

        Pairs of elements the comparator ties are skipped, so `n`
        distinct elements give `n * (n - 1) / 2` pairs.

        """
        return cls(self_pairs=False, comparator=check_callable(comparator, "comparator"))

    def total(self, n: int) -> int:
        """Number of pairs `n` distinct elements give."""
        if n >= UNBOUNDED:
            return UNBOUNDED
        if self.self_pairs:
            total = n * n
        elif self.comparator is None:
            total = n * (n - 1)
        else:
            total = n * (n - 1) // 2
        return min(total, UNBOUNDED)


class CrossProductSequence(Adapter[Tuple[X, X]]):
    """Enumerate pairs of elements of one source.

    For each new element `e`, and each previously seen element `p` in
    encounter order, emits `(e, p)` then `(p, e)`; or under the
    ordered policy just the one whose first member ranks lower. Then,
    under the full policy, emits `(e, e)`.

    :arg source: `ordered` source.

    :arg policy: Which pairs to enumerate.

    """

    def __init__(self, source: PullSequence[X], policy: CrossProductPolicy[X]):
        super().__init__()
        self._source = check_source(source, ordered=True)
        if not isinstance(policy, CrossProductPolicy):
            msg = (
                "`policy` must be a `CrossProductPolicy`; "
                f"got a {type(policy)!r} instead"
            )
            raise InvalidArgumentError(msg)
        self._policy = policy
        self._seen: List[X] = []
        self._pending: Deque[Tuple[X, X]] = deque()
        self._emitted = 0

    def _pair(self, e: X) -> None:
        cmp = self._policy.comparator
        for p in self._seen:
            if cmp is None:
                self._pending.append((e, p))
                self._pending.append((p, e))
            else:
                c = cmp(e, p)
                if c < 0:
                    self._pending.append((e, p))
                elif c > 0:
                    self._pending.append((p, e))
        self._seen.append(e)
        if self._policy.self_pairs:
            self._pending.append((e, e))

    @override
    def _produce(self) -> Tuple[Tuple[X, X], ...]:
        while len(self._pending) <= 0:
            got = advance(self._source)
            if len(got) <= 0:
                return _EMPTY
            self._pair(got[0])
        self._emitted += 1
        return (self._pending.popleft(),)

    @override
    def estimate_size(self) -> int:
        if self._exhausted:
            return 0
        n = saturating_add(len(self._seen), self._source.estimate_size())
        return saturating_sub(self._policy.total(n), self._emitted)

    @override
    def properties(self) -> Properties:
        props = self._source.properties().without_sorted().without_distinct()
        if self._policy.comparator is not None:
            # Ties are skipped.
            props = props.without_sized()
        return props
