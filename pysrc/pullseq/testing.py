"""Helper tools for testing sequences and adapters."""

from typing import Any, Callable, List, Optional, TypeVar

from typing_extensions import override

from pullseq.errors import ContractViolationError
from pullseq.properties import Properties
from pullseq.sequences import ListSequence, PullSequence

__all__ = [
    "BrokenSequence",
    "CheckingSequence",
    "drain",
]

X = TypeVar("X")
"""Type of elements."""


class CheckingSequence(PullSequence[X]):
    """Check that a sequence honors the single-step advance protocol.

    Wraps a sequence and inspects every advance made through it. The
    callback must be invoked exactly once when `True` is returned and
    never when `False` is, and once `False` is returned it must keep
    being returned.

    ```python
    >>> from pullseq.sequences import from_iterable
    >>> checked = CheckingSequence(from_iterable([1, 2]))
    >>> checked.to_list()
    [1, 2]
    >>> checked.advances, checked.produced
    (3, 2)
    ```

    :arg inner: Sequence to check.

    """

    __test__ = False

    def __init__(self, inner: PullSequence[X]):
        self.inner = inner
        self.advances = 0
        self.produced = 0
        self.exhausted = False

    @override
    def try_advance(self, action: Callable[[X], Any]) -> bool:
        calls = 0

        def _check(x: X) -> None:
            nonlocal calls
            calls += 1
            if calls > 1:
                msg = f"{self.inner!r} called back twice in one advance"
                raise ContractViolationError(msg)
            action(x)

        advanced = self.inner.try_advance(_check)
        self.advances += 1
        if advanced and calls != 1:
            msg = f"{self.inner!r} returned `True` without calling back"
            raise ContractViolationError(msg)
        if not advanced and calls != 0:
            msg = f"{self.inner!r} returned `False` after calling back"
            raise ContractViolationError(msg)
        if advanced and self.exhausted:
            msg = f"{self.inner!r} produced an element after being exhausted"
            raise ContractViolationError(msg)
        if advanced:
            self.produced += 1
        else:
            self.exhausted = True
        return advanced

    @override
    def try_split(self) -> Optional[PullSequence[X]]:
        prefix = self.inner.try_split()
        if prefix is None:
            return None
        return CheckingSequence(prefix)

    @override
    def estimate_size(self) -> int:
        return self.inner.estimate_size()

    @override
    def properties(self) -> Properties:
        return self.inner.properties()


class BrokenSequence(ListSequence[X]):
    """A source that breaks the advance protocol on purpose.

    Behaves like a {py:obj}`~pullseq.sequences.ListSequence` until it
    reaches the element at `at`.

    :arg items: Elements to produce.

    :arg at: Index of the element where the breakage happens.

    :arg fault: `"double"` calls back twice; `"silent"` returns
        `True` without calling back; `"lie"` calls back and then
        returns `False`.

    """

    __test__ = False

    FAULTS = ("double", "silent", "lie")

    def __init__(self, items: List[X], at: int = 0, fault: str = "double"):
        if fault not in self.FAULTS:
            msg = f"`fault` must be one of {self.FAULTS!r}; got {fault!r}"
            raise ValueError(msg)
        super().__init__(items)
        self._at = at
        self._fault = fault
        self._index = 0

    @override
    def try_advance(self, action: Callable[[X], Any]) -> bool:
        if self._index != self._at:
            self._index += 1
            return super().try_advance(action)
        self._index += 1
        if self._fault == "double":
            super().try_advance(action)
            return super().try_advance(action)
        elif self._fault == "silent":
            return True
        else:
            super().try_advance(action)
            return False


def drain(seq: PullSequence[X], limit: Optional[int] = None) -> List[X]:
    """Advance a sequence through a {py:obj}`CheckingSequence`.

    Nested sequences, like windows and groups, are drained too.

    :arg seq: Sequence to drain.

    :arg limit: Stop after this many elements. Needed for infinite
        sequences.

    :returns: Everything produced.

    """
    checked = CheckingSequence(seq)
    out: List[Any] = []
    while limit is None or len(out) < limit:
        got: List[Any] = []
        if not checked.try_advance(got.append):
            # Advance once more; the checker raises if exhaustion
            # didn't stick.
            checked.try_advance(got.append)
            break
        x = got[0]
        if isinstance(x, PullSequence):
            x = drain(x)
        out.append(x)
    return out
