"""Guarantees a sequence makes about its elements.

Every {py:obj}`~pullseq.sequences.PullSequence` reports a
{py:obj}`Properties` value. Adapters derive their own from their
sources, keeping the flags they preserve and clearing the ones they
can't promise.

```python
>>> ORDERED_SIZED.with_sorted().without_sized()
Properties(ordered=True, sized=False, sorted=True, distinct=False)
```

Size estimates are plain `int`s. {py:obj}`UNBOUNDED` means the size is
unknown or infinite; the arithmetic helpers here saturate at it
instead of overflowing into a meaningless large number.

"""

import sys
from dataclasses import dataclass, replace

from typing_extensions import Self

UNBOUNDED = sys.maxsize
"""Size estimate of a sequence with unknown or infinite length."""


@dataclass(frozen=True)
class Properties:
    """Set of property flags.

    :arg ordered: Elements have a defined encounter order.

    :arg sized: {py:obj}`~pullseq.sequences.PullSequence.estimate_size`
        is exact.

    :arg sorted: Elements are encountered in non-decreasing order.

    :arg distinct: No two elements are equal.

    """

    ordered: bool = False
    sized: bool = False
    sorted: bool = False
    distinct: bool = False

    def intersect(self, other: "Properties") -> "Properties":
        """Keep only the flags both sets have."""
        return Properties(
            ordered=self.ordered and other.ordered,
            sized=self.sized and other.sized,
            sorted=self.sorted and other.sorted,
            distinct=self.distinct and other.distinct,
        )

    def union(self, other: "Properties") -> "Properties":
        """Keep the flags either set has."""
        return Properties(
            ordered=self.ordered or other.ordered,
            sized=self.sized or other.sized,
            sorted=self.sorted or other.sorted,
            distinct=self.distinct or other.distinct,
        )

    def with_ordered(self) -> Self:
        return replace(self, ordered=True)

    def with_sized(self) -> Self:
        return replace(self, sized=True)

    def with_sorted(self) -> Self:
        # Sorted implies a defined encounter order.
        return replace(self, sorted=True, ordered=True)

    def with_distinct(self) -> Self:
        return replace(self, distinct=True)

    def without_sized(self) -> Self:
        return replace(self, sized=False)

    def without_sorted(self) -> Self:
        return replace(self, sorted=False)

    def without_distinct(self) -> Self:
        return replace(self, distinct=False)

    def only_ordered(self) -> "Properties":
        """Drop every flag except `ordered`."""
        return Properties(ordered=self.ordered)


NONE = Properties()
"""No guarantees at all."""

ORDERED = Properties(ordered=True)
"""Defined encounter order, unknown size."""

ORDERED_SIZED = Properties(ordered=True, sized=True)
"""Defined encounter order and exact size."""


def saturating_add(a: int, b: int) -> int:
    """Add two size estimates, saturating at {py:obj}`UNBOUNDED`.

    ```python
    >>> saturating_add(UNBOUNDED, 1) == UNBOUNDED
    True
    >>> saturating_add(2, 3)
    5
    ```

    """
    if a >= UNBOUNDED or b >= UNBOUNDED:
        return UNBOUNDED
    return min(a + b, UNBOUNDED)


def saturating_mul(a: int, b: int) -> int:
    """Multiply two size estimates, saturating at {py:obj}`UNBOUNDED`."""
    if a == 0 or b == 0:
        return 0
    if a >= UNBOUNDED or b >= UNBOUNDED:
        return UNBOUNDED
    return min(a * b, UNBOUNDED)


def saturating_sub(a: int, b: int) -> int:
    """Subtract from a size estimate.

    Never goes below zero, and {py:obj}`UNBOUNDED` stays unbounded.

    """
    if a >= UNBOUNDED:
        return UNBOUNDED
    return max(a - b, 0)


def min_size(*sizes: int) -> int:
    """Smallest of some size estimates."""
    return min(sizes)
