"""Stateful adapters over lazy, pull-based sequences.

Wrap a collection with {py:obj}`~pullseq.sequences.from_iterable`, then
transform it with the functions in {py:obj}`pullseq.operators`.

```python
>>> import pullseq.operators as op
>>> from pullseq.sequences import from_iterable
>>> [w.to_list() for w in op.roll(from_iterable("abcd"), 3)]
[['a', 'b', 'c'], ['b', 'c', 'd']]
```

"""

from pullseq.errors import ContractViolationError, InvalidArgumentError, PullSeqError
from pullseq.properties import UNBOUNDED, Properties
from pullseq.sequences import (
    IterSequence,
    ListSequence,
    PullSequence,
    empty,
    from_iterable,
)

__all__ = [
    "ContractViolationError",
    "InvalidArgumentError",
    "IterSequence",
    "ListSequence",
    "Properties",
    "PullSeqError",
    "PullSequence",
    "UNBOUNDED",
    "empty",
    "from_iterable",
]
