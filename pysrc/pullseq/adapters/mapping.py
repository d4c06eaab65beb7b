"""Element-wise transformation."""

from typing import Callable, Optional, Tuple, TypeVar

from typing_extensions import Self, override

from pullseq._utils import check_callable
from pullseq.properties import Properties
from pullseq.sequences import _EMPTY, Adapter, PullSequence, advance, check_source

X = TypeVar("X")
"""Type of source elements."""

Y = TypeVar("Y")
"""Type of mapped elements."""


class MappingSequence(Adapter[Y]):
    """Apply a function to each element.

    :arg source: Source to map.

    :arg mapper: Called on each element.

    """

    def __init__(self, source: PullSequence[X], mapper: Callable[[X], Y]):
        super().__init__()
        self._source = check_source(source)
        self._mapper = check_callable(mapper, "mapper")

    def _map(self, x: X) -> Y:
        return self._mapper(x)

    @override
    def _produce(self) -> Tuple[Y, ...]:
        got = advance(self._source)
        if len(got) <= 0:
            return _EMPTY
        return (self._map(got[0]),)

    @override
    def try_split(self) -> Optional[Self]:
        prefix = self._split_source(self._source)
        if prefix is None:
            return None
        return self._rebuild(prefix)

    def _rebuild(self, source: PullSequence[X]) -> Self:
        return type(self)(source, self._mapper)

    @override
    def estimate_size(self) -> int:
        return 0 if self._exhausted else self._source.estimate_size()

    @override
    def properties(self) -> Properties:
        return self._source.properties().without_sorted().without_distinct()


class ValidatingSequence(MappingSequence[Y]):
    """Map each element with one of two functions.

    ```python
    >>> from pullseq.sequences import from_iterable
    >>> src = from_iterable([1, -2, 3])
    >>> ValidatingSequence(src, lambda x: x > 0, str, lambda x: "bad").to_list()
    ['1', 'bad', '3']
    ```

    :arg source: Source to validate.

    :arg validator: Called on each element.

    :arg if_valid: Called on elements the validator accepts.

    :arg if_invalid: Called on elements the validator rejects.

    """

    def __init__(
        self,
        source: PullSequence[X],
        validator: Callable[[X], bool],
        if_valid: Callable[[X], Y],
        if_invalid: Callable[[X], Y],
    ):
        super().__init__(source, check_callable(if_valid, "if_valid"))
        self._validator = check_callable(validator, "validator")
        self._if_invalid = check_callable(if_invalid, "if_invalid")

    @override
    def _map(self, x: X) -> Y:
        if self._validator(x):
            return self._mapper(x)
        else:
            return self._if_invalid(x)

    @override
    def _rebuild(self, source: PullSequence[X]) -> Self:
        return type(self)(source, self._validator, self._mapper, self._if_invalid)
