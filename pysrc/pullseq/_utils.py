"""Small generic utility functions."""

from types import FunctionType
from typing import Any, Callable, Optional, TypeVar

from typing_extensions import TypeAlias

from pullseq.errors import InvalidArgumentError

X = TypeVar("X")


Comparator: TypeAlias = Callable[[X, X], int]
"""`cmp`-style function.

Returns a negative number, zero, or a positive number when the first
argument ranks below, equal to, or above the second.

"""


def f_repr(f: Callable) -> str:
    """Nicer function {py:obj}`repr` showing module and line number.

    The built in repr just shows a memory address.

    """
    if isinstance(f, FunctionType):
        path = f"{f.__module__}.{f.__qualname__}"
        line = f"{f.__code__.co_firstlineno}"
        return f"<function {path!r} line {line}>"
    else:
        return repr(f)


def natural_order(a: Any, b: Any) -> int:
    """Compare two items with `<` and `>`.

    ```python
    >>> natural_order(1, 2)
    -1
    >>> natural_order("b", "a")
    1
    ```

    """
    return (a > b) - (a < b)


def reverse_order(a: Any, b: Any) -> int:
    """Inverse of {py:obj}`natural_order`."""
    return (b > a) - (b < a)


def check_not_none(value: Optional[X], name: str) -> X:
    """Raise if a required argument is missing.

    :arg value: Argument value.

    :arg name: Argument name, for the error message.

    :returns: The value unchanged.

    :raises InvalidArgumentError: If the value is `None`.

    """
    if value is None:
        msg = f"`{name}` must not be `None`"
        raise InvalidArgumentError(msg)
    return value


def check_callable(f: Optional[Callable], name: str) -> Callable:
    """Raise if a required function argument is missing or not callable."""
    check_not_none(f, name)
    if not callable(f):
        msg = f"`{name}` must be a callable; got a {type(f)!r} instead"
        raise InvalidArgumentError(msg)
    return f


def check_at_least(value: int, minimum: int, name: str) -> int:
    """Raise if a numeric argument is below a lower bound."""
    if not isinstance(value, int) or isinstance(value, bool):
        msg = f"`{name}` must be an `int`; got a {type(value)!r} instead"
        raise InvalidArgumentError(msg)
    if value < minimum:
        msg = f"`{name}` must be at least {minimum}; got {value}"
        raise InvalidArgumentError(msg)
    return value
