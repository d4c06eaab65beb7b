"""Exceptions raised by sequence adapters.

There are two kinds of failure. {py:obj}`InvalidArgumentError` is
raised eagerly, when an adapter is built with arguments it can't work
with. {py:obj}`ContractViolationError` is raised while a sequence is
being advanced, when some participant broke the single-step advance
protocol. Neither is ever caught inside this package.

"""


class PullSeqError(Exception):
    """Base class of all errors raised by this package."""

    pass


class InvalidArgumentError(PullSeqError, ValueError):
    """An adapter was built with an argument it can't accept.

    This covers `None` sources and functions, numeric parameters out
    of range, and sources that lack a required property like
    `ordered` or `sized`.

    """

    pass


class ContractViolationError(PullSeqError, RuntimeError):
    """The single-step advance protocol was broken.

    Raised when a sequence invokes its callback more than once for a
    single advance, returns `True` without invoking it, or returns
    `False` after invoking it. Also raised when a user function
    returns something an adapter can't emit.

    This always indicates a programming defect, so there is no
    recovery.

    """

    pass
