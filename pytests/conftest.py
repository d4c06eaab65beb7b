"""`pytest` config for `pytests/`.

This sets up our fixtures.

"""

from pullseq.properties import Properties
from pullseq.sequences import ListSequence, from_iterable
from pytest import fixture


@fixture
def digits():
    """A sequence of the strings `"1"` through `"4"`, with repeats.

    This is the canonical input for the top-K filters.

    """
    return from_iterable(["1", "1", "2", "2", "2", "3", "3", "4", "4", "4"])


@fixture
def unordered():
    """A sized source that makes no ordering guarantee."""
    return ListSequence([3, 1, 2], Properties(sized=True))


@fixture(params=[0, 1, 2, 5, 10])
def length(request):
    """Run a version of the test for several source lengths."""
    return request.param
