from pullseq.errors import ContractViolationError
from pullseq.sequences import ListSequence, from_iterable
from pullseq.testing import BrokenSequence, CheckingSequence, drain
from pytest import raises


def test_checking_sequence_counts():
    checked = CheckingSequence(from_iterable([1, 2, 3]))
    assert checked.to_list() == [1, 2, 3]
    assert checked.advances == 4
    assert checked.produced == 3
    assert checked.exhausted


def test_checking_sequence_passes_through_properties():
    inner = from_iterable([1, 2], sorted=True)
    checked = CheckingSequence(inner)
    assert checked.properties() == inner.properties()
    assert checked.estimate_size() == 2


def test_checking_sequence_split():
    checked = CheckingSequence(from_iterable([1, 2, 3, 4]))
    prefix = checked.try_split()
    assert isinstance(prefix, CheckingSequence)
    assert prefix.to_list() == [1, 2]
    assert checked.to_list() == [3, 4]


def test_checking_sequence_raises_on_double_callback():
    checked = CheckingSequence(BrokenSequence([1, 2], fault="double"))
    with raises(ContractViolationError, match="twice"):
        checked.try_advance(lambda x: None)


def test_checking_sequence_raises_on_silent_true():
    checked = CheckingSequence(BrokenSequence([1, 2], fault="silent"))
    with raises(ContractViolationError, match="without calling back"):
        checked.try_advance(lambda x: None)


def test_checking_sequence_raises_on_lie():
    checked = CheckingSequence(BrokenSequence([1, 2], fault="lie"))
    with raises(ContractViolationError, match="after calling back"):
        checked.try_advance(lambda x: None)


def test_checking_sequence_raises_on_revival():
    class Revives(ListSequence):
        def __init__(self):
            super().__init__([1])
            self.calls = 0

        def try_advance(self, action):
            self.calls += 1
            if self.calls == 1:
                return False
            action(1)
            return True

    checked = CheckingSequence(Revives())
    assert not checked.try_advance(lambda x: None)
    with raises(ContractViolationError, match="after being exhausted"):
        checked.try_advance(lambda x: None)


def test_broken_sequence_behaves_until_fault():
    broken = BrokenSequence([1, 2, 3], at=2, fault="silent")
    seen = []
    assert broken.try_advance(seen.append)
    assert broken.try_advance(seen.append)
    assert seen == [1, 2]


def test_broken_sequence_raises_on_unknown_fault():
    with raises(ValueError):
        BrokenSequence([1], fault="nope")


def test_drain_nested():
    nested = from_iterable([from_iterable([1, 2]), from_iterable([3])])
    assert drain(nested) == [[1, 2], [3]]


def test_drain_limit():
    assert drain(from_iterable(range(10)), limit=3) == [0, 1, 2]
