import pullseq.operators as op
from pullseq.errors import InvalidArgumentError
from pullseq.sequences import from_iterable
from pullseq.testing import drain
from pytest import raises


def is_open(x):
    return x == "("


def is_close(x):
    return x == ")"


def test_group_on_gate_included():
    inp = from_iterable("a(bc)d(e)f")
    out = drain(op.group_on_gate(inp, is_open, is_close, True, True))
    assert out == [["(", "b", "c", ")"], ["(", "e", ")"]]


def test_group_on_gate_defaults_include_both_boundaries():
    inp = from_iterable("(a)b(c)")
    defaulted = drain(op.group_on_gate(inp, is_open, is_close))
    inp = from_iterable("(a)b(c)")
    explicit = drain(op.group_on_gate(inp, is_open, is_close, True, True))
    assert defaulted == explicit == [["(", "a", ")"], ["(", "c", ")"]]


def test_group_on_gate_excluded():
    inp = from_iterable("a(bc)d(e)f")
    out = drain(op.group_on_gate(inp, is_open, is_close, False, False))
    assert out == [["b", "c"], ["e"]]


def test_group_on_gate_open_only_included():
    inp = from_iterable("(bc)")
    out = drain(op.group_on_gate(inp, is_open, is_close, True, False))
    assert out == [["(", "b", "c"]]


def test_group_on_gate_emits_partial_segment():
    inp = from_iterable("(ab)(cd")
    out = drain(op.group_on_gate(inp, is_open, is_close, False, False))
    assert out == [["a", "b"], ["c", "d"]]


def test_group_on_gate_skips_empty_segments():
    inp = from_iterable("()(a)(")
    out = drain(op.group_on_gate(inp, is_open, is_close, False, False))
    assert out == [["a"]]


def test_group_on_gate_no_nested_opening():
    inp = from_iterable("((a)")
    out = drain(op.group_on_gate(inp, is_open, is_close, True, True))
    assert out == [["(", "(", "a", ")"]]


def test_group_on_gate_close_while_waiting_ignored():
    inp = from_iterable(")a(b)")
    out = drain(op.group_on_gate(inp, is_open, is_close, True, True))
    assert out == [["(", "b", ")"]]


def test_group_on_gate_same_predicate():
    def is_bar(x):
        return x == "|"

    # The opening element is not also tested for closing, and elements
    # between a close and the next open are dropped.
    inp = from_iterable("|ab|cd|")
    out = drain(op.group_on_gate(inp, is_bar, is_bar, False, False))
    assert out == [["a", "b"]]


def test_group_on_gate_drops_sorted_and_sized():
    inp = from_iterable("(ab)", sorted=True)
    props = op.group_on_gate(inp, is_open, is_close, True, True).properties()
    assert props.ordered
    assert not props.sorted
    assert not props.sized


def test_group_on_gate_split_before_advance():
    inp = from_iterable("(a)(b)(c)(d)")
    grouped = op.group_on_gate(inp, is_open, is_close, False, False)
    prefix = grouped.try_split()
    assert drain(prefix) + drain(grouped) == [["a"], ["b"], ["c"], ["d"]]


def test_group_on_gate_raises_on_unordered(unordered):
    with raises(InvalidArgumentError):
        op.group_on_gate(unordered, is_open, is_close, True, True)


def test_group_on_gate_raises_on_none_close():
    with raises(InvalidArgumentError, match="`close`"):
        op.group_on_gate(from_iterable("a"), is_open, None)
