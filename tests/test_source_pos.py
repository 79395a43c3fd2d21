from hypothesis import given
from hypothesis import strategies as st

from exprforms.Parsec import SourcePos, update_pos_char, update_pos_string


def slow_reference_update(pos, text):
    curr = pos
    for char in text:
        curr = update_pos_char(curr, char)
    return curr


@given(st.text())
def test_fast_pos_update_matches_reference(text):
    start = SourcePos(1, 1, "test")
    expected = slow_reference_update(start, text)
    actual = update_pos_string(start, text)
    assert actual == expected


def test_positions_order_by_line_then_column():
    assert SourcePos(1, 5) < SourcePos(2, 1)
    assert SourcePos(1, 2) < SourcePos(1, 3)
    assert SourcePos(1, 2, "a") == SourcePos(1, 2, "b")


def test_str_includes_name_when_present():
    assert str(SourcePos(1, 4)) == "(line 1, column 4)"
    assert str(SourcePos(2, 1, "stdin")) == '"stdin" (line 2, column 1)'
