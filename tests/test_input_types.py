from hypothesis import given
from hypothesis import strategies as st

from exprforms.Char import any_char
from exprforms.Grammar import kind
from exprforms.Parsec import SourcePos
from exprforms.Prim import many, run_parser, token
from exprforms.Token import Token, TokenKind, next_token_pos

from conftest import make_tokens


@given(st.text(max_size=30))
def test_string_and_bytes_behavior(txt):
    res_s, err_s = run_parser(many(any_char()), txt)
    assert err_s is None
    assert "".join(res_s) == txt

    data = txt.encode("utf-8")
    byte = token(show_tok=repr, test_tok=lambda b: b)
    res_b, err_b = run_parser(many(byte), data)
    assert err_b is None
    assert bytes(res_b) == data


def test_tuple_of_token_objects():
    stream = make_tokens("x", "*", "42")

    parser = kind(TokenKind.ATOM) >> (
        lambda x: kind(TokenKind.STAR) >> (
            lambda op: kind(TokenKind.ATOM).map(lambda y: (x.lexeme, op.lexeme, y.lexeme))))

    result, err = run_parser(parser, stream)
    assert err is None
    assert result == ("x", "*", "42")


def test_token_positions_count_lexeme_width():
    # "total*42": the '*' starts at column 6 and 42 at column 7
    stream = make_tokens("total", "*", "42")
    parser = kind(TokenKind.ATOM) >> kind(TokenKind.SLASH)

    res, err = run_parser(parser, stream)
    assert res is None
    assert err.pos == SourcePos(1, 6)
    assert "unexpected '*'" in str(err)
    assert "expecting '/'" in str(err)


def test_next_token_pos():
    tok = Token(TokenKind.ATOM, "abc")
    assert next_token_pos(SourcePos(1, 4), tok) == SourcePos(1, 7)
