import io
import logging
from dataclasses import replace

import pytest

from exprforms.Cli import HEADERS, main, strip_newline
from exprforms.Config import Config


def run_cli(argv, stdin_text=""):
    out, err = io.StringIO(), io.StringIO()
    code = main(argv, stdin=io.StringIO(stdin_text), stdout=out, stderr=err)
    return code, out.getvalue(), err.getvalue()


def test_expression_argument():
    code, out, err = run_cli(["(a+3)+var^(b+282*c)"])
    assert code == 0
    assert err == ""
    lines = out.splitlines()
    assert lines[lines.index(HEADERS[0]) + 1] == "     (a+3)+(var^(b+(282*c)))"
    assert lines[lines.index(HEADERS[1]) + 1] == "     a 3 + var b 282 c * + ^ +"
    assert lines[lines.index(HEADERS[2]) + 1] == "     + + a 3 ^ var + b * 282 c"


def test_reads_one_line_from_stdin():
    code, out, _ = run_cli([], "a-b-c\nignored\n")
    assert code == 0
    assert "Please enter an arithmetic expression" in out
    assert ">> " in out
    assert "     - - a b c" in out


def test_windows_line_ending_is_trimmed():
    code, out, _ = run_cli([], "a^b\r\n")
    assert code == 0
    assert "     a b ^" in out


def test_no_input():
    code, _, err = run_cli([], "")
    assert code == 1
    assert "Error receiving input!" in err


@pytest.mark.parametrize("text, message", [
    ("a$b", "invalid character '$' at column 2"),
    ("(a+b", "unexpected end of input at column 5"),
    ("a+*b", "unexpected token '*' at column 3"),
    ("a b", "invalid character ' ' at column 2"),
])
def test_invalid_input(text, message):
    code, out, err = run_cli([text])
    assert code == 1
    assert err.startswith("Invalid input: ")
    assert message in err
    assert HEADERS[0] not in out


def test_max_chars():
    code, _, err = run_cli(["--max-chars", "3", "a+bc"])
    assert code == 1
    assert "longer than 3 characters" in err

    assert run_cli(["--max-chars", "4", "a+bc"])[0] == 0


def test_tree_flag():
    code, out, _ = run_cli(["--tree", "a*b"])
    assert code == 0
    assert "     Expr" in out
    assert "       * PowChain" in out


def test_strip_newline_only_removes_line_ending():
    assert strip_newline("a+b\n") == "a+b"
    assert strip_newline("a+b\r\n") == "a+b"
    assert strip_newline("a+b") == "a+b"
    assert strip_newline(" a+b \n") == " a+b "


# --- Config ---


def test_config_defaults():
    config = Config()
    assert config.max_chars == 1000
    assert config.log_level == "WARNING"
    assert config.show_tree is False


def test_config_from_env():
    config = Config.from_env({"EXPRFORMS_MAX_CHARS": "20", "EXPRFORMS_LOG_LEVEL": "debug"})
    assert config.max_chars == 20
    assert config.log_level == "DEBUG"
    assert Config.from_env({}) == Config()


def test_config_from_env_rejects_bad_numbers():
    with pytest.raises(ValueError, match="EXPRFORMS_MAX_CHARS"):
        Config.from_env({"EXPRFORMS_MAX_CHARS": "lots"})


def test_env_bound_applies_to_cli(monkeypatch):
    monkeypatch.setenv("EXPRFORMS_MAX_CHARS", "2")
    code, _, err = run_cli(["a+b"])
    assert code == 1
    assert "longer than 2 characters" in err


def test_bad_env_setting_is_reported(monkeypatch):
    monkeypatch.setenv("EXPRFORMS_MAX_CHARS", "lots")
    code, out, err = run_cli(["a+b"])
    assert code == 2
    assert out == ""
    assert "Invalid configuration" in err


def test_debug_flag_logs_pipeline(caplog):
    caplog.set_level(logging.DEBUG, logger="exprforms")
    code, _, _ = run_cli(["--debug", "a^b"])
    assert code == 0
    assert any("tokens: ATOM(a) CARET(^) ATOM(b)" in r.getMessage() for r in caplog.records)


def test_config_from_env_rejects_unknown_log_level():
    with pytest.raises(ValueError, match="EXPRFORMS_LOG_LEVEL"):
        Config.from_env({"EXPRFORMS_LOG_LEVEL": "bogus"})


def test_unknown_log_level_is_reported(monkeypatch):
    monkeypatch.setenv("EXPRFORMS_LOG_LEVEL", "bogus")
    code, out, err = run_cli(["a+b"])
    assert code == 2
    assert out == ""
    assert "Invalid configuration" in err


@pytest.mark.parametrize("value", ["0", "-1"])
def test_bound_below_one_is_rejected(monkeypatch, value):
    with pytest.raises(ValueError, match="at least 1"):
        Config.from_env({"EXPRFORMS_MAX_CHARS": value})

    code, _, err = run_cli(["--max-chars", value, "a+b"])
    assert code == 2
    assert "Invalid configuration" in err

    monkeypatch.setenv("EXPRFORMS_MAX_CHARS", value)
    assert run_cli(["a+b"])[0] == 2


def test_config_checks_replaced_fields():
    with pytest.raises(ValueError):
        replace(Config(), max_chars=0)
    with pytest.raises(ValueError):
        Config(log_level="NOISY")


def test_deeply_nested_input_is_converted():
    depth = 40
    code, out, err = run_cli(["(" * depth + "a+b" + ")" * depth])
    assert code == 0
    assert err == ""
    assert "     a b +" in out
