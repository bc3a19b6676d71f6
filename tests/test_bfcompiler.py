import io
import sys

import pytest

from lpntools.bfcompiler import (
    calc,
    char_code,
    compile_line,
    main,
    number_code,
    string_code,
)
from lpntools.bfinterpreter import run


def test_calc_single_number():
    assert calc("7") == 7


def test_calc_is_left_to_right():
    assert calc("2+3*4") == 20


def test_calc_division_truncates_toward_zero():
    assert calc("0-7/2") == -3


def test_calc_division_by_zero():
    with pytest.raises(ZeroDivisionError):
        calc("1/0")


def test_char_code_prints_value():
    assert run(char_code(65)) == bytes([65])
    assert run(char_code("z")) == b"z"


def test_char_code_clears_cell_first():
    assert char_code(0).startswith("[-]")
    assert run("+++" + char_code(0)) == b"\x00"


def test_string_code_round_trip_utf8():
    text = "olá mundo"
    assert run(string_code(text)) == text.encode("utf-8")


def test_number_code_round_trip():
    assert run(number_code(-42)) == b"-42"
    assert run(number_code(0)) == b"0"


def test_compile_line_output():
    assert run(compile_line("a=2+3")) == b"a= 5"


def test_compile_line_ignores_trailing_newline():
    assert compile_line("b=10\n") == compile_line("b=10")


def test_compile_line_without_equal_sign():
    with pytest.raises(ValueError):
        compile_line("no equals here")


def _patch_streams(monkeypatch, stdin_bytes):
    stdin = io.TextIOWrapper(io.BytesIO(stdin_bytes))
    stdout = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
    monkeypatch.setattr(sys, "stdin", stdin)
    monkeypatch.setattr(sys, "stdout", stdout)
    return stdout


def test_main_writes_code(monkeypatch):
    stdout = _patch_streams(monkeypatch, b"x=1+1\n")
    assert main([]) == 0
    stdout.flush()
    assert stdout.buffer.getvalue().decode("utf-8") == compile_line("x=1+1")


def test_main_rejects_line_without_equal(monkeypatch):
    stdout = _patch_streams(monkeypatch, b"hello\n")
    assert main([]) == 1
    stdout.flush()
    assert stdout.buffer.getvalue() == b""


def test_main_rejects_empty_input(monkeypatch):
    _patch_streams(monkeypatch, b"")
    assert main([]) == 1