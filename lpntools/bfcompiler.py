"""Turns `text=expression` lines into Brainfuck that prints `text= value`."""

from __future__ import annotations

import sys

MAX_LINE = 1023

_DIGITS = frozenset("0123456789")
_OPERATORS = frozenset("+-*/")


def _wrap32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _apply(operation: str, total: int, number: int) -> int:
    if operation == "+":
        result = total + number
    elif operation == "-":
        result = total - number
    elif operation == "*":
        result = total * number
    else:
        if number == 0:
            raise ZeroDivisionError("division by zero in expression")
        quotient = abs(total) // abs(number)
        result = quotient if (total < 0) == (number < 0) else -quotient
    return _wrap32(result)


def calc(expression: str) -> int:
    """Evaluate left to right, ignoring precedence and non-operator characters."""
    total = 0
    number = 0
    operation: str | None = None
    for char in expression:
        if char in _DIGITS:
            number = _wrap32(number * 10 + int(char))
        elif char in _OPERATORS:
            total = number if operation is None else _apply(operation, total, number)
            operation = char
            number = 0
    if operation is None:
        return number
    return _apply(operation, total, number)


def char_code(value: int | str) -> str:
    """Code that clears the current cell, counts up to value and prints it."""
    if isinstance(value, str):
        value = ord(value)
    return "[-]" + "+" * (value & 0xFF) + "."


def string_code(text: str | bytes) -> str:
    """Code printing each byte of text (UTF-8 for str)."""
    data = text.encode("utf-8") if isinstance(text, str) else text
    return "".join(char_code(byte) for byte in data)


def number_code(number: int) -> str:
    """Code printing the decimal form of number."""
    return "".join(char_code(digit) for digit in str(number))


def compile_line(line: str | bytes) -> str:
    """Compile `left=expression` into code printing `left= result`."""
    data = line.encode("utf-8") if isinstance(line, str) else line
    equal = data.find(b"=")
    if equal < 0:
        raise ValueError("expected '=' in line")
    left = data[:equal]
    right = data[equal + 1:].split(b"\n", 1)[0]
    return (
        string_code(left)
        + char_code("=")
        + char_code(" ")
        + number_code(calc(right.decode("latin-1")))
    )


def main(argv: list[str] | None = None) -> int:
    """Read one line from standard input and print its Brainfuck code."""
    line = sys.stdin.buffer.readline(MAX_LINE)
    if not line:
        return 1
    try:
        code = compile_line(line)
    except (ValueError, ZeroDivisionError):
        return 1
    sys.stdout.write(code)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())