"""Brainfuck interpreter with a 30000-cell byte tape."""

from __future__ import annotations

import io
import sys
from typing import BinaryIO

MEMORY_SIZE = 30000
MAX_PROGRAM = 65535


def _bracket_pairs(program: str) -> dict[int, int]:
    pairs: dict[int, int] = {}
    stack: list[int] = []
    for position, char in enumerate(program):
        if char == "[":
            stack.append(position)
        elif char == "]" and stack:
            opening = stack.pop()
            pairs[opening] = position
            pairs[position] = opening
    return pairs


def _jump(pairs: dict[int, int], position: int) -> int:
    try:
        return pairs[position]
    except KeyError:
        raise ValueError(f"unmatched bracket at position {position}") from None


def _cell(pointer: int) -> int:
    if not 0 <= pointer < MEMORY_SIZE:
        raise IndexError(f"tape pointer out of range: {pointer}")
    return pointer


def run(
    program: str | bytes,
    stdin: BinaryIO | None = None,
    stdout: BinaryIO | None = None,
) -> bytes:
    """Execute program; `,` reads from stdin, `.` writes to stdout.

    Returns every byte the program printed. End of input stores 255.
    """
    if isinstance(program, bytes):
        program = program.decode("latin-1")
    pairs = _bracket_pairs(program)
    tape = bytearray(MEMORY_SIZE)
    output = bytearray()
    pointer = 0
    position = 0

    while position < len(program):
        command = program[position]
        if command == ">":
            pointer += 1
        elif command == "<":
            pointer -= 1
        elif command == "+":
            index = _cell(pointer)
            tape[index] = (tape[index] + 1) & 0xFF
        elif command == "-":
            index = _cell(pointer)
            tape[index] = (tape[index] - 1) & 0xFF
        elif command == ".":
            byte = bytes([tape[_cell(pointer)]])
            output += byte
            if stdout is not None:
                stdout.write(byte)
        elif command == ",":
            data = stdin.read(1) if stdin is not None else b""
            tape[_cell(pointer)] = data[0] if data else 0xFF
        elif command == "[":
            if tape[_cell(pointer)] == 0:
                position = _jump(pairs, position)
        elif command == "]":
            if tape[_cell(pointer)] != 0:
                position = _jump(pairs, position)
        position += 1

    if stdout is not None:
        stdout.flush()
    return bytes(output)


def main(argv: list[str] | None = None) -> int:
    """Read a program from standard input until EOF and run it."""
    data = sys.stdin.buffer.read()
    program = data[:MAX_PROGRAM]
    remaining = io.BytesIO(data[MAX_PROGRAM + 1:])
    run(program, remaining, sys.stdout.buffer)
    return 0


if __name__ == "__main__":
    sys.exit(main())