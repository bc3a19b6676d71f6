"""Compiler from the LPN teaching language to accumulator-machine assembly."""

from __future__ import annotations

import re
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

MAX_LENGTH = 256
OUTPUT_FILE = "programa.asm"

_DELIMITERS = frozenset(" \t\r\n")
_DIGITS = frozenset("0123456789")


class TokenType(Enum):
    """Kinds of token produced by the lexer."""

    NONE = auto()
    PROGRAM = auto()
    PROGRAM_NAME = auto()
    START = auto()
    END = auto()
    VARIABLE = auto()
    RES = auto()
    ASSIGNMENT = auto()
    NUMBER = auto()
    SUM = auto()
    SUB = auto()
    MULT = auto()
    DIV = auto()
    START_PAREN = auto()
    END_PAREN = auto()
    TOKEN_EOL = auto()
    TOKEN_EOF = auto()


_FIXED_TOKENS = {
    "PROGRAMA": TokenType.PROGRAM,
    "INICIO": TokenType.START,
    "FIM": TokenType.END,
    "+": TokenType.SUM,
    "-": TokenType.SUB,
    "*": TokenType.MULT,
    "/": TokenType.DIV,
    "RES": TokenType.RES,
    "=": TokenType.ASSIGNMENT,
    "(": TokenType.START_PAREN,
    ")": TokenType.END_PAREN,
    ")\n": TokenType.END_PAREN,
}


@dataclass(frozen=True)
class Token:
    """A lexical token with the line it was read from."""

    type: TokenType
    value: str | None
    line_number: int


class CompileError(Exception):
    """Raised when the source program is not valid LPN."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number


@dataclass(frozen=True)
class NumberNode:
    value: int


@dataclass(frozen=True)
class VariableNode:
    name: str


@dataclass(frozen=True)
class OperationNode:
    operator: TokenType
    left: "Node"
    right: "Node"


Node = Union[NumberNode, VariableNode, OperationNode]


@dataclass(frozen=True)
class Assignment:
    """One `variable = expression` statement."""

    variable: str
    expression: Node


def is_delimiter(char: str) -> bool:
    """Return True for the whitespace characters that separate tokens."""
    return char in _DELIMITERS


def _is_alpha(char: str) -> bool:
    return char.isascii() and char.isalpha()


def _is_alnum(char: str) -> bool:
    return char.isascii() and char.isalnum()


def parse_number(text: str) -> int:
    """Read a decimal or 0x-prefixed hexadecimal number from the start of text."""
    if text[:2] in ("0x", "0X"):
        match = re.match(r"\s*([+-]?[0-9a-fA-F]+)", text[2:])
        return int(match.group(1), 16) if match else 0
    match = re.match(r"\s*([+-]?[0-9]+)", text)
    return int(match.group(1)) if match else 0


def determine_type(text: str) -> TokenType:
    """Classify a token's text."""
    fixed = _FIXED_TOKENS.get(text)
    if fixed is not None:
        return fixed
    if text and text[0] in _DIGITS:
        return TokenType.NUMBER
    length = len(text)
    if length >= 2 and text[0] == '"' and text[length - 2] == '"':
        if all(_is_alpha(c) for c in text[1:max(length - 3, 1)]):
            return TokenType.PROGRAM_NAME
        return TokenType.NONE
    if text and _is_alpha(text[0]):
        if all(_is_alnum(c) for c in text[1:]):
            return TokenType.VARIABLE
    return TokenType.NONE


def _physical_lines(text: str) -> Iterator[str]:
    """Yield lines as a fixed-size line reader would deliver them."""
    for line in re.findall(r"[^\n]*\n|[^\n]+", text):
        step = MAX_LENGTH - 1
        for start in range(0, len(line), step):
            yield line[start:start + step]


class Lexer:
    """Splits LPN source text into tokens."""

    def __init__(self, text: str) -> None:
        self._lines = _physical_lines(text)
        self._line = ""
        self._pos = 0
        self.line_number = 0

    def next_token(self) -> Token:
        """Return the next token; TOKEN_EOF once the input is exhausted."""
        while self._pos >= len(self._line) or self._line[self._pos] == "\n":
            try:
                self._line = next(self._lines)
            except StopIteration:
                return Token(TokenType.TOKEN_EOF, None, self.line_number)
            self._pos = 0
            self.line_number += 1

        line = self._line
        while self._pos < len(line) and is_delimiter(line[self._pos]):
            self._pos += 1
        start = self._pos
        while self._pos < len(line) and not is_delimiter(line[self._pos]):
            self._pos += 1
        value = line[start:self._pos]
        if self._pos < len(line):
            self._pos += 1
        return Token(determine_type(value), value, self.line_number)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            if token.type is TokenType.TOKEN_EOF:
                return
            yield token


class Parser:
    """Recursive-descent parser producing a list of assignments."""

    def __init__(self, lexer: Lexer) -> None:
        self._lexer = lexer
        self.token = Token(TokenType.NONE, None, 0)

    def _advance(self) -> None:
        self.token = self._lexer.next_token()

    def _fail(self, message: str) -> CompileError:
        line = self.token.line_number
        return CompileError(message.format(line=line), line)

    def parse(self) -> list[Assignment]:
        """Parse a whole program and return its assignments in order."""
        self._advance()
        if self.token.type is not TokenType.PROGRAM:
            raise self._fail("Erro: PROGRAMA esperado na linha {line}")

        self._advance()
        if self.token.type is not TokenType.PROGRAM_NAME:
            raise self._fail(
                "Erro: Nome do programa esperado depois de PROGRAMA na linha: {line}"
            )
        if not self.token.value.endswith(":"):
            raise self._fail(
                "Erro: ':' esperado depois do nome do programa na linha: {line}"
            )

        self._advance()
        if self.token.type is not TokenType.START:
            raise self._fail("Erro: INICIO esperado na linha: {line}")

        assignments = []
        self._advance()
        while self.token.type not in (TokenType.RES, TokenType.TOKEN_EOF):
            assignments.append(self.parse_assignment())

        if self.token.type is not TokenType.RES:
            raise self._fail("Erro: RES esperado na linha: {line}")
        variable = self.token.value

        self._advance()
        if self.token.type is not TokenType.ASSIGNMENT:
            raise self._fail("Erro: '=' esperado após RES na linha: {line}")
        assignments.append(Assignment(variable, self.parse_expression()))

        if self.token.type is not TokenType.END:
            raise self._fail("Erro: FIM esperado na linha: {line}")
        return assignments

    def parse_assignment(self) -> Assignment:
        """Parse `variable = expression` starting at the current token."""
        if self.token.type not in (TokenType.VARIABLE, TokenType.RES):
            raise self._fail("Erro: Nome Válido da Variável esperada na linha: {line}")
        variable = self.token.value

        self._advance()
        if self.token.type is not TokenType.ASSIGNMENT:
            raise self._fail(
                "Erro: '=' esperado após Nome da Variável na linha: {line}"
            )
        return Assignment(variable, self.parse_expression())

    def parse_expression(self) -> Node:
        """Parse a sum or difference of terms, starting at the next token."""
        self._advance()
        node = self.parse_term()
        while self.token.type in (TokenType.SUM, TokenType.SUB):
            operator = self.token.type
            self._advance()
            node = OperationNode(operator, node, self.parse_term())
        return node

    def parse_term(self) -> Node:
        """Parse a product or quotient of factors."""
        node = self.parse_factor()
        while self.token.type in (TokenType.MULT, TokenType.DIV):
            operator = self.token.type
            self._advance()
            node = OperationNode(operator, node, self.parse_factor())
        return node

    def parse_factor(self) -> Node:
        """Parse a number, a variable or a parenthesised expression."""
        token = self.token
        if token.type is TokenType.NUMBER:
            self._advance()
            return NumberNode(parse_number(token.value) & 0xFFFF)
        if token.type is TokenType.VARIABLE:
            self._advance()
            return VariableNode(token.value)
        if token.type is TokenType.START_PAREN:
            node = self.parse_expression()
            if self.token.type is not TokenType.END_PAREN:
                raise self._fail("Erro: ')' esperado após expressão na linha: {line}")
            self._advance()
            return node
        raise self._fail("Erro sintático: Fator inválido na linha: {line}")


def _constant_lines(node: Node, seen: set[int]) -> Iterator[str]:
    if isinstance(node, NumberNode):
        if node.value not in seen:
            seen.add(node.value)
            yield f"C{node.value} DB {node.value}"
    elif isinstance(node, OperationNode):
        yield from _constant_lines(node.left, seen)
        yield from _constant_lines(node.right, seen)


def _expression_lines(node: Node) -> Iterator[str]:
    if isinstance(node, NumberNode):
        yield f"LDA C{node.value}"
    elif isinstance(node, VariableNode):
        yield f"LDA {node.name}"
    else:
        yield from _expression_lines(node.left)
        yield "STA TMP"
        yield from _expression_lines(node.right)
        yield "STA TMP2"
        if node.operator is TokenType.SUM:
            yield "LDA TMP"
            yield "ADD TMP2"
        elif node.operator is TokenType.SUB:
            yield "LDA TMP2"
            yield "NOT"
            yield "ADD C1"
            yield "ADD TMP"


def generate_assembly(assignments: Iterable[Assignment]) -> str:
    """Render assignments as assembly text with .DATA and .CODE sections."""
    assignments = list(assignments)
    lines = [".DATA", "TMP DB ?", "TMP2 DB ?", "C1 DB 1"]
    seen = {1}
    for assignment in assignments:
        lines.append(f"{assignment.variable} DB ?")
        lines.extend(_constant_lines(assignment.expression, seen))

    lines.extend(["", ".CODE", ".ORG 0"])
    for assignment in assignments:
        lines.extend(_expression_lines(assignment.expression))
        lines.append(f"STA {assignment.variable}")
    lines.append("HLT")
    return "\n".join(lines) + "\n"


def compile_source(text: str) -> str:
    """Compile LPN source text into assembly text."""
    return generate_assembly(Parser(Lexer(text)).parse())


def main(argv: list[str] | None = None) -> int:
    """Compile the given .lpn file into programa.asm in the current directory."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Número de parâmetros diferente do esperado. Use ./<program> programa.lpn")
        return 0

    try:
        with open(args[0], encoding="latin-1", newline="") as source:
            text = source.read()
    except OSError:
        print("Não foi possível abrir o arquivo .lpn")
        return 0

    try:
        assembly = compile_source(text)
    except CompileError as error:
        print(error)
        return 0

    try:
        with open(OUTPUT_FILE, "w", encoding="latin-1", newline="\n") as output:
            output.write(assembly)
    except OSError:
        print(f"Erro ao criar arquivo {OUTPUT_FILE}")
        return 0

    print(f"Arquivo assembly gerado corretamente: {OUTPUT_FILE}")
    return 0


if __name__ == "__main__":
    sys.exit(main())