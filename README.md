# lpntools

A small toolchain for teaching how programs become machine code.

- **lpn-compile**: turns an LPN source file (a tiny language of integer
  assignments) into assembly text for an 8-bit accumulator machine.
- **lpn-exec**: runs a memory image for that accumulator machine, prints
  the final registers and memory, and writes the final image back out.
- **bf-compile**: reads a line such as `total=2+3*4` from standard input and
  writes a Brainfuck program that prints the label, `= ` and the computed value.
- **bf-run**: a Brainfuck interpreter with a 30,000-cell byte tape.

## Installation

```
pip install .
```

## The LPN language

```
PROGRAMA "exemplo":
INICIO
a = 2 + 3
b = a - 1
RES = a + b
FIM
```

Tokens are separated by whitespace. Numbers may be decimal or hexadecimal
(`0x1F`). The parser accepts `+`, `-`, `*`, `/` and parentheses, but the
generated assembly only computes addition and subtraction; for `*` and `/`
the operands are evaluated and stored, and no arithmetic is emitted.

```
lpn-compile programa.lpn
```

This writes `programa.asm` in the current directory, with a `.DATA` section
(`TMP`, `TMP2`, one cell per variable and one `C<n>` cell per constant) and a
`.CODE` section ending in `HLT`. Syntax errors are printed with the line on
which they were found, and no file is written.

From Python:

```python
from lpntools.compiler import CompileError, compile_source

try:
    assembly = compile_source(open("programa.lpn").read())
except CompileError as error:
    print(error, error.line_number)
```

The pieces are also available separately: `Lexer`, `Parser` (whose `parse()`
returns a list of `Assignment` objects holding `NumberNode`, `VariableNode`
and `OperationNode` trees) and `generate_assembly`.

## Running a memory image

```
lpn-exec programa.mem
```

The image holds 258 little-endian 16-bit words: a two-word header followed by
256 memory cells; files shorter than that are rejected. The machine supports
`NOP`, `STA`, `LDA`, `ADD`, `OR`, `AND`, `NOT`, `JMP`, `JN`, `JZ` and `HLT`
(see `Opcode`). It runs until `HLT` or an unknown opcode, which is reported.
Then the registers (PC, AC, N, Z) and the memory are printed, and the final
image is written to `export.mem` in the current directory.

```python
from lpntools.executor import Machine

machine = Machine.from_bytes(open("programa.mem", "rb").read())
machine.run()
print(machine.report())
image = machine.to_bytes()
```

`Machine.step()` executes a single instruction and returns `False` once the
machine halts. Access outside memory raises `MemoryImageError`.

## Brainfuck tools

```
echo "resultado=10/2+3" | bf-compile > prog.bf
bf-run < prog.bf
```

`bf-compile` evaluates the expression strictly left to right, without
operator precedence, using 32-bit integer arithmetic (`10/2+3` gives `8`).
Characters other than digits and `+-*/` are skipped. A line without `=`
produces no output.

`bf-run` reads the whole program from standard input; only the first 65,535
bytes are run. Reading past the end of input stores 255 in the cell.

```python
import io
from lpntools.bfcompiler import calc, compile_line
from lpntools.bfinterpreter import run

calc("1+2*3")                        # 9
printed = run(compile_line("x=1+2"), io.BytesIO(b""))
print(printed.decode())              # x= 3
```

`run` returns every byte the program printed and, when given a binary
`stdout` stream, also writes them there.

## What is not included

There is no assembler: nothing here turns the `.asm` text produced by
`lpn-compile` into a memory image for `lpn-exec`. Images have to be produced
some other way.