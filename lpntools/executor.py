"""Executor for memory images of the 8-bit accumulator machine."""

from __future__ import annotations

import struct
import sys
from dataclasses import dataclass, field
from enum import IntEnum

OFFSET = 2
WORDS = 258
IMAGE_SIZE = WORDS * 2
EXPORT_FILE = "export.mem"

_IMAGE_FORMAT = f"<{WORDS}H"


class Opcode(IntEnum):
    """Instruction codes understood by the machine."""

    NOP = 0
    STA = 16
    LDA = 32
    ADD = 48
    OR = 64
    AND = 80
    NOT = 96
    JMP = 128
    JN = 144
    JZ = 160
    HLT = 240


class MemoryImageError(Exception):
    """Raised for a malformed image or an access outside memory."""


def _to_int8(value: int) -> int:
    value &= 0xFF
    return value - 0x100 if value & 0x80 else value


@dataclass
class Machine:
    """Machine state: 258 16-bit words (2 header words), PC, AC and flags."""

    memory: list[int] = field(default_factory=lambda: [0] * WORDS)
    pc: int = 0
    ac: int = 0
    n: bool = False
    z: bool = False
    unknown_opcode: int | None = None

    def __post_init__(self) -> None:
        if len(self.memory) != WORDS:
            raise MemoryImageError(
                f"memory must hold {WORDS} words, got {len(self.memory)}"
            )
        self.memory = [word & 0xFFFF for word in self.memory]

    @classmethod
    def from_bytes(cls, data: bytes) -> Machine:
        """Load a machine from a little-endian memory image."""
        if len(data) < IMAGE_SIZE:
            raise MemoryImageError(
                f"memory image needs {IMAGE_SIZE} bytes, got {len(data)}"
            )
        return cls(list(struct.unpack(_IMAGE_FORMAT, data[:IMAGE_SIZE])))

    def to_bytes(self) -> bytes:
        """Serialise memory as a little-endian image."""
        return struct.pack(_IMAGE_FORMAT, *self.memory)

    def _index(self, index: int) -> int:
        if not 0 <= index < WORDS:
            raise MemoryImageError(f"memory access out of range: {index}")
        return index

    def _operand(self) -> int:
        return self.memory[self._index(self.pc + OFFSET + 1)]

    def _operand_address(self) -> int:
        return self._index(self._operand() + OFFSET)

    def _set_ac(self, value: int) -> None:
        self.ac = _to_int8(value)
        self.n = bool(self.ac & 0x80)
        self.z = self.ac == 0

    def _advance(self, count: int) -> None:
        self.pc = (self.pc + count) & 0xFF

    def _jump(self, taken: bool) -> None:
        if taken:
            self.pc = self._operand() & 0xFF
        else:
            self._advance(2)

    def step(self) -> bool:
        """Execute one instruction; return False once the machine halts."""
        command = self.memory[self._index(self.pc + OFFSET)]
        try:
            opcode = Opcode(command)
        except ValueError:
            self.unknown_opcode = command
            return False

        match opcode:
            case Opcode.NOP:
                self._advance(1)
            case Opcode.STA:
                self.memory[self._operand_address()] = self.ac & 0xFFFF
                self._advance(2)
            case Opcode.LDA:
                value = self.memory[self._operand_address()]
                self._advance(2)
                self._set_ac(value)
            case Opcode.ADD:
                value = self.memory[self._operand_address()]
                self._advance(2)
                self._set_ac(self.ac + value)
            case Opcode.OR:
                value = self.memory[self._operand_address()]
                self._advance(2)
                self._set_ac(self.ac | value)
            case Opcode.AND:
                value = self.memory[self._operand_address()]
                self._advance(2)
                self._set_ac(self.ac & value)
            case Opcode.NOT:
                self._advance(1)
                self._set_ac(~self.ac)
            case Opcode.JMP:
                self._jump(True)
            case Opcode.JN:
                self._jump(self.n)
            case Opcode.JZ:
                self._jump(self.z)
            case Opcode.HLT:
                return False
        return True

    def run(self) -> Machine:
        """Execute until HLT or an unknown opcode."""
        while self.step():
            pass
        return self

    def report(self) -> str:
        """Render the registers and the 256 addressable memory words."""
        lines = [
            "----------------------------",
            "|  PC  |  AC  |  N  |  Z  |",
            "|------|------|-----|-----|",
            f"| {self.pc:4d} | {self.ac:4d} |  {int(self.n)}  |  {int(self.z)}  |",
            "----------------------------",
            "",
            "Memória:",
        ]
        lines.extend(
            f"[{index - OFFSET:3d}] {self.memory[index]:4d}"
            for index in range(OFFSET, WORDS)
        )
        return "\n".join(lines) + "\n"


def main(argv: list[str] | None = None) -> int:
    """Run a memory image file and write the final memory to export.mem."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Quantidade de parâmetros inválida", end="")
        return 1

    try:
        with open(args[0], "rb") as image:
            data = image.read()
    except OSError:
        print("Não foi encontrado o arquivo informado.")
        return 1

    try:
        machine = Machine.from_bytes(data)
    except MemoryImageError:
        print("Erro ao ler o arquivo.")
        return 1

    machine.run()
    if machine.unknown_opcode is not None:
        print(f"Comando não reconhecido: {machine.unknown_opcode}")
    print(machine.report(), end="")

    try:
        with open(EXPORT_FILE, "wb") as export:
            export.write(machine.to_bytes())
    except OSError:
        print("Erro ao criar arquivo para exportação", end="")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())