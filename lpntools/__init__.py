"""LPN compiler, accumulator-machine executor and Brainfuck compiler and interpreter."""

__version__ = "0.1.0"
__all__ = ["compiler", "executor", "bfcompiler", "bfinterpreter"]