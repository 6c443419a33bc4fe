"""
Translator configuration.

The defaults describe the register conventions of the generated code:

    $s0-$s7, $t0-$t9   pool bound to TAC variables and temporaries
    $v1, $a1           scratch registers for literal operands
    $a3, $a2           array address / index registers
    $v0                syscall number and function return value
    $a0                syscall argument
    $at                left to the assembler for pseudo-instructions
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .errors import RegisterAllocationError

SAVED_REGISTERS: Tuple[str, ...] = tuple(f"$s{i}" for i in range(8))
TEMP_REGISTERS: Tuple[str, ...] = tuple(f"$t{i}" for i in range(10))
DEFAULT_REGISTER_POOL: Tuple[str, ...] = SAVED_REGISTERS + TEMP_REGISTERS
DEFAULT_SCRATCH_REGISTERS: Tuple[str, ...] = ("$v1", "$a1")
DEFAULT_ADDRESS_REGISTERS: Tuple[str, ...] = ("$a3", "$a2")

RETURN_REGISTER = "$v0"
SYSCALL_REGISTER = "$v0"
ARGUMENT_REGISTER = "$a0"
FLOAT_ARGUMENT_REGISTER = "$f12"
STACK_POINTER = "$sp"
RETURN_ADDRESS = "$ra"
ZERO_REGISTER = "$zero"

WORD_SIZE = 4

RESERVED_REGISTERS: Tuple[str, ...] = (
    "$at", RETURN_REGISTER, ARGUMENT_REGISTER, STACK_POINTER, RETURN_ADDRESS, ZERO_REGISTER,
)


@dataclass(frozen=True)
class TranslatorConfig:
    """Knobs for a single translation pass."""

    register_pool: Tuple[str, ...] = DEFAULT_REGISTER_POOL
    scratch_registers: Tuple[str, ...] = DEFAULT_SCRATCH_REGISTERS
    address_registers: Tuple[str, ...] = DEFAULT_ADDRESS_REGISTERS
    word_size: int = WORD_SIZE
    emit_exit: bool = True
    annotate: bool = True
    entry_label: str = "main"
    strict_labels: bool = False

    def __post_init__(self) -> None:
        if not self.register_pool:
            raise RegisterAllocationError("register pool must contain at least one register")
        if len(self.scratch_registers) < 2:
            raise RegisterAllocationError("two scratch registers are required")
        if len(self.address_registers) < 2:
            raise RegisterAllocationError("two address registers are required")
        special = set(self.scratch_registers) | set(self.address_registers) | set(RESERVED_REGISTERS)
        clashes = sorted(special.intersection(self.register_pool))
        if clashes:
            raise RegisterAllocationError(
                f"registers {', '.join(clashes)} cannot be both pooled and reserved"
            )
        if self.word_size <= 0:
            raise ValueError("word_size must be positive")
