"""
Console I/O translation through SPIM/MARS syscalls.

    print STRING → $v0 = 4  (address in $a0)
    print CHAR   → $v0 = 11 (character in $a0)
    print FLOAT  → $v0 = 2  (value in $f12)
    print other  → $v0 = 1  (integer in $a0)
    read         → $v0 = 5  (integer returned in $v0)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tac.instruction import PrintInstruction, ReadInstruction
from tac.operands import (
    integer_value,
    is_boolean_literal,
    is_char_literal,
    is_float_literal,
    is_identifier,
    is_integer_literal,
    is_text_literal,
)

from .config import ARGUMENT_REGISTER, FLOAT_ARGUMENT_REGISTER, SYSCALL_REGISTER
from .register_allocator import load_opcode
from .symbol_table import SemanticType

if TYPE_CHECKING:
    from .translator_base import MIPSTranslatorBase

logger = logging.getLogger(__name__)

SYSCALL_PRINT_INT = 1
SYSCALL_PRINT_FLOAT = 2
SYSCALL_PRINT_STRING = 4
SYSCALL_READ_INT = 5
SYSCALL_EXIT = 10
SYSCALL_PRINT_CHAR = 11


class IOTranslator:
    """Translates `print` and `read` lines to syscall sequences."""

    def __init__(self, translator_base: MIPSTranslatorBase):
        self.base = translator_base

    def translate_print(self, instruction: PrintInstruction) -> None:
        operand = instruction.value
        semantic_type = self.base.symbol_table.operand_type(operand)

        if self._is_bare_word(operand):
            # A name nothing declared or assigned is printed as its own text.
            label = self.base.data_manager.intern_literal(SemanticType.STRING, operand)
            self.base.emit("la", ARGUMENT_REGISTER, label, comment=f"text {operand}")
            service = SYSCALL_PRINT_STRING
        elif semantic_type is SemanticType.FLOAT:
            value_reg = self.base.materialize(operand, self.base.scratch(0))
            self.base.emit("mtc1", value_reg, FLOAT_ARGUMENT_REGISTER)
            service = SYSCALL_PRINT_FLOAT
        else:
            self._load_argument(operand)
            if semantic_type is SemanticType.STRING:
                service = SYSCALL_PRINT_STRING
            elif semantic_type is SemanticType.CHAR:
                service = SYSCALL_PRINT_CHAR
            else:
                service = SYSCALL_PRINT_INT

        self.base.emit("li", SYSCALL_REGISTER, str(service))
        self.base.emit("syscall", comment=f"print {operand}")

    def _is_bare_word(self, operand: str) -> bool:
        return (
            is_identifier(operand)
            and not is_boolean_literal(operand)
            and operand not in self.base.symbol_table
        )

    def _load_argument(self, operand: str) -> None:
        """Put the value (or, for text, the address) of `operand` in $a0."""
        if is_integer_literal(operand) or is_boolean_literal(operand) or is_char_literal(operand):
            self.base.emit("li", ARGUMENT_REGISTER, integer_value(operand))
            return
        if is_float_literal(operand) or is_text_literal(operand):
            value_reg = self.base.materialize(operand, ARGUMENT_REGISTER)
            if value_reg != ARGUMENT_REGISTER:
                self.base.emit("move", ARGUMENT_REGISTER, value_reg)
            return

        symbol = self.base.symbol_table.lookup(operand)
        if symbol is not None and symbol.memory_backed and not symbol.is_array:
            self.base.emit(load_opcode(symbol.semantic_type), ARGUMENT_REGISTER, operand,
                           comment=f"load {operand}")
            return

        value_reg = self.base.materialize(operand)
        self.base.emit("move", ARGUMENT_REGISTER, value_reg)

    def translate_read(self, instruction: ReadInstruction) -> None:
        target = instruction.target
        symbols = self.base.symbol_table
        if not symbols.is_memory_backed(target):
            symbols.declare(target, SemanticType.INT)
            logger.debug("read target %s declared as int", target)

        self.base.emit("li", SYSCALL_REGISTER, str(SYSCALL_READ_INT))
        self.base.emit("syscall", comment=f"read {target}")
        self.base.store_back(target, SYSCALL_REGISTER)
