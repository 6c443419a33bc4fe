from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from tac.operands import (
    integer_value,
    is_boolean_literal,
    is_char_literal,
    is_float_literal,
    is_integer_literal,
    is_text_literal,
)

from .config import DEFAULT_REGISTER_POOL, DEFAULT_SCRATCH_REGISTERS
from .data_section_manager import DataSectionManager
from .errors import RegisterAllocationError
from .instruction import MIPSInstruction
from .symbol_table import SemanticType, SymbolTable

logger = logging.getLogger(__name__)


def load_opcode(semantic_type: SemanticType) -> str:
    return "lb" if semantic_type is SemanticType.CHAR else "lw"


def store_opcode(semantic_type: SemanticType) -> str:
    return "sb" if semantic_type is SemanticType.CHAR else "sw"


def is_literal(operand: str) -> bool:
    """True for operands that are loaded as immediates or from the literal pool."""
    return (
        is_integer_literal(operand)
        or is_boolean_literal(operand)
        or is_char_literal(operand)
        or is_float_literal(operand)
        or is_text_literal(operand)
    )


class RegisterAllocator:
    """
    Binds TAC names to a fixed, ordered pool of physical registers.

    The strategy is deliberately simple:
      1. A name keeps the register it was first given for the whole pass.
      2. New names take the next unused register of the pool.
      3. Once the pool is exhausted every new name shares the last register.

    Rule 3 means two live values can alias one register.  Nothing is spilled;
    the situation is logged once per pass so large inputs are easy to spot.

    Like the rest of the backend's helpers the allocator never emits code
    itself: :meth:`materialize` returns the instructions needed to bring an
    operand into a register and the translator context appends them.
    """

    def __init__(
        self,
        symbol_table: SymbolTable,
        data_manager: DataSectionManager,
        allocatable_registers: Optional[Sequence[str]] = None,
        scratch_registers: Optional[Sequence[str]] = None,
    ) -> None:
        if allocatable_registers is None:
            allocatable_registers = DEFAULT_REGISTER_POOL
        if scratch_registers is None:
            scratch_registers = DEFAULT_SCRATCH_REGISTERS
        if not allocatable_registers:
            raise RegisterAllocationError("register pool must contain at least one register")
        if not scratch_registers:
            raise RegisterAllocationError("at least one scratch register is required")

        self.symbol_table = symbol_table
        self.data_manager = data_manager
        self._allocatable_registers: Tuple[str, ...] = tuple(allocatable_registers)
        self._scratch_registers: Tuple[str, ...] = tuple(scratch_registers)
        self._bindings: Dict[str, str] = {}
        self._next_free = 0
        self._exhaustion_reported = False

    @property
    def allocatable_registers(self) -> Tuple[str, ...]:
        return self._allocatable_registers

    @property
    def scratch_registers(self) -> Tuple[str, ...]:
        return self._scratch_registers

    @property
    def bindings(self) -> Dict[str, str]:
        """Snapshot of name -> register bindings in allocation order."""
        return dict(self._bindings)

    @property
    def is_exhausted(self) -> bool:
        return self._next_free >= len(self._allocatable_registers)

    def lookup(self, name: str) -> Optional[str]:
        return self._bindings.get(name)

    def register_for(self, name: str) -> str:
        """Return the register bound to `name`, binding one on first request."""
        if not name:
            raise RegisterAllocationError("Cannot allocate register for an empty name.")

        register = self._bindings.get(name)
        if register is not None:
            return register

        if self._next_free < len(self._allocatable_registers):
            register = self._allocatable_registers[self._next_free]
            self._next_free += 1
        else:
            register = self._allocatable_registers[-1]
            if not self._exhaustion_reported:
                logger.warning(
                    "register pool exhausted at %r; further names share %s",
                    name,
                    register,
                )
                self._exhaustion_reported = True

        self._bindings[name] = register
        logger.debug("bound %s -> %s", name, register)
        return register

    def materialize(
        self,
        operand: str,
        scratch: Optional[str] = None,
    ) -> Tuple[str, List[MIPSInstruction]]:
        """
        Bring `operand` into a register.

        Args:
            operand: TAC operand text (name or literal)
            scratch: Register receiving literal values; defaults to the first
                scratch register.  Literals never create a binding.

        Returns:
            Tuple of (register holding the value, instructions to emit first).
        """
        operand = operand.strip()
        target = scratch or self._scratch_registers[0]

        if is_integer_literal(operand) or is_boolean_literal(operand) or is_char_literal(operand):
            return target, [MIPSInstruction("li", (target, integer_value(operand)))]

        if is_float_literal(operand):
            label = self.data_manager.intern_literal(SemanticType.FLOAT, operand)
            return target, [MIPSInstruction("lw", (target, label), comment=f"float {operand}")]

        if is_text_literal(operand):
            label = self.data_manager.intern_literal(SemanticType.STRING, operand)
            return target, [MIPSInstruction("la", (target, label))]

        register = self.register_for(operand)
        symbol = self.symbol_table.lookup(operand)
        if symbol is None or not symbol.memory_backed:
            return register, []

        if symbol.is_array:
            return register, [MIPSInstruction("la", (register, operand), comment=f"&{operand}")]

        opcode = load_opcode(symbol.semantic_type)
        return register, [MIPSInstruction(opcode, (register, operand), comment=f"load {operand}")]
