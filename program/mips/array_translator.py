"""
Array access translation from TAC to MIPS assembly.

Arrays live in the data section as `.space` blocks.  Every access computes
the element address explicitly:

    la   $a3, a          # base
    li   $v1, 4          # element size
    mul  $a2, idx, $v1   # byte offset
    addu $a3, $a3, $a2   # element address

No bounds checks are emitted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tac.instruction import (
    ArrayLoadInstruction,
    ArrayStoreInstruction,
    ArrayZeroFillInstruction,
)

from .config import ZERO_REGISTER
from .register_allocator import load_opcode, store_opcode
from .symbol_table import SemanticType

if TYPE_CHECKING:
    from .translator_base import MIPSTranslatorBase


class ArrayTranslator:
    """
    Translates TAC array instructions to MIPS assembly.

    - astore a, i, v         → element address, then sw/sb v
    - x = a[i]               → element address, then lw/lb into x
    - arr_pad_zero a, s, e   → loop storing zero into a[s] .. a[e-1]
    """

    def __init__(self, translator_base: MIPSTranslatorBase):
        self.base = translator_base

    @property
    def address_register(self) -> str:
        return self.base.config.address_registers[0]

    @property
    def index_register(self) -> str:
        return self.base.config.address_registers[1]

    def element_type(self, array: str) -> SemanticType:
        symbol = self.base.symbol_table.lookup(array)
        if symbol is None or not symbol.is_array:
            return SemanticType.INT
        return symbol.semantic_type

    def _element_address(self, array: str, index: str) -> str:
        """Leave the address of array[index] in the address register."""
        address = self.address_register
        size = self.base.symbol_table.element_size(array)
        self.base.emit("la", address, array, comment=f"&{array}")
        index_reg = self.base.materialize(index, self.index_register)
        self.base.emit("li", self.base.scratch(0), str(size))
        self.base.emit("mul", self.index_register, index_reg, self.base.scratch(0),
                       comment=f"offset = {index} * {size}")
        self.base.emit("addu", address, address, self.index_register)
        return address

    def translate_array_store(self, instruction: ArrayStoreInstruction) -> None:
        """
        TAC:  astore a, i, v
        MIPS: address of a[i] in $a3, then
              sw $rv, 0($a3)          (sb for CHAR arrays)
        """
        array = instruction.array
        address = self._element_address(array, instruction.index)
        value_reg = self.base.materialize(instruction.value, self.base.scratch(0))
        opcode = store_opcode(self.element_type(array))
        self.base.emit(opcode, value_reg, f"0({address})",
                       comment=f"{array}[{instruction.index}] = {instruction.value}")

    def translate_array_load(self, instruction: ArrayLoadInstruction) -> None:
        """
        TAC:  x = a[i]
        MIPS: address of a[i] in $a3, then
              lw $rx, 0($a3)          (lb for CHAR arrays)
        """
        array = instruction.array
        element_type = self.element_type(array)
        self.base.symbol_table.note_temporary(instruction.target, element_type)
        dest_reg = self.base.register_for(instruction.target)
        address = self._element_address(array, instruction.index)
        self.base.emit(load_opcode(element_type), dest_reg, f"0({address})",
                       comment=f"{instruction.target} = {array}[{instruction.index}]")
        self.base.store_back(instruction.target, dest_reg)

    def translate_zero_fill(self, instruction: ArrayZeroFillInstruction) -> None:
        """
        TAC:  arr_pad_zero a, start, end

        MIPS:
              la    $a3, a
              li    $a2, start
              li    $v1, 4
              mul   $v1, $a2, $v1
              addu  $a3, $a3, $v1
              li    $a1, end
          arr_pad_0:
              beq   $a2, $a1, arr_pad_0_end
              sw    $zero, 0($a3)
              addiu $a3, $a3, 4
              addiu $a2, $a2, 1
              j     arr_pad_0
          arr_pad_0_end:
        """
        array = instruction.array
        cursor = self.address_register
        index = self.index_register
        size = self.base.symbol_table.element_size(array)

        self.base.emit("la", cursor, array, comment=f"&{array}")
        start_reg = self.base.materialize(instruction.start, index)
        if start_reg != index:
            self.base.emit("move", index, start_reg)
        self.base.emit("li", self.base.scratch(0), str(size))
        self.base.emit("mul", self.base.scratch(0), index, self.base.scratch(0))
        self.base.emit("addu", cursor, cursor, self.base.scratch(0),
                       comment=f"&{array}[{instruction.start}]")
        end_reg = self.base.materialize(instruction.end, self.base.scratch(1))

        loop_label = self.base.label_manager.generate_unique_label("arr_pad", suffixes=("", "_end"))
        end_label = f"{loop_label}_end"
        self.base.label_manager.reference_label(loop_label)
        self.base.label_manager.reference_label(end_label)

        self.base.emit_label(loop_label)
        self.base.emit("beq", index, end_reg, end_label)
        self.base.emit(store_opcode(self.element_type(array)), ZERO_REGISTER, f"0({cursor})")
        self.base.emit("addiu", cursor, cursor, str(size))
        self.base.emit("addiu", index, index, "1")
        self.base.emit("j", loop_label)
        self.base.emit_label(end_label)
