from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .config import TranslatorConfig
from .data_section_manager import DataSectionManager
from .instruction import MIPSComment, MIPSDirective, MIPSInstruction, MIPSLabel, MIPSNode
from .label_manager import LabelManager
from .register_allocator import RegisterAllocator, store_opcode
from .symbol_table import SymbolTable

logger = logging.getLogger(__name__)


class MIPSTranslatorBase:
    """
    Shared state of one TAC -> MIPS translation pass.

    The context owns the two output buffers (data and text) and the lookup
    structures every translation rule consults: the symbol table, the storage
    planner with its literal pool, the register allocator, the label manager
    and the pending-parameter buffer.  A new context is built per pass, so
    separate translations never share state.
    """

    def __init__(self, config: Optional[TranslatorConfig] = None) -> None:
        self.config = config or TranslatorConfig()
        self._build_tables()
        self.label_manager = LabelManager()
        self.param_buffer: List[str] = []
        self.text_section: List[MIPSNode] = []
        self.diagnostics: List[str] = []

    # ------------------------------------------------------------------ #
    # Instruction emission helpers
    # ------------------------------------------------------------------ #

    def emit_text(self, node: MIPSNode) -> None:
        self.text_section.append(node)

    def emit_text_many(self, nodes: Iterable[MIPSNode]) -> None:
        for node in nodes:
            self.emit_text(node)

    def emit(self, opcode: str, *operands: str, comment: Optional[str] = None) -> None:
        self.emit_text(MIPSInstruction(opcode, tuple(operands), comment))

    def emit_label(self, name: str) -> None:
        self.label_manager.define_label(name)
        self.emit_text(MIPSLabel(name))

    def emit_comment(self, comment: str) -> None:
        self.emit_text(MIPSComment(comment))

    def emit_diagnostic(self, message: str) -> None:
        """Leave a note for the reader in place of code that could not be generated."""
        logger.warning("%s", message)
        self.diagnostics.append(message)
        self.emit_comment(message)

    @property
    def data_section(self) -> List[MIPSDirective]:
        return self.data_manager.generate_data_section()

    # ------------------------------------------------------------------ #
    # Operand helpers
    # ------------------------------------------------------------------ #

    def scratch(self, index: int = 0) -> str:
        return self.config.scratch_registers[index]

    def register_for(self, name: str) -> str:
        return self.register_allocator.register_for(name)

    def materialize(self, operand: str, scratch: Optional[str] = None) -> str:
        """Emit whatever loads `operand` needs and return the register holding it."""
        register, instructions = self.register_allocator.materialize(operand, scratch)
        self.emit_text_many(instructions)
        return register

    def store_back(self, name: str, register: str) -> None:
        """Write `register` to the storage cell of `name` when it has one."""
        symbol = self.symbol_table.lookup(name)
        if symbol is None or not symbol.memory_backed:
            return
        if symbol.is_array:
            self.emit_diagnostic(f"cannot assign to array '{name}' without an index; value left in {register}")
            return
        self.emit(store_opcode(symbol.semantic_type), register, name, comment=f"store {name}")

    def _build_tables(self) -> None:
        self.data_manager = DataSectionManager()
        self.symbol_table = SymbolTable(self.data_manager)
        self.register_allocator = RegisterAllocator(
            self.symbol_table,
            self.data_manager,
            self.config.register_pool,
            self.config.scratch_registers,
        )

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #

    def program_as_string(self) -> str:
        """Render the data and text sections as one assembly listing."""
        lines = [".data"]
        lines.extend(str(node) for node in self.data_section)
        lines.append("")
        lines.append(".text")
        lines.append(f".globl {self.config.entry_label}")
        lines.append(f"{self.config.entry_label}:")
        lines.extend(str(node) for node in self.text_section)
        return "\n".join(lines) + "\n"
