"""
Symbol and type registry for the MIPS backend.

Every scalar or array name the TAC mentions is recorded here together with
its semantic type and whether it owns a cell in the `.data` segment.  The
first declaration of a memory-backed symbol hands the symbol to the storage
layout planner, which appends its directive.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterator, Optional

from tac.operands import (
    is_boolean_literal,
    is_char_literal,
    is_identifier,
    is_integer_literal,
    is_quoted_string,
)

if TYPE_CHECKING:
    from .data_section_manager import DataSectionManager

logger = logging.getLogger(__name__)


class SemanticType(Enum):
    INT = "INT"
    FLOAT = "FLOAT"
    BOOL = "BOOL"
    CHAR = "CHAR"
    STRING = "STRING"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_name(cls, raw: Optional[str]) -> "SemanticType":
        """Map a TAC type name (any case) to a SemanticType."""
        if raw is None:
            return cls.UNKNOWN
        name = raw.strip().upper()
        if name == "BOOLEAN":
            return cls.BOOL
        if name == "INTEGER":
            return cls.INT
        try:
            return cls(name)
        except ValueError:
            return cls.UNKNOWN


class SymbolKind(Enum):
    SCALAR = "scalar"
    ARRAY = "array"


@dataclass
class Symbol:
    name: str
    kind: SymbolKind
    semantic_type: SemanticType
    element_count: int = 0
    memory_backed: bool = True

    @property
    def is_array(self) -> bool:
        return self.kind is SymbolKind.ARRAY

    @property
    def element_size(self) -> int:
        return size_of(self.semantic_type)

    @property
    def size_bytes(self) -> int:
        if self.is_array:
            return max(1, self.element_count) * self.element_size
        return self.element_size


def size_of(semantic_type: SemanticType) -> int:
    """CHAR occupies one byte; everything else (STRING pointers included) a word."""
    if semantic_type is SemanticType.CHAR:
        return 1
    return 4


def infer_type(token: Optional[str]) -> SemanticType:
    """Best-effort type for a literal or a name that was never declared."""
    if not token:
        return SemanticType.UNKNOWN
    if is_quoted_string(token):
        return SemanticType.STRING
    if is_char_literal(token):
        return SemanticType.CHAR
    if is_integer_literal(token):
        return SemanticType.INT
    if is_boolean_literal(token):
        return SemanticType.BOOL
    if "." in token:
        return SemanticType.FLOAT
    if len(token) == 1:
        return SemanticType.CHAR
    return SemanticType.STRING


class SymbolTable:
    """
    Registry of every name seen during one translation pass.

    Symbols are never removed.  Iteration yields them in first-registration
    order, which is also the order of their storage directives.
    """

    def __init__(self, data_manager: Optional["DataSectionManager"] = None) -> None:
        self.data_manager = data_manager
        self._symbols: Dict[str, Symbol] = {}

    def declare(self, name: str, semantic_type: SemanticType) -> Symbol:
        """Register a memory-backed scalar once; redeclaration is a no-op."""
        symbol = self._symbols.get(name)
        if symbol is not None:
            if not symbol.memory_backed:
                # First real declaration of a name used so far as a temporary.
                symbol.memory_backed = True
                symbol.semantic_type = semantic_type
                self._reserve(symbol)
            return symbol

        symbol = Symbol(name, SymbolKind.SCALAR, semantic_type)
        self._symbols[name] = symbol
        self._reserve(symbol)
        return symbol

    def declare_array(self, name: str, semantic_type: SemanticType, length: int) -> Symbol:
        """Register an array once; its footprint is max(1, length) elements."""
        symbol = self._symbols.get(name)
        if symbol is not None:
            if not symbol.memory_backed:
                symbol.kind = SymbolKind.ARRAY
                symbol.semantic_type = semantic_type
                symbol.element_count = length
                symbol.memory_backed = True
                self._reserve(symbol)
            return symbol

        symbol = Symbol(name, SymbolKind.ARRAY, semantic_type, element_count=length)
        self._symbols[name] = symbol
        self._reserve(symbol)
        return symbol

    def note_temporary(self, name: str, semantic_type: SemanticType) -> Symbol:
        """Record an undeclared assignment target that lives only in a register."""
        symbol = self._symbols.get(name)
        if symbol is None:
            symbol = Symbol(name, SymbolKind.SCALAR, semantic_type, memory_backed=False)
            self._symbols[name] = symbol
        return symbol

    def lookup(self, name: str) -> Optional[Symbol]:
        return self._symbols.get(name)

    def type_of(self, name: str) -> SemanticType:
        symbol = self._symbols.get(name)
        if symbol is not None:
            return symbol.semantic_type
        return infer_type(name)

    def operand_type(self, operand: str) -> SemanticType:
        """Like type_of, but a name nobody declared or assigned is UNKNOWN."""
        symbol = self._symbols.get(operand)
        if symbol is not None:
            return symbol.semantic_type
        if is_identifier(operand) and not is_boolean_literal(operand):
            return SemanticType.UNKNOWN
        return infer_type(operand)

    def element_size(self, name: str) -> int:
        """Element width of an array; undeclared arrays are taken as INT."""
        symbol = self._symbols.get(name)
        if symbol is None:
            return size_of(SemanticType.INT)
        return symbol.element_size

    def is_memory_backed(self, name: str) -> bool:
        symbol = self._symbols.get(name)
        return symbol is not None and symbol.memory_backed

    def is_array(self, name: str) -> bool:
        symbol = self._symbols.get(name)
        return symbol is not None and symbol.is_array

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols.values())

    def __len__(self) -> int:
        return len(self._symbols)

    def _reserve(self, symbol: Symbol) -> None:
        logger.debug("reserving storage for %s %s", symbol.kind.value, symbol.name)
        if self.data_manager is not None:
            self.data_manager.add_symbol(symbol)
