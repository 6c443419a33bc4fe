"""
Data Section Manager for MIPS Code Generation

Plans the static storage of a program: one zero-initialised cell or block per
declared symbol, followed by a deduplicated pool of string and float
literals.  Labels for literals are generated here; symbol cells use the
symbol name as their label.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from tac.operands import strip_quotes

from .instruction import MIPSDirective
from .symbol_table import SemanticType, Symbol

logger = logging.getLogger(__name__)

LITERAL_PREFIXES = {
    SemanticType.STRING: "str_lit_",
    SemanticType.FLOAT: "flt_lit_",
}
WORD_ALIGNMENT = 4


@dataclass
class StringLiteral:
    """Represents a string literal in the data section."""
    label: str
    value: str

    def to_directive(self) -> MIPSDirective:
        """Convert to a null-terminated .asciiz directive."""
        escaped = self._escape_string(self.value)
        return MIPSDirective(".asciiz", (f'"{escaped}"',), label=self.label)

    def _escape_string(self, s: str) -> str:
        s = s.replace('\\', '\\\\')
        s = s.replace('"', '\\"')
        return s


@dataclass
class FloatLiteral:
    """Represents a float constant in the data section."""
    label: str
    value: str

    def to_directive(self) -> MIPSDirective:
        return MIPSDirective(".float", (self.value,), label=self.label)


def scalar_directive(symbol: Symbol) -> MIPSDirective:
    """Zero-initialised cell sized for the symbol's type."""
    if symbol.semantic_type is SemanticType.FLOAT:
        return MIPSDirective(".float", ("0.0",), label=symbol.name)
    if symbol.semantic_type is SemanticType.CHAR:
        return MIPSDirective(".byte", ("0",), label=symbol.name)
    # STRING variables hold a pointer to a literal, never inline text.
    return MIPSDirective(".word", ("0",), label=symbol.name)


def array_directive(symbol: Symbol) -> MIPSDirective:
    """Zero-filled block annotated with the declared element type and length."""
    return MIPSDirective(
        ".space",
        (str(symbol.size_bytes),),
        comment=f"{symbol.semantic_type.value}[{symbol.element_count}]",
        label=symbol.name,
    )


class DataSectionManager:
    """
    Manages the .data section of MIPS assembly.

    Responsibilities:
    - Emit one storage directive per declared symbol, in declaration order
    - Intern string and float literals, reusing labels for repeated values
    - Render the directives for the final program

    The literal pool is append-only: literals are never pruned, even when the
    instruction that introduced them emitted no code.
    """

    def __init__(self) -> None:
        self.symbol_directives: List[MIPSDirective] = []
        self.literals: Dict[Tuple[SemanticType, str], Union[StringLiteral, FloatLiteral]] = {}
        self.literal_directives: List[MIPSDirective] = []
        self._counters: Dict[SemanticType, int] = {kind: 0 for kind in LITERAL_PREFIXES}
        self._offset = 0

    def add_symbol(self, symbol: Symbol) -> MIPSDirective:
        """
        Append the storage directive for a freshly declared symbol.

        `.word` and `.float` align themselves, `.space` does not: a word array
        that would start off a word boundary (after `.byte` cells or a char
        array) is preceded by `.align 2`.
        """
        word_sized = symbol.element_size == WORD_ALIGNMENT
        if symbol.is_array:
            if word_sized and self._offset % WORD_ALIGNMENT:
                self.symbol_directives.append(MIPSDirective(".align", ("2",)))
                self._align_offset()
            directive = array_directive(symbol)
        else:
            if word_sized:
                self._align_offset()
            directive = scalar_directive(symbol)
        self.symbol_directives.append(directive)
        self._offset += symbol.size_bytes
        return directive

    def _align_offset(self) -> None:
        self._offset += -self._offset % WORD_ALIGNMENT

    def intern_literal(self, semantic_type: SemanticType, value: str) -> str:
        """
        Return the label holding `value`, creating it on first use.

        Args:
            semantic_type: SemanticType.STRING or SemanticType.FLOAT
            value: Literal text as written in the TAC; surrounding double
                quotes of string literals are not part of the stored text

        Returns:
            Label name (e.g. "str_lit_0", "flt_lit_2")
        """
        if semantic_type not in LITERAL_PREFIXES:
            raise ValueError(f"no literal pool for {semantic_type.value} values")

        if semantic_type is SemanticType.STRING:
            value = strip_quotes(value)

        key = (semantic_type, value)
        existing = self.literals.get(key)
        if existing is not None:
            return existing.label

        label = f"{LITERAL_PREFIXES[semantic_type]}{self._counters[semantic_type]}"
        self._counters[semantic_type] += 1

        if semantic_type is SemanticType.STRING:
            literal = StringLiteral(label, value)
        else:
            literal = FloatLiteral(label, value)
        self.literals[key] = literal
        self.literal_directives.append(literal.to_directive())
        logger.debug("interned %s literal %r as %s", semantic_type.value, value, label)
        return label

    def get_literal_label(self, semantic_type: SemanticType, value: str) -> Optional[str]:
        """Get the label for a literal if it was interned already."""
        if semantic_type is SemanticType.STRING:
            value = strip_quotes(value)
        literal = self.literals.get((semantic_type, value))
        return literal.label if literal else None

    def generate_data_section(self) -> List[MIPSDirective]:
        """Symbol directives in declaration order, then literals in first-use order."""
        return self.symbol_directives + self.literal_directives
