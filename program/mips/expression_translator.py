from __future__ import annotations

import logging
from typing import Callable, Dict, List

from tac.instruction import AssignInstruction
from tac.operands import (
    LOGICAL_OPERATORS,
    RELATIONAL_OPERATORS,
    integer_value,
    is_boolean_literal,
    is_char_literal,
    is_float_literal,
    is_integer_literal,
    is_text_literal,
)

from .arithmetic import (
    translate_add,
    translate_complement,
    translate_div,
    translate_logical_and,
    translate_logical_or,
    translate_mult,
    translate_negate,
    translate_sub,
)
from .comparison import (
    translate_equal,
    translate_greater_equal,
    translate_greater_than,
    translate_less_equal,
    translate_less_than,
    translate_not_equal,
)
from .instruction import MIPSInstruction
from .symbol_table import SemanticType
from .translator_base import MIPSTranslatorBase

logger = logging.getLogger(__name__)

BinaryTemplate = Callable[[str, str, str], List[MIPSInstruction]]
UnaryTemplate = Callable[[str, str], List[MIPSInstruction]]

BINARY_TEMPLATES: Dict[str, BinaryTemplate] = {
    "+": translate_add,
    "-": translate_sub,
    "*": translate_mult,
    "/": translate_div,
    "&&": translate_logical_and,
    "||": translate_logical_or,
    "==": translate_equal,
    "!=": translate_not_equal,
    "<": translate_less_than,
    "<=": translate_less_equal,
    ">": translate_greater_than,
    ">=": translate_greater_equal,
}

UNARY_TEMPLATES: Dict[str, UnaryTemplate] = {
    "-": translate_negate,
    "!": translate_complement,
}


def result_type(operator: str) -> SemanticType:
    if operator in RELATIONAL_OPERATORS or operator in LOGICAL_OPERATORS:
        return SemanticType.BOOL
    return SemanticType.INT


class ExpressionTranslator:
    """
    Translates TAC assignments to MIPS assembly.

    This class handles:
    - Binary operations (+, -, *, /, &&, ||, ==, !=, <, <=, >, >=)
    - Unary operations (-, !)
    - Moves of names and literals (x = y, x = 5, x = "text", x = 1.5)

    Every operand goes through the context's `materialize`, and every result
    is written back to its storage cell when the destination is declared.
    """

    def __init__(self, translator_base: MIPSTranslatorBase):
        self.base = translator_base

    def translate_assignment(self, instruction: AssignInstruction) -> None:
        """
        Dispatch on the shape of the assignment.

        Examples:
            AssignInstruction("t1", "a", "+", "b")   # binary
            AssignInstruction("t2", "a", "-")        # unary
            AssignInstruction("t3", "42")            # move
        """
        if instruction.is_binary:
            self._translate_binary_operation(
                instruction.target,
                instruction.operand1,
                instruction.operator,
                instruction.operand2,
            )
        elif instruction.is_unary:
            self._translate_unary_operation(
                instruction.target, instruction.operator, instruction.operand1
            )
        else:
            self._translate_simple_assignment(instruction.target, instruction.operand1)

    def _translate_binary_operation(
        self,
        target: str,
        operand1: str,
        operator: str,
        operand2: str,
    ) -> None:
        template = BINARY_TEMPLATES.get(operator)
        if template is None:
            self.base.emit_diagnostic(
                f"unsupported operator '{operator}' in: {target} = {operand1} {operator} {operand2}"
            )
            return

        self.base.symbol_table.note_temporary(target, result_type(operator))
        dest_reg = self.base.register_for(target)
        src1_reg = self.base.materialize(operand1, self.base.scratch(0))
        src2_reg = self.base.materialize(operand2, self.base.scratch(1))
        self.base.emit_text_many(template(dest_reg, src1_reg, src2_reg))
        self.base.store_back(target, dest_reg)

    def _translate_unary_operation(self, target: str, operator: str, operand: str) -> None:
        template = UNARY_TEMPLATES.get(operator)
        if template is None:
            self.base.emit_diagnostic(
                f"unsupported unary operator '{operator}' in: {target} = {operator}{operand}"
            )
            return

        semantic_type = SemanticType.BOOL if operator == "!" else SemanticType.INT
        self.base.symbol_table.note_temporary(target, semantic_type)
        dest_reg = self.base.register_for(target)
        src_reg = self.base.materialize(operand)
        self.base.emit_text_many(template(dest_reg, src_reg))
        self.base.store_back(target, dest_reg)

    def _translate_simple_assignment(self, target: str, source: str) -> None:
        symbols = self.base.symbol_table
        symbols.note_temporary(target, symbols.operand_type(source))
        dest_reg = self.base.register_for(target)

        if is_integer_literal(source) or is_boolean_literal(source) or is_char_literal(source):
            self.base.emit("li", dest_reg, integer_value(source))
        elif is_float_literal(source):
            label = self.base.data_manager.intern_literal(SemanticType.FLOAT, source)
            self.base.emit("lw", dest_reg, label, comment=f"float {source}")
        elif is_text_literal(source):
            label = self.base.data_manager.intern_literal(SemanticType.STRING, source)
            self.base.emit("la", dest_reg, label)
        else:
            src_reg = self.base.materialize(source)
            if src_reg != dest_reg:
                self.base.emit("move", dest_reg, src_reg)
            else:
                logger.debug("elided self-move %s = %s in %s", target, source, dest_reg)

        self.base.store_back(target, dest_reg)
