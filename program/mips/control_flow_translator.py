"""
Control flow translation from TAC to MIPS assembly.

This module handles the translation of control flow instructions including:
- Unconditional jumps (goto)
- Conditional branches (if-goto)
- Labels and comment lines
- Lines the backend cannot translate (diagnostics)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from tac.instruction import (
    CommentInstruction,
    ConditionalGotoInstruction,
    GotoInstruction,
    LabelInstruction,
    MalformedInstruction,
    UnsupportedInstruction,
)

from .expression_translator import BINARY_TEMPLATES
from .instruction import MIPSInstruction

if TYPE_CHECKING:
    from .translator_base import MIPSTranslatorBase


class ControlFlowTranslator:
    """
    Translates TAC control flow instructions to MIPS assembly.

    This class handles:
    - Unconditional jumps: goto L → j L
    - Conditional branches:
      * if x goto L → bnez $rx, L
      * if x < y goto L → slt $v1, $rx, $ry + bnez $v1, L
      * the other relational operators use the same comparison templates
        as assignments, evaluated into the first scratch register
    - Label emission: L: → L:
    """

    def __init__(self, translator_base: MIPSTranslatorBase):
        self.base = translator_base

    def translate_label(self, instruction: LabelInstruction) -> None:
        self.base.emit_label(instruction.label)

    def translate_comment(self, instruction: CommentInstruction) -> None:
        self.base.emit_comment(instruction.comment)

    def translate_goto(self, instruction: GotoInstruction) -> None:
        """
        Translate unconditional goto to MIPS jump.

        TAC: goto L
        MIPS: j L
        """
        label = instruction.label
        self.base.label_manager.reference_label(label)
        self.base.emit("j", label)

    def translate_conditional_goto(self, instruction: ConditionalGotoInstruction) -> None:
        """
        Translate conditional goto to MIPS branch.

        Handles two forms:
        1. Simple condition: if x goto L
           → materialize x
           → bnez $rx, L
        2. Relational condition: if x < y goto L
           → comparison into the first scratch register
           → bnez $v1, L

        Branch targets may be defined later in the program.
        """
        label = instruction.label
        self.base.label_manager.reference_label(label)

        if instruction.operator and instruction.operand2:
            condition_reg = self._evaluate_relation(instruction)
            if condition_reg is None:
                return
        else:
            condition_reg = self.base.materialize(instruction.condition, self.base.scratch(0))

        self.base.emit_text(
            MIPSInstruction("bnez", (condition_reg, label), comment=f"branch to {label}")
        )

    def _evaluate_relation(self, instruction: ConditionalGotoInstruction) -> Optional[str]:
        template = BINARY_TEMPLATES.get(instruction.operator)
        if template is None:
            self.base.emit_diagnostic(
                f"unsupported condition operator '{instruction.operator}' in: {instruction}"
            )
            return None

        result_reg = self.base.scratch(0)
        left_reg = self.base.materialize(instruction.condition, self.base.scratch(0))
        right_reg = self.base.materialize(instruction.operand2, self.base.scratch(1))
        self.base.emit_text_many(template(result_reg, left_reg, right_reg))
        return result_reg

    def translate_malformed(self, instruction: MalformedInstruction) -> None:
        self.base.emit_diagnostic(f"malformed instruction ({instruction.reason}): {instruction.text}")

    def translate_unsupported(self, instruction: UnsupportedInstruction) -> None:
        self.base.emit_diagnostic(f"unsupported instruction: {instruction.text}")
