"""
Stack-based calling convention for TAC calls.

Arguments never travel in $a0-$a3.  Every argument is pushed on the stack
in buffer order and popped by the caller after the call returns:

    param x              (buffered, no code)
    param 5              (buffered, no code)
    t1 = call f, 2
        ↓
    lw    $s0, x          # load x
    addiu $sp, $sp, -4
    sw    $s0, 0($sp)
    li    $v1, 5
    addiu $sp, $sp, -4
    sw    $v1, 0($sp)
    jal   f
    addiu $sp, $sp, 8     # pop 2 arguments
    sw    $v0, t1

Register usage:
┌──────────────┬────────────────────────────────────┐
│ Register     │ Usage                              │
├──────────────┼────────────────────────────────────┤
│ $v0          │ Return value                       │
│ $sp          │ Argument stack (grows downward)    │
│ $ra          │ Return address (set by jal)        │
└──────────────┴────────────────────────────────────┘

No registers are saved across the call; pooled values that must survive a
call should be memory-backed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List

from tac.instruction import CallInstruction, ParamInstruction, ReturnInstruction
from tac.operands import integer_value, is_boolean_literal, is_char_literal, is_integer_literal

from .config import RETURN_ADDRESS, RETURN_REGISTER, STACK_POINTER
from .instruction import MIPSInstruction
from .symbol_table import SemanticType

if TYPE_CHECKING:
    from .translator_base import MIPSTranslatorBase

logger = logging.getLogger(__name__)


def push_instructions(register: str, word_size: int = 4) -> List[MIPSInstruction]:
    """Push one word: addiu $sp, $sp, -4 / sw reg, 0($sp)"""
    return [
        MIPSInstruction("addiu", (STACK_POINTER, STACK_POINTER, str(-word_size))),
        MIPSInstruction("sw", (register, f"0({STACK_POINTER})"), comment=f"push {register}"),
    ]


def pop_instructions(count: int, word_size: int = 4) -> List[MIPSInstruction]:
    """Release `count` pushed words in one adjustment."""
    if count <= 0:
        return []
    noun = "argument" if count == 1 else "arguments"
    return [
        MIPSInstruction(
            "addiu",
            (STACK_POINTER, STACK_POINTER, str(count * word_size)),
            comment=f"pop {count} {noun}",
        )
    ]


class CallingConvention:
    """
    Translates `param`, `call` and `return` lines.

    The pending parameters live in the context's ParamBuffer so that a
    `call` can consume whatever the preceding `param` lines queued.
    """

    def __init__(self, translator_base: MIPSTranslatorBase):
        self.base = translator_base

    @property
    def word_size(self) -> int:
        return self.base.config.word_size

    def translate_param(self, instruction: ParamInstruction) -> None:
        self.base.param_buffer.append(instruction.param)

    def resolve_count(self, instruction: CallInstruction) -> int:
        """Number of arguments to pass: the explicit count, else the whole buffer."""
        buffered = len(self.base.param_buffer)
        if instruction.param_count is not None:
            count = instruction.param_count
        elif instruction.raw_count is not None:
            self.base.emit_diagnostic(
                f"non-numeric argument count '{instruction.raw_count}' in: {instruction};"
                f" passing {buffered} buffered parameters"
            )
            count = buffered
        else:
            count = buffered

        if count > buffered:
            logger.warning(
                "call %s expects %d arguments but only %d were queued",
                instruction.function,
                count,
                buffered,
            )
        return count

    def translate_call(self, instruction: CallInstruction) -> None:
        """
        TAC:  [dest =] call f, n
        MIPS: push the last n queued params, jal f, pop n words,
              then store $v0 into dest when there is one.
        """
        count = self.resolve_count(instruction)
        buffer = self.base.param_buffer
        arguments = buffer[-count:] if count > 0 else []

        for argument in arguments:
            register = self.base.materialize(argument, self.base.scratch(0))
            self.base.emit_text_many(push_instructions(register, self.word_size))

        self.base.label_manager.reference_label(instruction.function)
        self.base.emit("jal", instruction.function, comment=f"call {instruction.function}")
        self.base.emit_text_many(pop_instructions(count, self.word_size))
        buffer.clear()

        if instruction.target:
            self.base.symbol_table.declare(instruction.target, SemanticType.INT)
            self.base.store_back(instruction.target, RETURN_REGISTER)

    def translate_return(self, instruction: ReturnInstruction) -> None:
        """
        TAC:  return [x]
        MIPS: li $v0, k  |  move $v0, $rx   (when there is a value)
              jr $ra
        """
        value = instruction.value
        if value:
            if is_integer_literal(value) or is_boolean_literal(value) or is_char_literal(value):
                self.base.emit("li", RETURN_REGISTER, integer_value(value))
            else:
                register = self.base.materialize(value, RETURN_REGISTER)
                if register != RETURN_REGISTER:
                    self.base.emit("move", RETURN_REGISTER, register)
        self.base.emit("jr", RETURN_ADDRESS)
