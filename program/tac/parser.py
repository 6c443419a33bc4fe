"""
TAC line parser.

Turns the textual three-address code emitted by the front end into
instruction objects from :mod:`tac.instruction`.  Classification is priority
ordered and the first matching rule wins:

    1. declarations          declare x:int / declare_arr a[4] int
    2. labels                L1:
    3. comments / meta       // text, # text, #! meta, begin_main, end_main
    4. unconditional jumps   goto L1
    5. conditional jumps     if t1 goto L1
    6. assignments           x = y op z, x = -y, x = call f, 2, x = a[i], x = y
    7. array stores          astore a, i, v
    8. array zero fill       arr_pad_zero a, start, end
    9. call protocol / I/O   param x, call f, 2, return x, print x, read x
   10. fallback              any other line with a top-level `=` is an
                             assignment; everything else is unsupported

The parser never raises on bad input.  Lines with a recognised keyword but a
broken shape become :class:`MalformedInstruction` so the backend can leave a
diagnostic comment in the generated assembly.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

from .instruction import (
    ArrayLoadInstruction,
    ArrayStoreInstruction,
    ArrayZeroFillInstruction,
    AssignInstruction,
    CallInstruction,
    CommentInstruction,
    ConditionalGotoInstruction,
    DeclareArrayInstruction,
    DeclareInstruction,
    GotoInstruction,
    LabelInstruction,
    MalformedInstruction,
    ParamInstruction,
    PrintInstruction,
    ReadInstruction,
    ReturnInstruction,
    TACInstruction,
    UnsupportedInstruction,
)
from .operands import (
    UNARY_OPERATORS,
    find_assignment,
    is_char_literal,
    is_float_literal,
    is_identifier,
    is_integer_literal,
    is_operator_token,
    is_quoted_string,
)

logger = logging.getLogger(__name__)

DECLARE_PATTERN = re.compile(r"declare(_global)?\s+([^:\s]+)\s*:\s*(\w+)", re.IGNORECASE)
DECLARE_ARRAY_PATTERN = re.compile(
    r"declare(_global)?_arr\s+(\w+)\s*\[\s*(\d+)\s*\]\s+(\w+)", re.IGNORECASE
)
ARRAY_READ_PATTERN = re.compile(r"(\S+?)\[(.+)\]")

META_LINES = ("begin_main", "end_main")


class TACParser:
    """Parses TAC text into instruction objects, one per non-blank line."""

    def parse_lines(self, tac_lines: Iterable[str]) -> List[TACInstruction]:
        instructions = []
        for raw_line in tac_lines:
            if raw_line is None:
                continue
            line = raw_line.strip()
            if not line:
                continue
            instructions.append(self.parse_line(line))
        return instructions

    def parse_line(self, line: str) -> TACInstruction:
        """Classify a single stripped, non-empty TAC line."""
        instruction = (
            self._parse_declaration(line)
            or self._parse_label(line)
            or self._parse_comment(line)
            or self._parse_goto(line)
            or self._parse_conditional(line)
            or self._parse_assignment(line, strict=True)
            or self._parse_keyword(line)
            or self._parse_assignment(line, strict=False)
        )
        if instruction is None:
            instruction = UnsupportedInstruction(line)
        logger.debug("parsed %r as %s", line, type(instruction).__name__)
        return instruction

    # ------------------------------------------------------------------ #
    # Individual rules
    # ------------------------------------------------------------------ #

    def _parse_declaration(self, line: str) -> Optional[TACInstruction]:
        match = DECLARE_ARRAY_PATTERN.fullmatch(line)
        if match:
            return DeclareArrayInstruction(
                match.group(2),
                int(match.group(3)),
                match.group(4),
                is_global=match.group(1) is not None,
            )
        match = DECLARE_PATTERN.fullmatch(line)
        if match:
            return DeclareInstruction(
                match.group(2).strip(),
                match.group(3),
                is_global=match.group(1) is not None,
            )
        return None

    def _parse_label(self, line: str) -> Optional[TACInstruction]:
        if line.endswith(":") and not line.startswith(("#", "//")):
            return LabelInstruction(line[:-1].strip())
        return None

    def _parse_comment(self, line: str) -> Optional[TACInstruction]:
        if line.startswith("//"):
            return CommentInstruction(line[2:].strip())
        if line.startswith("#"):
            return CommentInstruction(line[1:].strip())
        if line in META_LINES:
            return CommentInstruction(line)
        return None

    def _parse_goto(self, line: str) -> Optional[TACInstruction]:
        keyword, rest = _split_keyword(line)
        if keyword != "goto":
            return None
        if not rest or len(rest.split()) != 1:
            return MalformedInstruction(line, "goto without a single target label")
        return GotoInstruction(rest)

    def _parse_conditional(self, line: str) -> Optional[TACInstruction]:
        keyword, rest = _split_keyword(line)
        if keyword != "if":
            return None
        tokens = rest.split()
        if "goto" not in tokens:
            return MalformedInstruction(line, "conditional jump without goto")
        goto_index = tokens.index("goto")
        condition = tokens[:goto_index]
        target = tokens[goto_index + 1:]
        if not condition:
            return MalformedInstruction(line, "conditional jump without condition")
        if len(target) != 1:
            return MalformedInstruction(line, "conditional jump without a single target label")
        if len(condition) == 3 and is_operator_token(condition[1]):
            return ConditionalGotoInstruction(
                condition[0], target[0], operand2=condition[2], operator=condition[1]
            )
        return ConditionalGotoInstruction(" ".join(condition), target[0])

    def _parse_assignment(self, line: str, *, strict: bool) -> Optional[TACInstruction]:
        position = find_assignment(line)
        if position <= 0:
            return None
        target = line[:position].strip()
        value = line[position + 1:].strip()
        if strict and not is_identifier(target):
            return None
        if not value:
            return MalformedInstruction(line, "assignment without a value")
        return self._parse_rhs(line, target, value)

    def _parse_rhs(self, line: str, target: str, value: str) -> TACInstruction:
        keyword, rest = _split_keyword(value)
        if keyword == "call":
            return self._parse_call(line, rest, target)

        if is_quoted_string(value) or is_char_literal(value):
            return AssignInstruction(target, value)

        tokens = value.split()
        if len(tokens) == 3 and is_operator_token(tokens[1]) and not is_operator_token(tokens[0]):
            return AssignInstruction(target, tokens[0], tokens[1], tokens[2])

        match = ARRAY_READ_PATTERN.fullmatch(value)
        if match and is_identifier(match.group(1)):
            return ArrayLoadInstruction(target, match.group(1), match.group(2).strip())

        if is_integer_literal(value) or is_float_literal(value):
            return AssignInstruction(target, value)

        if len(value) > 1 and value[0] in UNARY_OPERATORS and value[1] != "=":
            operand = value[1:].strip()
            if operand and len(operand.split()) == 1:
                return AssignInstruction(target, operand, value[0])

        return AssignInstruction(target, value)

    def _parse_keyword(self, line: str) -> Optional[TACInstruction]:
        keyword, rest = _split_keyword(line)

        if keyword == "astore":
            parts = _split_operands(rest, 3)
            if parts is None:
                return MalformedInstruction(line, "astore expects <array>, <index>, <value>")
            return ArrayStoreInstruction(*parts)

        if keyword == "arr_pad_zero":
            parts = _split_operands(rest, 3)
            if parts is None:
                return MalformedInstruction(line, "arr_pad_zero expects <array>, <start>, <end>")
            return ArrayZeroFillInstruction(*parts)

        if keyword == "param":
            if not rest:
                return MalformedInstruction(line, "param without an operand")
            return ParamInstruction(rest)

        if keyword == "call":
            return self._parse_call(line, rest, None)

        if keyword == "return":
            return ReturnInstruction(rest or None)

        if keyword == "print":
            if not rest:
                return MalformedInstruction(line, "print without an argument")
            return PrintInstruction(rest)

        if keyword == "read":
            if not rest or not is_identifier(rest):
                return MalformedInstruction(line, "read without a destination")
            return ReadInstruction(rest)

        return None

    def _parse_call(self, line: str, rest: str, target: Optional[str]) -> TACInstruction:
        name, _, count = rest.partition(",")
        name = name.strip()
        count = count.strip()
        if not name:
            return MalformedInstruction(line, "call without a function name")
        if not count:
            return CallInstruction(name, None, target)
        if is_integer_literal(count) and int(count) >= 0:
            return CallInstruction(name, int(count), target)
        return CallInstruction(name, None, target, raw_count=count)


def _split_keyword(line: str):
    parts = line.split(None, 1)
    keyword = parts[0] if parts else ""
    rest = parts[1].strip() if len(parts) > 1 else ""
    return keyword, rest


def _split_operands(text: str, count: int) -> Optional[List[str]]:
    parts = [part.strip() for part in text.split(",", count - 1)]
    if len(parts) != count or not all(parts):
        return None
    return parts


def parse_tac(tac_lines: Iterable[str]) -> List[TACInstruction]:
    """Convenience wrapper around :meth:`TACParser.parse_lines`."""
    return TACParser().parse_lines(tac_lines)
