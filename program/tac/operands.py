"""
Lexical helpers for TAC operands.

TAC operands arrive as raw text: names (``x``, ``t3``), integer and float
literals, ``true``/``false``, quoted characters and quoted strings.  These
helpers classify that text so the parser and the MIPS backend agree on what
counts as a literal.
"""

from __future__ import annotations

import re
from typing import Optional

INTEGER_RE = re.compile(r"-?\d+")
FLOAT_RE = re.compile(r"-?(\d+\.\d*|\.\d+)([eE][-+]?\d+)?")
IDENTIFIER_RE = re.compile(r"[A-Za-z_][\w.]*")

BINARY_OPERATORS = ("+", "-", "*", "/", "&&", "||", "==", "!=", "<", "<=", ">", ">=")
RELATIONAL_OPERATORS = ("==", "!=", "<", "<=", ">", ">=")
LOGICAL_OPERATORS = ("&&", "||")
UNARY_OPERATORS = ("-", "!")

# Tokens built only from these characters are treated as operators, so that
# `x = a % b` is recognised as an (unsupported) binary operation.
OPERATOR_CHARS = frozenset("+-*/%&|^<>=!~")


def is_integer_literal(token: Optional[str]) -> bool:
    return token is not None and INTEGER_RE.fullmatch(token) is not None


def is_boolean_literal(token: Optional[str]) -> bool:
    return token is not None and token.lower() in ("true", "false")


def is_float_literal(token: Optional[str]) -> bool:
    return token is not None and FLOAT_RE.fullmatch(token) is not None


def is_char_literal(token: Optional[str]) -> bool:
    """``'a'`` style literal holding exactly one character."""
    return (
        token is not None
        and len(token) == 3
        and token[0] == "'"
        and token[-1] == "'"
    )


def is_quoted_string(token: Optional[str]) -> bool:
    return token is not None and len(token) >= 2 and token[0] == '"' and token[-1] == '"'


def is_text_literal(token: Optional[str]) -> bool:
    """Quoted text, or unquoted text spanning several tokens."""
    if not token:
        return False
    return is_quoted_string(token) or any(ch.isspace() for ch in token)


def is_identifier(token: Optional[str]) -> bool:
    return token is not None and IDENTIFIER_RE.fullmatch(token) is not None


def is_operator_token(token: str) -> bool:
    return bool(token) and all(ch in OPERATOR_CHARS for ch in token)


def integer_value(token: str) -> str:
    """
    Immediate text for an integer-like literal.

    ``true``/``false`` become ``1``/``0``, ``'c'`` becomes its code point and
    integers are returned unchanged.
    """
    lowered = token.lower()
    if lowered == "true":
        return "1"
    if lowered == "false":
        return "0"
    if is_char_literal(token):
        return str(ord(token[1]))
    return token


def strip_quotes(token: str) -> str:
    if is_quoted_string(token):
        return token[1:-1]
    return token


def find_assignment(line: str) -> int:
    """
    Index of the first top-level ``=`` in *line*, or -1.

    An ``=`` that belongs to ``==``, ``!=``, ``<=`` or ``>=`` does not count,
    nor does one inside single or double quotes (a backslash escapes the
    next character inside quotes).
    """
    quote = None
    escaped = False
    for index, ch in enumerate(line):
        if quote:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
            continue
        if ch in ("'", '"'):
            quote = ch
            continue
        if ch != "=":
            continue
        prev = line[index - 1] if index > 0 else ""
        nxt = line[index + 1] if index + 1 < len(line) else ""
        if prev in ("=", "!", "<", ">") or nxt == "=":
            continue
        return index
    return -1
