"""
TAC (Three Address Code) Module

This module provides the intermediate representation consumed by the MIPS
backend: the instruction classes and the parser that builds them from the
textual TAC the front end writes.

Main components:
- instruction: TAC instruction classes
- operands: literal and operator predicates shared with the backend
- parser: priority-ordered line classification
"""

from .instruction import (
    TACInstruction,
    DeclareInstruction,
    DeclareArrayInstruction,
    LabelInstruction,
    CommentInstruction,
    GotoInstruction,
    ConditionalGotoInstruction,
    AssignInstruction,
    ArrayLoadInstruction,
    ArrayStoreInstruction,
    ArrayZeroFillInstruction,
    ParamInstruction,
    CallInstruction,
    ReturnInstruction,
    PrintInstruction,
    ReadInstruction,
    MalformedInstruction,
    UnsupportedInstruction,
)

from .parser import TACParser, parse_tac

__all__ = [
    'TACInstruction',
    'DeclareInstruction',
    'DeclareArrayInstruction',
    'LabelInstruction',
    'CommentInstruction',
    'GotoInstruction',
    'ConditionalGotoInstruction',
    'AssignInstruction',
    'ArrayLoadInstruction',
    'ArrayStoreInstruction',
    'ArrayZeroFillInstruction',
    'ParamInstruction',
    'CallInstruction',
    'ReturnInstruction',
    'PrintInstruction',
    'ReadInstruction',
    'MalformedInstruction',
    'UnsupportedInstruction',
    'TACParser',
    'parse_tac',
]
